"""
Storefront cart client

Client-side cart pricing and synchronization for the book/ebook storefront:
a cached cart kept in step with the backend, per-line quantity controls,
coupon entry, and checkout totals for mixed physical/digital carts.
"""

from .core.session import StorefrontSession
from .services.api_client import StorefrontClient
from .store.cart_store import CartStore

__version__ = "1.0.0"

__all__ = ["StorefrontSession", "StorefrontClient", "CartStore"]
