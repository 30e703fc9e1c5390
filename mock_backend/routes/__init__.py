# Mock Backend Routes

from .cart import router as cart_router
from .orders import router as orders_router

__all__ = ["cart_router", "orders_router"]
