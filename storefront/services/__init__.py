# Storefront services

from .api_client import StorefrontClient

__all__ = ["StorefrontClient"]
