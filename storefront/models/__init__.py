# Storefront models

from .cart import CartLine, CartSnapshot, Coupon, ProductSnapshot, EMPTY_CART
from .checkout import OrderPlacement, PaymentMethod, ShippingAddress

__all__ = [
    "CartLine",
    "CartSnapshot",
    "Coupon",
    "ProductSnapshot",
    "EMPTY_CART",
    "OrderPlacement",
    "PaymentMethod",
    "ShippingAddress",
]
