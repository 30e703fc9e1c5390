# Mock Backend Models

from .product import Product, ProductSnapshot, ProductType
from .coupon import Coupon, DiscountType
from .cart import Cart, CartItem, AddToCartRequest, UpdateCartItemRequest, ApplyCouponRequest
from .order import Order, OrderItem, OrderStatus, PaymentMethod, CreateOrderRequest

__all__ = [
    "Product",
    "ProductSnapshot",
    "ProductType",
    "Coupon",
    "DiscountType",
    "Cart",
    "CartItem",
    "AddToCartRequest",
    "UpdateCartItemRequest",
    "ApplyCouponRequest",
    "Order",
    "OrderItem",
    "OrderStatus",
    "PaymentMethod",
    "CreateOrderRequest",
]
