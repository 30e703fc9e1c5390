# Database modules

from .products import product_db, ProductDatabase
from .coupons import coupon_db, CouponDatabase, CouponRejected
from .carts import cart_db, CartDatabase, serialize_cart
from .orders import order_db, OrderDatabase


def reset_all() -> None:
    """Return every store to its seeded state"""
    product_db.reset()
    coupon_db.reset()
    cart_db.reset()
    order_db.reset()


__all__ = [
    "product_db",
    "ProductDatabase",
    "coupon_db",
    "CouponDatabase",
    "CouponRejected",
    "cart_db",
    "CartDatabase",
    "serialize_cart",
    "order_db",
    "OrderDatabase",
    "reset_all",
]
