# Cart state and view logic

from .cart_store import CartStore, CartState
from .checkout import CheckoutAggregator, CheckoutSummary, extract_order_id
from .coupon_flow import CouponForm
from .line_controls import CartLineControls, LineActivity
from .normalize import normalize_cart, normalize_coupon_code

__all__ = [
    "CartStore",
    "CartState",
    "CheckoutAggregator",
    "CheckoutSummary",
    "extract_order_id",
    "CouponForm",
    "CartLineControls",
    "LineActivity",
    "normalize_cart",
    "normalize_coupon_code",
]
