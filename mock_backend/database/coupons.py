"""Mock coupon storage"""

from datetime import datetime, timezone
from typing import Optional

from ..models.coupon import Coupon, DiscountType

COUPONS: dict[str, Coupon] = {
    "SAVE10": Coupon(
        code="SAVE10",
        discount_type=DiscountType.PERCENTAGE,
        discount_value=10,
        max_discount=500,
    ),
    "SAVE50": Coupon(
        code="SAVE50",
        discount_type=DiscountType.FIXED,
        discount_value=50,
        min_purchase=300,
    ),
    "WELCOME2020": Coupon(
        code="WELCOME2020",
        discount_type=DiscountType.PERCENTAGE,
        discount_value=20,
        expires_at=datetime(2020, 12, 31, tzinfo=timezone.utc),
    ),
    "RETIRED": Coupon(
        code="RETIRED",
        discount_type=DiscountType.FIXED,
        discount_value=100,
        is_active=False,
    ),
}


class CouponRejected(Exception):
    """Coupon cannot be used on this cart"""

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class CouponDatabase:
    """In-memory coupon storage"""

    def __init__(self):
        self.coupons = COUPONS.copy()

    def get_coupon(self, code: str) -> Optional[Coupon]:
        return self.coupons.get(code.strip().upper())

    def validate(self, code: str, subtotal: float) -> Coupon:
        """Return the coupon if it applies to ``subtotal``, else raise CouponRejected"""
        coupon = self.get_coupon(code)
        if not coupon or not coupon.is_active:
            raise CouponRejected("Invalid coupon code", status_code=404)

        if coupon.expires_at and coupon.expires_at < datetime.now(timezone.utc):
            raise CouponRejected("Coupon has expired")

        if subtotal < coupon.min_purchase:
            raise CouponRejected(
                f"Minimum purchase amount of {coupon.min_purchase:.2f} required for this coupon"
            )

        return coupon

    def is_eligible(self, code: str, subtotal: float) -> bool:
        try:
            self.validate(code, subtotal)
        except CouponRejected:
            return False
        return True

    def reset(self) -> None:
        self.coupons = COUPONS.copy()


# Singleton instance
coupon_db = CouponDatabase()
