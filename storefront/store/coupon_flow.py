"""Coupon entry form logic"""

import logging
from typing import Optional

from ..core.constants import COUPON_REQUIRED_MESSAGE, INVALID_COUPON_MESSAGE
from ..core.errors import StorefrontError, extract_error_message
from .cart_store import CartStore

logger = logging.getLogger(__name__)


class CouponForm:
    """
    Coupon input box state.

    Keeps the typed code on failure so the user can correct it, and clears
    it once the backend accepts the coupon.
    """

    def __init__(self, store: CartStore):
        self.store = store
        self.code = ""
        self.error: Optional[str] = None
        self.is_applying = False

    @property
    def applied_code(self) -> Optional[str]:
        coupon = self.store.coupon
        return coupon.display_code if coupon else None

    @property
    def savings(self):
        return self.store.discount

    @property
    def can_submit(self) -> bool:
        return not (self.is_applying or self.store.is_loading)

    def set_code(self, value: str) -> None:
        self.code = value
        self.error = None

    async def submit(self) -> bool:
        if not self.can_submit:
            logger.debug("Coupon submit ignored while the cart is busy")
            return False

        if not self.code.strip():
            self.error = COUPON_REQUIRED_MESSAGE
            return False

        self.is_applying = True
        self.error = None
        try:
            await self.store.apply_coupon(self.code)
        except StorefrontError as e:
            self.error = extract_error_message(e, fallback=INVALID_COUPON_MESSAGE)
            logger.info(f"Coupon {self.code.strip()!r} rejected: {self.error}")
            return False
        finally:
            self.is_applying = False

        self.code = ""
        return True

    async def remove(self) -> None:
        await self.store.remove_coupon()
