"""Storefront session wiring"""

import logging
from typing import Optional

import httpx

from .config import Settings, get_settings
from ..services.api_client import StorefrontClient
from ..store.cart_store import CartStore
from ..store.checkout import CheckoutAggregator
from ..store.coupon_flow import CouponForm
from ..store.line_controls import CartLineControls

logger = logging.getLogger(__name__)


class StorefrontSession:
    """
    One signed-in shopper: the API client plus the cart store and the view
    logic built on it. Pass this around instead of reaching for globals.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[StorefrontClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self.client = client or StorefrontClient.from_settings(self.settings, transport=transport)
        self.cart = CartStore(self.client)
        self.line_controls = CartLineControls(self.cart)
        self.coupon_form = CouponForm(self.cart)
        self.checkout = CheckoutAggregator(self.cart, self.client, self.settings)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.client.auth_token)

    async def login(self, token: str) -> None:
        """Adopt a freshly issued token and load the user's cart"""
        self.client.set_auth_token(token)
        logger.info("Session authenticated, loading cart")
        await self.cart.fetch_cart()

    def logout(self) -> None:
        self.client.set_auth_token(None)
        self.cart.clear_cart_state()
        self.coupon_form.set_code("")
        logger.info("Session signed out")

    async def close(self) -> None:
        await self.client.close()
