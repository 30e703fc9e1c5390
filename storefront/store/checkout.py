"""
Checkout Aggregator

Combines the cart snapshot with the locally computed shipping fee and
places the order. The shipping fee is never requested from the backend.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, Protocol, Union

from ..core.config import Settings
from ..core.constants import (
    ADDRESS_REQUIRED_MESSAGE,
    PAYMENT_METHOD_REQUIRED_MESSAGE,
    EMPTY_CART_MESSAGE,
    ORDER_LIST_ROUTE,
    ORDER_DETAIL_ROUTE,
)
from ..core.errors import CheckoutValidationError, StorefrontError
from ..core.formatting import format_currency
from ..models.checkout import OrderPlacement, PaymentMethod, ShippingAddress
from .cart_store import CartStore

logger = logging.getLogger(__name__)

AddressInput = Union[ShippingAddress, dict[str, Any], str]


class OrderAPI(Protocol):
    async def create_order(self, order_data: dict) -> Any: ...


@dataclass(frozen=True)
class CheckoutSummary:
    """Totals shown next to the place-order button"""
    subtotal: Decimal
    discount: Decimal
    shipping: Decimal
    total: Decimal
    currency: str

    def lines(self) -> list[tuple[str, str]]:
        rows = [("Subtotal", format_currency(self.subtotal, self.currency))]
        if self.discount > 0:
            rows.append(("Discount", f"-{format_currency(self.discount, self.currency)}"))
        if self.shipping > 0:
            rows.append(("Shipping", format_currency(self.shipping, self.currency)))
        rows.append(("Total", format_currency(self.total, self.currency)))
        return rows


def extract_order_id(result: Any) -> tuple[Optional[str], Optional[dict[str, Any]]]:
    """Find the created order and its id in a direct or ``data``-wrapped response"""
    if not isinstance(result, dict):
        return None, None

    order = result.get("data") if isinstance(result.get("data"), dict) else result
    order_id = order.get("_id") or order.get("id")
    return (str(order_id) if order_id else None), order


def _serialize_address(address: AddressInput) -> Any:
    if isinstance(address, ShippingAddress):
        return address.model_dump(by_alias=True, exclude_none=True)
    return address


class CheckoutAggregator:
    """Shipping, payable total, and order submission for the current cart"""

    def __init__(self, store: CartStore, api: OrderAPI, settings: Settings):
        self.store = store
        self.api = api
        self.settings = settings

    @property
    def physical_line_count(self) -> int:
        return sum(1 for line in self.store.items if line.is_physical)

    @property
    def has_physical_items(self) -> bool:
        return self.physical_line_count > 0

    @property
    def shipping_fee(self) -> Decimal:
        """Flat fee per physical line; digital-only carts ship free"""
        return self.settings.shipping_fee_per_physical_item * self.physical_line_count

    @property
    def payable_total(self) -> Decimal:
        return self.store.total + self.shipping_fee

    def summary(self) -> CheckoutSummary:
        return CheckoutSummary(
            subtotal=self.store.subtotal,
            discount=self.store.discount,
            shipping=self.shipping_fee,
            total=self.payable_total,
            currency=self.settings.currency,
        )

    def validate(
        self,
        payment_method: Optional[Union[PaymentMethod, str]],
        shipping_address: Optional[AddressInput],
    ) -> None:
        """Raise CheckoutValidationError if the order cannot be submitted"""
        if self.store.snapshot.is_empty:
            raise CheckoutValidationError(EMPTY_CART_MESSAGE)

        if self.has_physical_items and not shipping_address:
            raise CheckoutValidationError(ADDRESS_REQUIRED_MESSAGE)

        if not payment_method:
            raise CheckoutValidationError(PAYMENT_METHOD_REQUIRED_MESSAGE)

    def build_order_payload(
        self,
        payment_method: Union[PaymentMethod, str],
        shipping_address: Optional[AddressInput] = None,
        notes: Optional[str] = None,
    ) -> dict[str, Any]:
        """
        Order request body.

        ``shippingAddress`` is only present for carts with physical items;
        digital-only orders omit the key entirely. Blank notes are omitted.
        """
        method = payment_method.value if isinstance(payment_method, PaymentMethod) else payment_method
        payload: dict[str, Any] = {"paymentMethod": method}

        if notes and notes.strip():
            payload["notes"] = notes.strip()

        if self.has_physical_items and shipping_address:
            payload["shippingAddress"] = _serialize_address(shipping_address)

        return payload

    async def place_order(
        self,
        payment_method: Optional[Union[PaymentMethod, str]] = None,
        shipping_address: Optional[AddressInput] = None,
        notes: Optional[str] = None,
    ) -> OrderPlacement:
        """
        Validate, submit the order, then clear the cart.

        Order-creation failures propagate and leave the cart untouched.
        """
        if payment_method is None:
            payment_method = self.settings.default_payment_method

        self.validate(payment_method, shipping_address)
        payload = self.build_order_payload(payment_method, shipping_address, notes)

        logger.info(
            f"Placing order: {self.store.item_count} items, "
            f"shipping {self.shipping_fee}, payable {self.payable_total}"
        )
        result = await self.api.create_order(payload)

        try:
            await self.store.clear_cart()
        except StorefrontError as e:
            # The order exists; the stale cart is recorded on the store and
            # the next fetch reconciles it.
            logger.warning(f"Order placed but cart clear failed: {e.message}")

        order_id, order = extract_order_id(result)
        if order_id:
            redirect_to = ORDER_DETAIL_ROUTE.format(order_id=order_id)
        else:
            logger.warning(f"Order created but no id found in response: {result!r}")
            redirect_to = ORDER_LIST_ROUTE

        return OrderPlacement(order_id=order_id, order=order, redirect_to=redirect_to)
