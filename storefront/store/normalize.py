"""
Cart snapshot normalization

The one place a raw backend cart payload becomes a CartSnapshot. Every
cart operation goes through ``normalize_cart`` so the derived fields are
always computed the same way.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..models.cart import CartLine, CartSnapshot, Coupon, ProductSnapshot

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """Coerce a backend amount to Decimal; non-numeric becomes 0"""
    if isinstance(value, bool) or value is None:
        return ZERO
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return ZERO
    if not amount.is_finite():
        return ZERO
    return amount


def to_quantity(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    try:
        return int(to_decimal(value))
    except (ValueError, OverflowError):
        return 0


def unwrap_payload(payload: Any) -> dict[str, Any]:
    """Return the cart object whether or not it is wrapped under ``data``"""
    if isinstance(payload, dict):
        data = payload.get("data")
        if isinstance(data, dict):
            return data
        return payload
    return {}


def _parse_timestamp(value: Any, now: datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            logger.debug(f"Unparseable lastUpdated {value!r}, using local time")
    return now


def _parse_snapshot(raw: Any) -> Optional[ProductSnapshot]:
    if not isinstance(raw, dict):
        return None
    return ProductSnapshot(
        name=raw.get("name"),
        thumbnail=raw.get("thumbnail"),
        type=raw.get("type"),
    )


def _parse_line(raw: Any) -> Optional[CartLine]:
    if not isinstance(raw, dict):
        return None

    quantity = to_quantity(raw.get("quantity"))
    if quantity < 1:
        logger.warning(f"Dropping cart line with quantity {raw.get('quantity')!r}")
        return None

    product = raw.get("product")
    if not isinstance(product, dict):
        product = str(product) if product is not None else ""

    return CartLine(
        product=product,
        price=max(to_decimal(raw.get("price")), ZERO),
        quantity=quantity,
        product_snapshot=_parse_snapshot(raw.get("productSnapshot")),
    )


def parse_coupon(raw: Any) -> Optional[Coupon]:
    """Accept a bare code string or an object carrying ``code``"""
    if not raw:
        return None
    if isinstance(raw, str):
        return Coupon(code=raw)
    if isinstance(raw, dict):
        code = raw.get("code")
        return Coupon(code=str(code) if code else None, details=dict(raw))
    return None


def normalize_cart(payload: Any, now: Optional[datetime] = None) -> CartSnapshot:
    """
    Build a CartSnapshot from a raw cart response.

    ``total`` is the backend's value when it is positive, otherwise
    ``subtotal - discount``. ``discount`` never exceeds ``subtotal`` and no
    amount is negative.
    """
    now = now or datetime.now(timezone.utc)
    cart = unwrap_payload(payload)

    raw_items = cart.get("items")
    if not isinstance(raw_items, (list, tuple)):
        if raw_items:
            logger.warning(f"Ignoring non-list cart items {raw_items!r}")
        raw_items = []
    items = tuple(
        line for line in (_parse_line(raw) for raw in raw_items) if line is not None
    )

    subtotal = max(to_decimal(cart.get("subtotal")), ZERO)
    discount = min(max(to_decimal(cart.get("discount")), ZERO), subtotal)
    backend_total = to_decimal(cart.get("total"))
    total = backend_total if backend_total > ZERO else subtotal - discount

    return CartSnapshot(
        items=items,
        subtotal=subtotal,
        discount=discount,
        total=total,
        coupon=parse_coupon(cart.get("coupon")),
        last_updated=_parse_timestamp(cart.get("lastUpdated"), now),
        item_count=sum(line.quantity for line in items),
    )


def normalize_coupon_code(code: Optional[str]) -> str:
    """Coupon codes are case-insensitive; submit them trimmed and upper-cased"""
    return (code or "").strip().upper()
