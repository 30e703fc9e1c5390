"""Cart data models"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional, Union

from ..core.constants import ProductType


@dataclass(frozen=True)
class ProductSnapshot:
    """Product display fields frozen at add-time"""
    name: Optional[str] = None
    thumbnail: Optional[str] = None
    type: Optional[str] = None


@dataclass(frozen=True)
class CartLine:
    """One product/quantity/price entry in a cart"""
    # Expanded product object, or a bare product id
    product: Union[dict[str, Any], str]
    price: Decimal
    quantity: int
    product_snapshot: Optional[ProductSnapshot] = None

    @property
    def product_id(self) -> str:
        if isinstance(self.product, dict):
            raw = self.product.get("_id") or self.product.get("id") or ""
            return str(raw)
        return str(self.product or "")

    @property
    def item_total(self) -> Decimal:
        return self.price * self.quantity

    @property
    def name(self) -> str:
        if isinstance(self.product, dict) and self.product.get("name"):
            return self.product["name"]
        if self.product_snapshot and self.product_snapshot.name:
            return self.product_snapshot.name
        return "Product"

    @property
    def product_type(self) -> Optional[str]:
        if isinstance(self.product, dict) and self.product.get("type"):
            return self.product["type"]
        if self.product_snapshot:
            return self.product_snapshot.type
        return None

    @property
    def is_physical(self) -> bool:
        return self.product_type == ProductType.PHYSICAL.value


@dataclass(frozen=True)
class Coupon:
    """Applied coupon; the backend may send a bare code or an object"""
    code: Optional[str] = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def display_code(self) -> str:
        return self.code or "N/A"


@dataclass(frozen=True)
class CartSnapshot:
    """
    Authoritative cart state as last confirmed by the backend.

    Replaced wholesale after every successful operation; never edited in place.
    """
    items: tuple[CartLine, ...] = ()
    subtotal: Decimal = Decimal("0")
    discount: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    coupon: Optional[Coupon] = None
    last_updated: Optional[datetime] = None
    item_count: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.items

    def find_line(self, product_id: str) -> Optional[CartLine]:
        return next(
            (line for line in self.items if line.product_id == str(product_id)),
            None,
        )


EMPTY_CART = CartSnapshot()
