"""Checkout models"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PaymentMethod(str, Enum):
    SSLCOMMERZ = "sslcommerz"
    BKASH = "bkash"
    NAGAD = "nagad"
    CASH_ON_DELIVERY = "cash_on_delivery"


class ShippingAddress(BaseModel):
    """Shipping address for a physical order"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    full_name: str
    phone: str
    address_line1: str
    address_line2: Optional[str] = None
    city: str
    postal_code: str
    country: str = "Bangladesh"


@dataclass(frozen=True)
class OrderPlacement:
    """Outcome of a successful checkout"""
    order_id: Optional[str]
    order: Optional[dict[str, Any]]
    redirect_to: str
