"""Order models for mock backend"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, Optional
from datetime import datetime
from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    SSLCOMMERZ = "sslcommerz"
    BKASH = "bkash"
    NAGAD = "nagad"
    CASH_ON_DELIVERY = "cash_on_delivery"


class CreateOrderRequest(BaseModel):
    """Request to place an order from the current cart"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    payment_method: str
    notes: Optional[str] = None
    shipping_address: Optional[Any] = None


class OrderItem(BaseModel):
    """Item in an order"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    product_id: str
    name: str
    type: str
    price: float
    quantity: int
    item_total: float


class Order(BaseModel):
    """Placed order"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(alias="_id")
    order_id: str
    user_id: str
    status: OrderStatus = OrderStatus.PENDING
    items: list[OrderItem]
    subtotal: float
    discount: float
    shipping: float
    total: float
    coupon_code: Optional[str] = None
    payment_method: PaymentMethod
    shipping_address: Optional[Any] = None
    notes: Optional[str] = None
    created_at: datetime
