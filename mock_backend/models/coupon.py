"""Coupon models for mock backend"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class Coupon(BaseModel):
    """Discount code"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    code: str
    discount_type: DiscountType
    discount_value: float = Field(gt=0)
    min_purchase: float = 0.0
    max_discount: Optional[float] = None
    expires_at: Optional[datetime] = None
    is_active: bool = True

    def discount_for(self, subtotal: float) -> float:
        """Discount on ``subtotal``, never more than the subtotal itself"""
        if self.discount_type == DiscountType.PERCENTAGE:
            amount = subtotal * self.discount_value / 100
            if self.max_discount is not None:
                amount = min(amount, self.max_discount)
        else:
            amount = self.discount_value
        return round(min(amount, subtotal), 2)
