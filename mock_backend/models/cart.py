"""Cart models for mock backend"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime

from .product import ProductSnapshot


class CartItem(BaseModel):
    """Stored cart line; the product is expanded on the way out"""
    product_id: str
    product_snapshot: ProductSnapshot
    price: float
    quantity: int = Field(gt=0)


class Cart(BaseModel):
    """Shopping cart for one user"""
    user_id: str
    items: list[CartItem] = []
    subtotal: float = 0.0
    discount: float = 0.0
    total: float = 0.0
    coupon_code: Optional[str] = None
    updated_at: datetime


class AddToCartRequest(BaseModel):
    """Request to add item to cart"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    product_id: str
    quantity: int = Field(default=1, gt=0)


class UpdateCartItemRequest(BaseModel):
    """Request to update cart item quantity"""
    quantity: int = Field(gt=0)


class ApplyCouponRequest(BaseModel):
    """Request to apply a coupon"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    coupon_code: str = Field(min_length=1)
