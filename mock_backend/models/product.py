"""Product models for mock backend"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional
from enum import Enum


class ProductType(str, Enum):
    PHYSICAL = "physical"
    DIGITAL = "digital"


class Product(BaseModel):
    """Book or ebook in the catalog"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(alias="_id")
    name: str
    slug: str
    author: str
    price: float = Field(gt=0)
    type: ProductType
    images: list[str] = []
    is_active: bool = True

    def snapshot(self) -> "ProductSnapshot":
        return ProductSnapshot(
            name=self.name,
            thumbnail=self.images[0] if self.images else None,
            type=self.type,
        )


class ProductSnapshot(BaseModel):
    """Display fields frozen when a product is added to a cart"""
    name: str
    thumbnail: Optional[str] = None
    type: ProductType
