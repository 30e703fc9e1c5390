"""Mock product catalog"""

from typing import Optional
from ..models.product import Product, ProductType

PRODUCTS: dict[str, Product] = {
    "book-001": Product(
        id="book-001",
        name="The Pragmatic Programmer (Paperback)",
        slug="the-pragmatic-programmer",
        author="David Thomas, Andrew Hunt",
        price=1200.00,
        type=ProductType.PHYSICAL,
        images=["/uploads/products/pragmatic-programmer.jpg"],
    ),
    "book-002": Product(
        id="book-002",
        name="Clean Code (Hardcover)",
        slug="clean-code",
        author="Robert C. Martin",
        price=950.00,
        type=ProductType.PHYSICAL,
        images=["/uploads/products/clean-code.jpg"],
    ),
    "book-003": Product(
        id="book-003",
        name="Refactoring (Paperback)",
        slug="refactoring",
        author="Martin Fowler",
        price=100.00,
        type=ProductType.PHYSICAL,
        images=["/uploads/products/refactoring.jpg"],
    ),
    "ebook-001": Product(
        id="ebook-001",
        name="Fluent Python (eBook)",
        slug="fluent-python-ebook",
        author="Luciano Ramalho",
        price=450.00,
        type=ProductType.DIGITAL,
        images=["/uploads/products/fluent-python.jpg"],
    ),
    "ebook-002": Product(
        id="ebook-002",
        name="Designing Data-Intensive Applications (eBook)",
        slug="designing-data-intensive-applications-ebook",
        author="Martin Kleppmann",
        price=600.00,
        type=ProductType.DIGITAL,
        images=[],
    ),
}


class ProductDatabase:
    """In-memory product catalog for mock backend"""

    def __init__(self):
        self.products = PRODUCTS.copy()

    def get_product(self, product_id: str) -> Optional[Product]:
        """Get an active product by ID"""
        product = self.products.get(product_id)
        if product and product.is_active:
            return product
        return None

    def deactivate(self, product_id: str) -> bool:
        """Withdraw a product from sale (admin action)"""
        product = self.products.get(product_id)
        if not product:
            return False
        self.products[product_id] = product.model_copy(update={"is_active": False})
        return True

    def reset(self) -> None:
        self.products = PRODUCTS.copy()


# Singleton instance
product_db = ProductDatabase()
