"""Cart storage for mock backend"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from ..models.cart import Cart, CartItem
from ..models.product import Product
from .coupons import coupon_db
from .products import product_db

logger = logging.getLogger(__name__)


class CartDatabase:
    """In-memory cart storage, one cart per user"""

    def __init__(self):
        self.carts: dict[str, Cart] = {}

    def get_cart(self, user_id: str) -> Cart:
        """Get a user's cart, creating an empty one on first use"""
        cart = self.carts.get(user_id)
        if cart is None:
            cart = Cart(user_id=user_id, items=[], updated_at=datetime.now(timezone.utc))
            self.carts[user_id] = cart
        return cart

    def find_item(self, cart: Cart, product_id: str) -> Optional[CartItem]:
        return next((item for item in cart.items if item.product_id == product_id), None)

    def add_item(self, user_id: str, product: Product, quantity: int = 1) -> Cart:
        """Add an item; an existing line for the same product grows"""
        cart = self.get_cart(user_id)
        existing_item = self.find_item(cart, product.id)

        if existing_item:
            existing_item.quantity += quantity
        else:
            cart.items.append(
                CartItem(
                    product_id=product.id,
                    product_snapshot=product.snapshot(),
                    price=product.price,
                    quantity=quantity,
                )
            )

        self._recalculate_totals(cart)
        return cart

    def update_item_quantity(self, user_id: str, product_id: str, quantity: int) -> Optional[Cart]:
        """Update item quantity; None if the product is not in the cart"""
        cart = self.get_cart(user_id)
        item = self.find_item(cart, product_id)
        if not item:
            return None

        if quantity <= 0:
            cart.items = [i for i in cart.items if i.product_id != product_id]
        else:
            item.quantity = quantity

        self._recalculate_totals(cart)
        return cart

    def remove_item(self, user_id: str, product_id: str) -> Optional[Cart]:
        """Remove an item from the cart"""
        return self.update_item_quantity(user_id, product_id, 0)

    def clear_cart(self, user_id: str) -> Cart:
        """Clear all items and any coupon"""
        cart = self.get_cart(user_id)
        cart.items = []
        cart.coupon_code = None
        self._recalculate_totals(cart)
        return cart

    def set_coupon(self, user_id: str, code: Optional[str]) -> Cart:
        cart = self.get_cart(user_id)
        cart.coupon_code = code
        self._recalculate_totals(cart)
        return cart

    def reset(self) -> None:
        self.carts.clear()

    def _recalculate_totals(self, cart: Cart) -> None:
        """Recalculate cart totals and re-check coupon eligibility"""
        cart.subtotal = round(sum(item.price * item.quantity for item in cart.items), 2)

        if cart.coupon_code and not coupon_db.is_eligible(cart.coupon_code, cart.subtotal):
            logger.info(f"Coupon {cart.coupon_code} no longer applies to cart of {cart.user_id}")
            cart.coupon_code = None

        coupon = coupon_db.get_coupon(cart.coupon_code) if cart.coupon_code else None
        cart.discount = coupon.discount_for(cart.subtotal) if coupon else 0.0
        cart.total = round(cart.subtotal - cart.discount, 2)
        cart.updated_at = datetime.now(timezone.utc)


def serialize_cart(cart: Cart) -> dict[str, Any]:
    """
    Cart as the storefront client sees it.

    Products still on sale are expanded; withdrawn ones are sent as a bare
    id and the client falls back to the snapshot.
    """
    items = []
    for item in cart.items:
        product = product_db.get_product(item.product_id)
        items.append({
            "product": product.model_dump(by_alias=True, mode="json") if product else item.product_id,
            "productSnapshot": item.product_snapshot.model_dump(mode="json"),
            "price": item.price,
            "quantity": item.quantity,
        })

    coupon = coupon_db.get_coupon(cart.coupon_code) if cart.coupon_code else None

    return {
        "user": cart.user_id,
        "items": items,
        "subtotal": cart.subtotal,
        "discount": cart.discount,
        "total": cart.total,
        "coupon": coupon.model_dump(by_alias=True, mode="json") if coupon else None,
        "lastUpdated": cart.updated_at.isoformat(),
    }


# Singleton instance
cart_db = CartDatabase()
