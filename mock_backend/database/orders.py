"""Order storage for mock backend"""

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from ..models.cart import Cart
from ..models.order import Order, OrderItem, PaymentMethod
from ..models.product import ProductType

SHIPPING_FEE_PER_PHYSICAL_ITEM = 50.0


class OrderDatabase:
    """In-memory order storage"""

    def __init__(self):
        self.orders: dict[str, Order] = {}

    def create_order(
        self,
        cart: Cart,
        payment_method: PaymentMethod,
        shipping_address: Optional[Any] = None,
        notes: Optional[str] = None,
    ) -> Order:
        """Create an order from a cart"""
        order_items = [
            OrderItem(
                product_id=item.product_id,
                name=item.product_snapshot.name,
                type=item.product_snapshot.type.value,
                price=item.price,
                quantity=item.quantity,
                item_total=round(item.price * item.quantity, 2),
            )
            for item in cart.items
        ]
        physical_lines = sum(1 for item in order_items if item.type == ProductType.PHYSICAL.value)
        shipping = physical_lines * SHIPPING_FEE_PER_PHYSICAL_ITEM

        order = Order(
            id=uuid.uuid4().hex,
            order_id=f"ORD-{uuid.uuid4().hex[:6].upper()}",
            user_id=cart.user_id,
            items=order_items,
            subtotal=cart.subtotal,
            discount=cart.discount,
            shipping=shipping,
            total=round(cart.total + shipping, 2),
            coupon_code=cart.coupon_code,
            payment_method=payment_method,
            shipping_address=shipping_address,
            notes=notes,
            created_at=datetime.now(timezone.utc),
        )

        self.orders[order.id] = order
        return order

    def get_order(self, user_id: str, order_id: str) -> Optional[Order]:
        """Get one of a user's orders by ID"""
        order = self.orders.get(order_id)
        if order and order.user_id == user_id:
            return order
        return None

    def list_orders(self, user_id: str, page: int = 1, limit: int = 10) -> tuple[list[Order], int]:
        """A page of the user's orders, newest first, and the total count"""
        orders = [o for o in self.orders.values() if o.user_id == user_id]
        orders.sort(key=lambda o: o.created_at, reverse=True)
        start = (page - 1) * limit
        return orders[start:start + limit], len(orders)

    def reset(self) -> None:
        self.orders.clear()


# Singleton instance
order_db = OrderDatabase()
