"""
Per-line quantity controls

Tracks which cart lines have a request in flight so a line's buttons can be
disabled while it is being updated or removed. The busy table lives beside
the store, not inside the snapshot, so swapping snapshots never loses it.
"""

import logging
from enum import Enum

from .cart_store import CartStore

logger = logging.getLogger(__name__)


class LineActivity(str, Enum):
    IDLE = "idle"
    UPDATING = "updating"
    REMOVING = "removing"


class CartLineControls:
    """Quantity stepper and remove button logic for every cart line"""

    def __init__(self, store: CartStore):
        self.store = store
        self._activity: dict[str, LineActivity] = {}

    def activity(self, product_id: str) -> LineActivity:
        return self._activity.get(str(product_id), LineActivity.IDLE)

    def is_busy(self, product_id: str) -> bool:
        return self.activity(product_id) is not LineActivity.IDLE

    def is_updating(self, product_id: str) -> bool:
        return self.activity(product_id) is LineActivity.UPDATING

    def is_removing(self, product_id: str) -> bool:
        return self.activity(product_id) is LineActivity.REMOVING

    async def increment(self, product_id: str) -> bool:
        line = self.store.find_line(product_id)
        if line is None:
            return False
        return await self.change_quantity(product_id, line.quantity + 1)

    async def decrement(self, product_id: str) -> bool:
        line = self.store.find_line(product_id)
        if line is None:
            return False
        return await self.change_quantity(product_id, line.quantity - 1)

    async def change_quantity(self, product_id: str, quantity: int) -> bool:
        """
        Move a line to ``quantity``.

        Below 1 the line is removed instead. Returns False when nothing was
        sent: the line is busy, or the quantity is unchanged.
        """
        if quantity < 1:
            return await self.remove(product_id)

        if self.is_busy(product_id):
            logger.debug(f"Line {product_id} busy, ignoring quantity change")
            return False

        line = self.store.find_line(product_id)
        if line is not None and line.quantity == quantity:
            return False

        self._activity[str(product_id)] = LineActivity.UPDATING
        try:
            await self.store.update_item_quantity(product_id, quantity)
        finally:
            self._activity.pop(str(product_id), None)
        return True

    async def remove(self, product_id: str) -> bool:
        if self.is_busy(product_id):
            logger.debug(f"Line {product_id} busy, ignoring remove")
            return False

        self._activity[str(product_id)] = LineActivity.REMOVING
        try:
            await self.store.remove_item(product_id)
        finally:
            self._activity.pop(str(product_id), None)
        return True
