"""
Cart Store

Single authoritative client-side copy of the user's cart. Reads come from
the last confirmed snapshot; writes go to the backend and the response
replaces the snapshot wholesale.
"""

import itertools
import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Awaitable, Callable, Optional, Protocol

from ..core.constants import COUPON_REQUIRED_MESSAGE, UNREADABLE_CART_MESSAGE
from ..core.errors import StorefrontAPIError, StorefrontError, ValidationError
from ..models.cart import CartLine, CartSnapshot, Coupon, EMPTY_CART
from .normalize import normalize_cart, normalize_coupon_code

logger = logging.getLogger(__name__)


class CartAPI(Protocol):
    """The slice of StorefrontClient the store talks to"""

    async def get_cart(self) -> Any: ...
    async def add_to_cart(self, product_id: str, quantity: int = 1) -> Any: ...
    async def update_cart_item(self, product_id: str, quantity: int) -> Any: ...
    async def remove_from_cart(self, product_id: str) -> Any: ...
    async def clear_cart(self) -> Any: ...
    async def apply_coupon(self, coupon_code: str) -> Any: ...
    async def remove_coupon(self) -> Any: ...


@dataclass(frozen=True)
class CartState:
    """Snapshot plus request bookkeeping"""
    snapshot: CartSnapshot = EMPTY_CART
    pending: int = 0
    error: Optional[StorefrontError] = None

    @property
    def is_loading(self) -> bool:
        return self.pending > 0


# ==================== Transitions ====================

def request_started(state: CartState) -> CartState:
    return replace(state, pending=state.pending + 1, error=None)


def request_settled(state: CartState) -> CartState:
    return replace(state, pending=max(state.pending - 1, 0))


def request_failed(state: CartState, error: StorefrontError) -> CartState:
    return replace(state, pending=max(state.pending - 1, 0), error=error)


def snapshot_received(state: CartState, snapshot: CartSnapshot) -> CartState:
    return replace(state, pending=max(state.pending - 1, 0), snapshot=snapshot)


def cart_reset(state: CartState) -> CartState:
    return replace(state, snapshot=EMPTY_CART, error=None)


Listener = Callable[[CartState], None]


class CartStore:
    """
    Cart state container.

    Each operation is tagged with a sequence number; a response that
    settles after a newer one has already been applied is dropped.
    """

    def __init__(self, api: CartAPI):
        self.api = api
        self._state = CartState()
        self._listeners: list[Listener] = []
        self._sequence = itertools.count(1)
        self._applied_seq = 0

    # ==================== Selectors ====================

    @property
    def state(self) -> CartState:
        return self._state

    @property
    def snapshot(self) -> CartSnapshot:
        return self._state.snapshot

    @property
    def items(self) -> tuple[CartLine, ...]:
        return self._state.snapshot.items

    @property
    def item_count(self) -> int:
        return self._state.snapshot.item_count

    @property
    def subtotal(self) -> Decimal:
        return self._state.snapshot.subtotal

    @property
    def discount(self) -> Decimal:
        return self._state.snapshot.discount

    @property
    def total(self) -> Decimal:
        return self._state.snapshot.total

    @property
    def coupon(self) -> Optional[Coupon]:
        return self._state.snapshot.coupon

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def error(self) -> Optional[StorefrontError]:
        return self._state.error

    @property
    def error_message(self) -> Optional[str]:
        return self._state.error.message if self._state.error else None

    def find_line(self, product_id: str) -> Optional[CartLine]:
        return self._state.snapshot.find_line(product_id)

    # ==================== Subscriptions ====================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after every state change; returns an unsubscribe function"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: CartState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                logger.error(f"Cart listener failed: {e}", exc_info=True)

    # ==================== Dispatch ====================

    def _record_failure(self, action: str, seq: int, error: StorefrontError) -> None:
        if seq < self._applied_seq:
            logger.info(
                f"Ignoring stale cart {action} failure "
                f"(seq {seq} older than applied {self._applied_seq}): {error.message}"
            )
            self._set_state(request_settled(self._state))
            return

        logger.warning(f"Cart {action} failed: {error.message}")
        self._set_state(request_failed(self._state, error))

    def _reject(self, error: StorefrontError) -> StorefrontError:
        """Record a locally refused operation; no request is made"""
        logger.info(f"Cart operation refused: {error.message}")
        self._set_state(replace(self._state, error=error))
        return error

    async def _dispatch(
        self,
        action: str,
        call: Callable[[], Awaitable[Any]],
        reduce: Optional[Callable[[Any], CartSnapshot]] = None,
    ) -> CartSnapshot:
        reduce = reduce or normalize_cart
        seq = next(self._sequence)
        self._set_state(request_started(self._state))
        logger.debug(f"Cart {action} started (seq {seq})")

        try:
            payload = await call()
        except StorefrontError as e:
            self._record_failure(action, seq, e)
            raise
        except BaseException:
            self._set_state(request_settled(self._state))
            raise

        try:
            snapshot = reduce(payload)
        except Exception as e:
            logger.error(f"Cart {action} response could not be read: {e}", exc_info=True)
            error = StorefrontAPIError(UNREADABLE_CART_MESSAGE)
            self._record_failure(action, seq, error)
            raise error from e

        if seq < self._applied_seq:
            logger.info(
                f"Discarding stale cart {action} response "
                f"(seq {seq} older than applied {self._applied_seq})"
            )
            self._set_state(request_settled(self._state))
            return self._state.snapshot

        self._applied_seq = seq
        self._set_state(snapshot_received(self._state, snapshot))
        logger.debug(
            f"Cart {action} applied: {snapshot.item_count} items, total {snapshot.total}"
        )
        return snapshot

    # ==================== Operations ====================

    async def fetch_cart(self) -> Optional[CartSnapshot]:
        """
        Refresh the snapshot from the backend.

        A failure keeps the previous snapshot and records the error instead
        of raising, so a transient outage never blanks a rendered cart.
        """
        try:
            return await self._dispatch("fetch", self.api.get_cart)
        except StorefrontError:
            return None

    async def add_item(self, product_id: str, quantity: int = 1) -> CartSnapshot:
        """Add ``quantity`` of a product; the backend merges additively"""
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise self._reject(ValidationError("Quantity must be a positive whole number"))

        return await self._dispatch(
            "add",
            lambda: self.api.add_to_cart(product_id, quantity),
        )

    async def update_item_quantity(self, product_id: str, quantity: int) -> CartSnapshot:
        """
        Set a line's quantity.

        Quantities below 1 are refused and recorded as the store error;
        callers remove the line instead.
        Asking for the quantity already shown does nothing.
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise self._reject(
                ValidationError("Quantity must be at least 1; remove the item instead")
            )

        line = self.find_line(product_id)
        if line is not None and line.quantity == quantity:
            logger.debug(f"Quantity for {product_id} already {quantity}, skipping update")
            return self.snapshot

        return await self._dispatch(
            "update",
            lambda: self.api.update_cart_item(product_id, quantity),
        )

    async def remove_item(self, product_id: str) -> CartSnapshot:
        return await self._dispatch(
            "remove",
            lambda: self.api.remove_from_cart(product_id),
        )

    async def clear_cart(self) -> CartSnapshot:
        """Empty the cart remotely and reset every derived field"""
        return await self._dispatch(
            "clear",
            self.api.clear_cart,
            reduce=lambda _: replace(EMPTY_CART, last_updated=datetime.now(timezone.utc)),
        )

    async def apply_coupon(self, code: str) -> CartSnapshot:
        """Submit a coupon code (trimmed, upper-cased)"""
        coupon_code = normalize_coupon_code(code)
        if not coupon_code:
            raise self._reject(ValidationError(COUPON_REQUIRED_MESSAGE))

        return await self._dispatch(
            "apply-coupon",
            lambda: self.api.apply_coupon(coupon_code),
        )

    async def remove_coupon(self) -> CartSnapshot:
        return await self._dispatch(
            "remove-coupon",
            self.api.remove_coupon,
            reduce=lambda payload: replace(normalize_cart(payload), coupon=None),
        )

    def clear_cart_state(self) -> None:
        """Forget the local cart (logout); no request is made"""
        logger.info("Clearing local cart state")
        # Responses still in flight belong to the previous session
        self._applied_seq = next(self._sequence)
        self._set_state(cart_reset(self._state))
