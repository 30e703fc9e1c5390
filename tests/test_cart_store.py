"""Tests for the cart store against the in-memory fake API."""

import asyncio
from decimal import Decimal

import pytest

from storefront.core.constants import COUPON_REQUIRED_MESSAGE, UNREADABLE_CART_MESSAGE
from storefront.core.errors import ConflictError, NetworkError, StorefrontAPIError, ValidationError
from storefront.store import cart_store
from storefront.store.cart_store import CartStore


class _StaticAPI:
    """Returns the same get_cart payload every time"""

    def __init__(self, payload):
        self.payload = payload

    async def get_cart(self):
        return self.payload


class TestFetch:

    @pytest.mark.asyncio
    async def test_fetch_populates_snapshot(self, store, fake_api):
        fake_api.seed(P1=2, E1=1)

        snapshot = await store.fetch_cart()

        assert snapshot is store.snapshot
        assert store.item_count == 3
        assert store.subtotal == Decimal("280")
        assert store.total == Decimal("280")
        assert store.error is None

    @pytest.mark.asyncio
    async def test_failed_fetch_preserves_items(self, store, fake_api):
        fake_api.seed(P1=1, P2=1, E1=1)
        await store.fetch_cart()
        assert len(store.items) == 3

        fake_api.fail_next(NetworkError())
        result = await store.fetch_cart()

        assert result is None
        assert len(store.items) == 3
        assert isinstance(store.error, NetworkError)
        assert store.error_message == NetworkError.default_message
        assert not store.is_loading

    @pytest.mark.asyncio
    async def test_successful_fetch_clears_previous_error(self, store, fake_api):
        fake_api.fail_next(NetworkError())
        await store.fetch_cart()
        assert store.error is not None

        await store.fetch_cart()
        assert store.error is None

    @pytest.mark.asyncio
    async def test_bare_responses_are_accepted(self):
        from tests.fakes import FakeStorefrontAPI

        api = FakeStorefrontAPI(wrap=False)
        api.seed(P2=2)
        store = CartStore(api)

        await store.fetch_cart()
        assert store.subtotal == Decimal("500")

    @pytest.mark.asyncio
    async def test_non_list_items_read_as_empty_cart(self):
        store = CartStore(_StaticAPI({"success": True, "data": {"items": 5, "subtotal": 0}}))

        snapshot = await store.fetch_cart()

        assert snapshot.is_empty
        assert store.error is None
        assert not store.is_loading

    @pytest.mark.asyncio
    async def test_unreadable_response_is_recorded(self, store, fake_api, monkeypatch):
        fake_api.seed(P1=1)
        await store.fetch_cart()
        before = store.snapshot

        def broken(payload):
            raise TypeError("unexpected cart shape")

        monkeypatch.setattr(cart_store, "normalize_cart", broken)
        result = await store.fetch_cart()

        assert result is None
        assert store.snapshot is before
        assert isinstance(store.error, StorefrontAPIError)
        assert store.error_message == UNREADABLE_CART_MESSAGE
        assert not store.is_loading


class TestAddItem:

    @pytest.mark.asyncio
    async def test_add_then_total(self, store, fake_api):
        await store.add_item("P1", 2)

        assert fake_api.calls == [("add_to_cart", "P1", 2)]
        assert store.subtotal == Decimal("200")
        assert store.discount == 0
        assert store.total == Decimal("200")
        assert store.item_count == 2

    @pytest.mark.asyncio
    async def test_add_merges_additively(self, store, fake_api):
        await store.add_item("P1", 2)
        await store.add_item("P1", 1)

        assert store.find_line("P1").quantity == 3
        assert len(store.items) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("quantity", [0, -1, 1.5, True])
    async def test_rejects_bad_quantity_without_calling(self, store, fake_api, quantity):
        with pytest.raises(ValidationError):
            await store.add_item("P1", quantity)
        assert fake_api.calls == []
        assert isinstance(store.error, ValidationError)
        assert not store.is_loading

    @pytest.mark.asyncio
    async def test_failure_keeps_snapshot_and_raises(self, store, fake_api):
        await store.add_item("P1", 1)
        before = store.snapshot

        fake_api.fail_next(ConflictError("Out of stock"))
        with pytest.raises(ConflictError):
            await store.add_item("P2", 1)

        assert store.snapshot is before
        assert store.error_message == "Out of stock"


class TestUpdateAndRemove:

    @pytest.mark.asyncio
    async def test_same_quantity_is_a_no_op(self, store, fake_api):
        await store.add_item("P1", 2)
        before = store.snapshot
        fake_api.calls.clear()

        result = await store.update_item_quantity("P1", 2)

        assert result is before
        assert fake_api.calls == []

    @pytest.mark.asyncio
    async def test_update_replaces_snapshot(self, store, fake_api):
        await store.add_item("P1", 2)

        await store.update_item_quantity("P1", 5)

        assert fake_api.calls[-1] == ("update_cart_item", "P1", 5)
        assert store.item_count == 5
        assert store.subtotal == Decimal("500")

    @pytest.mark.asyncio
    async def test_update_below_one_refused(self, store, fake_api):
        await store.add_item("P1", 1)
        fake_api.calls.clear()

        with pytest.raises(ValidationError):
            await store.update_item_quantity("P1", 0)
        assert fake_api.calls == []
        assert store.error_message == "Quantity must be at least 1; remove the item instead"
        assert store.item_count == 1

    @pytest.mark.asyncio
    async def test_remove(self, store, fake_api):
        await store.add_item("P1", 1)
        await store.add_item("E1", 1)

        await store.remove_item("P1")

        assert [line.product_id for line in store.items] == ["E1"]
        assert store.item_count == 1


class TestClear:

    @pytest.mark.asyncio
    async def test_clear_cart_resets_everything(self, store, fake_api):
        await store.add_item("P2", 2)
        await store.apply_coupon("SAVE50")

        await store.clear_cart()

        assert store.items == ()
        assert store.subtotal == store.discount == store.total == 0
        assert store.item_count == 0
        assert store.coupon is None
        assert store.snapshot.last_updated is not None

    @pytest.mark.asyncio
    async def test_clear_cart_state_is_local(self, store, fake_api):
        await store.add_item("P1", 1)
        fake_api.calls.clear()

        store.clear_cart_state()

        assert store.snapshot.is_empty
        assert fake_api.calls == []


class TestCoupons:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("typed", [" save10 ", "SAVE10", "Save10"])
    async def test_code_normalized_before_submission(self, store, fake_api, typed):
        await store.add_item("P1", 1)

        await store.apply_coupon(typed)

        assert fake_api.calls[-1] == ("apply_coupon", "SAVE10")

    @pytest.mark.asyncio
    async def test_blank_code_fails_locally(self, store, fake_api):
        with pytest.raises(ValidationError):
            await store.apply_coupon("   ")
        assert fake_api.calls == []
        assert store.error_message == COUPON_REQUIRED_MESSAGE

    @pytest.mark.asyncio
    async def test_coupon_then_remove(self, store, fake_api):
        await store.add_item("P2", 2)
        assert store.subtotal == Decimal("500")

        await store.apply_coupon("SAVE50")
        assert store.discount == Decimal("50")
        assert store.total == Decimal("450")
        assert store.coupon.code == "SAVE50"

        await store.remove_coupon()
        assert store.coupon is None
        assert store.discount == 0
        assert store.total == Decimal("500")


class _GatedAPI:
    """Answers get_cart calls in the order the test releases them"""

    def __init__(self, payloads):
        self.payloads = list(payloads)
        self.gates = [asyncio.Event() for _ in payloads]
        self.started = 0

    async def get_cart(self):
        index = self.started
        self.started += 1
        await self.gates[index].wait()
        return self.payloads[index]


class _LateFailingAPI:
    """get_cart fails only once released; add_to_cart answers at once"""

    def __init__(self):
        self.release = asyncio.Event()

    async def get_cart(self):
        await self.release.wait()
        raise NetworkError("old request failed")

    async def add_to_cart(self, product_id, quantity=1):
        return {
            "items": [{"product": product_id, "price": 100, "quantity": quantity}],
            "subtotal": 100 * quantity,
        }


class TestOrdering:

    @pytest.mark.asyncio
    async def test_stale_response_is_discarded(self):
        old = {"items": [{"product": "P1", "price": 100, "quantity": 1}], "subtotal": 100}
        new = {"items": [{"product": "P1", "price": 100, "quantity": 3}], "subtotal": 300}
        api = _GatedAPI([old, new])
        store = CartStore(api)

        first = asyncio.create_task(store.fetch_cart())
        second = asyncio.create_task(store.fetch_cart())
        await asyncio.sleep(0)

        api.gates[1].set()
        await second
        assert store.item_count == 3

        api.gates[0].set()
        await first
        assert store.item_count == 3
        assert store.subtotal == Decimal("300")
        assert not store.is_loading

    @pytest.mark.asyncio
    async def test_stale_failure_does_not_surface(self):
        api = _LateFailingAPI()
        store = CartStore(api)

        pending = asyncio.create_task(store.fetch_cart())
        await asyncio.sleep(0)
        await store.add_item("P1", 1)

        api.release.set()
        assert await pending is None

        assert store.item_count == 1
        assert store.error is None
        assert not store.is_loading

    @pytest.mark.asyncio
    async def test_response_after_logout_is_ignored(self):
        payload = {"items": [{"product": "P1", "price": 100, "quantity": 1}], "subtotal": 100}
        api = _GatedAPI([payload])
        store = CartStore(api)

        pending = asyncio.create_task(store.fetch_cart())
        await asyncio.sleep(0)
        store.clear_cart_state()
        api.gates[0].set()
        await pending

        assert store.snapshot.is_empty


class TestSubscriptions:

    @pytest.mark.asyncio
    async def test_listener_sees_loading_then_result(self, store, fake_api):
        seen = []
        unsubscribe = store.subscribe(lambda state: seen.append((state.is_loading, state.snapshot.item_count)))

        await store.add_item("P1", 2)

        assert seen == [(True, 0), (False, 2)]

        unsubscribe()
        await store.add_item("P1", 1)
        assert len(seen) == 2

    @pytest.mark.asyncio
    async def test_failing_listener_does_not_break_store(self, store, fake_api):
        def broken(state):
            raise RuntimeError("render failed")

        store.subscribe(broken)
        await store.add_item("P1", 1)

        assert store.item_count == 1
