"""Tests for per-line quantity controls."""

import asyncio

import pytest

from storefront.core.errors import NetworkError
from storefront.store.cart_store import CartStore
from storefront.store.line_controls import CartLineControls, LineActivity


@pytest.fixture
def controls(store) -> CartLineControls:
    return CartLineControls(store)


class TestQuantityChanges:

    @pytest.mark.asyncio
    async def test_increment_updates(self, store, fake_api, controls):
        await store.add_item("P1", 1)

        assert await controls.increment("P1") is True

        assert fake_api.calls[-1] == ("update_cart_item", "P1", 2)
        assert store.find_line("P1").quantity == 2
        assert controls.activity("P1") is LineActivity.IDLE

    @pytest.mark.asyncio
    async def test_decrement_above_one_updates(self, store, fake_api, controls):
        await store.add_item("P1", 3)

        await controls.decrement("P1")

        assert fake_api.calls[-1] == ("update_cart_item", "P1", 2)

    @pytest.mark.asyncio
    async def test_decrement_from_one_removes(self, store, fake_api, controls):
        await store.add_item("P1", 1)

        await controls.decrement("P1")

        assert fake_api.calls[-1] == ("remove_from_cart", "P1")
        assert ("update_cart_item", "P1", 0) not in fake_api.calls
        assert store.find_line("P1") is None

    @pytest.mark.asyncio
    async def test_same_quantity_sends_nothing(self, store, fake_api, controls):
        await store.add_item("P1", 2)
        fake_api.calls.clear()

        assert await controls.change_quantity("P1", 2) is False
        assert fake_api.calls == []

    @pytest.mark.asyncio
    async def test_unknown_line_is_ignored(self, controls, fake_api):
        assert await controls.increment("missing") is False
        assert fake_api.calls == []


class TestBusyFlags:

    @pytest.mark.asyncio
    async def test_failure_returns_to_idle_and_propagates(self, store, fake_api, controls):
        await store.add_item("P1", 2)
        fake_api.fail_next(NetworkError())

        with pytest.raises(NetworkError):
            await controls.increment("P1")

        assert controls.activity("P1") is LineActivity.IDLE
        assert store.find_line("P1").quantity == 2

    @pytest.mark.asyncio
    async def test_busy_line_refuses_actions_other_lines_do_not(self):
        release = asyncio.Event()

        class SlowAPI:
            def __init__(self):
                self.calls = []

            async def update_cart_item(self, product_id, quantity):
                self.calls.append(("update", product_id, quantity))
                if product_id == "P1":
                    await release.wait()
                return {"items": [
                    {"product": "P1", "price": 10, "quantity": 1},
                    {"product": "P2", "price": 10, "quantity": 1},
                ]}

            async def remove_from_cart(self, product_id):
                self.calls.append(("remove", product_id))
                return {"items": []}

        api = SlowAPI()
        store = CartStore(api)
        controls = CartLineControls(store)

        pending = asyncio.create_task(controls.change_quantity("P1", 4))
        await asyncio.sleep(0)

        assert controls.is_updating("P1")
        assert controls.is_busy("P1")
        assert await controls.change_quantity("P1", 5) is False
        assert await controls.remove("P1") is False
        assert not controls.is_busy("P2")
        assert await controls.change_quantity("P2", 3) is True

        release.set()
        assert await pending is True
        assert not controls.is_busy("P1")
        assert api.calls == [("update", "P1", 4), ("update", "P2", 3)]

    @pytest.mark.asyncio
    async def test_removing_flag(self, store, fake_api, controls):
        await store.add_item("P1", 1)
        seen = []
        store.subscribe(lambda state: seen.append(controls.activity("P1")))

        await controls.remove("P1")

        assert LineActivity.REMOVING in seen
        assert controls.activity("P1") is LineActivity.IDLE
