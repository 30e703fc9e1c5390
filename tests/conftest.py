"""Shared fixtures"""

from decimal import Decimal

import httpx
import pytest

from mock_backend.database import reset_all
from mock_backend.main import app
from storefront.core.config import Settings
from storefront.core.session import StorefrontSession
from storefront.services.api_client import StorefrontClient
from storefront.store.cart_store import CartStore
from tests.fakes import FakeStorefrontAPI

BASE_URL = "http://testserver/api"


@pytest.fixture(autouse=True)
def reset_backend():
    reset_all()
    yield
    reset_all()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        api_base_url=BASE_URL,
        auth_token="shopper-1",
        shipping_fee_per_physical_item=Decimal("50"),
    )


@pytest.fixture
def fake_api() -> FakeStorefrontAPI:
    return FakeStorefrontAPI()


@pytest.fixture
def store(fake_api: FakeStorefrontAPI) -> CartStore:
    return CartStore(fake_api)


@pytest.fixture
def backend_transport() -> httpx.ASGITransport:
    return httpx.ASGITransport(app=app)


@pytest.fixture
def backend_client(backend_transport) -> StorefrontClient:
    return StorefrontClient(BASE_URL, auth_token="shopper-1", transport=backend_transport)


@pytest.fixture
def session(settings, backend_transport) -> StorefrontSession:
    return StorefrontSession(settings=settings, transport=backend_transport)
