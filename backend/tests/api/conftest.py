"""API test fixtures — ASGI client with the Storefront client overridden.

Invariants:
    - get_optional_storefront overridden per test (get_storefront reads it)
    - Overrides cleared after each test
    - Lifespan never runs: no real httpx client is opened
"""

import pytest
from httpx import ASGITransport, AsyncClient

from storefront_identity.api.dependencies import get_optional_storefront
from storefront_identity.main import app
from tests.fakes import FakeStorefront, InMemoryCustomerAccount


@pytest.fixture
def storefront():
    return FakeStorefront()


@pytest.fixture
def account():
    return InMemoryCustomerAccount()


@pytest.fixture
async def client(storefront):
    app.dependency_overrides[get_optional_storefront] = lambda: storefront
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()
