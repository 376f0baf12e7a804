"""Service test fixtures — scripted storefront, stateful account, in-memory session."""

import pytest

from storefront_identity.core.domain_types import Locale
from storefront_identity.services.customer_session import CustomerSession
from storefront_identity.services.identity_gateway import IdentityGateway
from tests.fakes import FakeStorefront, InMemoryCustomerAccount, InMemorySessionStorage


@pytest.fixture
def storefront():
    return FakeStorefront()


@pytest.fixture
def gateway(storefront):
    return IdentityGateway(storefront, Locale.EN)


@pytest.fixture
def account():
    return InMemoryCustomerAccount()


@pytest.fixture
def storage():
    return InMemorySessionStorage()


@pytest.fixture
def session(storage):
    return CustomerSession(storage)
