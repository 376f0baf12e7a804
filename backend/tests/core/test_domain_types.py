"""Domain Types — constants, operations and locale prefix mapping."""

import pytest

from storefront_identity.core.domain_types import (
    ADDRESS_FIELDS,
    NEW_ADDRESS_ID,
    PROFILE_FIELDS,
    SESSION_TOKEN_KEY,
    Locale,
    locale_from_prefix,
)


def test_session_uses_single_token_key():
    assert SESSION_TOKEN_KEY == "customerAccessToken"


def test_new_address_sentinel():
    assert NEW_ADDRESS_ID == "add"


def test_profile_fields_exclude_password():
    assert "password" not in PROFILE_FIELDS
    assert set(PROFILE_FIELDS) == {"firstName", "lastName", "email", "phone"}


def test_address_fields_cover_mailing_address():
    assert len(ADDRESS_FIELDS) == 10
    assert {"address1", "zip", "country", "company"} <= set(ADDRESS_FIELDS)


@pytest.mark.parametrize("prefix, expected", [
    (None, Locale.EN),
    ("", Locale.EN),
    ("es-mx", Locale.ES),
    ("ES-ES", Locale.ES),
    ("en-us", Locale.EN),
    ("fr-ca", Locale.EN),
    ("es", Locale.ES),
])
def test_locale_from_prefix(prefix, expected):
    assert locale_from_prefix(prefix) is expected
