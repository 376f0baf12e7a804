"""Address Resolution — stale id normalization and address-list matching.

Tests cover:
    - "?" fragment stripped and URL-encoding decoded
    - "add" sentinel detection
    - match on stable id portion only (no /1 vs /10 prefix confusion)
    - unknown or blank ids resolve to None without raising
"""

from dataclasses import dataclass

from storefront_identity.core.address_resolution import (
    find_address,
    is_new_address,
    normalize_address_id,
)


@dataclass
class _Addr:
    id: str


ADDRESSES = [
    _Addr("gid://shopify/MailingAddress/1?model_name=CustomerAddress&customer_access_token=fresh"),
    _Addr("gid://shopify/MailingAddress/10?model_name=CustomerAddress&customer_access_token=fresh"),
    _Addr("gid://shopify/MailingAddress/2?model_name=CustomerAddress&customer_access_token=fresh"),
]


def test_normalize_strips_fragment():
    assert normalize_address_id(
        "gid://shopify/MailingAddress/1?model_name=CustomerAddress&customer_access_token=stale",
    ) == "gid://shopify/MailingAddress/1"


def test_normalize_decodes_url_encoding():
    encoded = "gid%3A%2F%2Fshopify%2FMailingAddress%2F2%3Fmodel_name%3DCustomerAddress"
    assert normalize_address_id(encoded) == "gid://shopify/MailingAddress/2"


def test_normalize_handles_none():
    assert normalize_address_id(None) == ""


def test_is_new_address_only_for_sentinel():
    assert is_new_address("add")
    assert not is_new_address("ADD")
    assert not is_new_address("gid://shopify/MailingAddress/1")
    assert not is_new_address(None)


def test_stale_id_matches_fresh_address():
    stale = "gid://shopify/MailingAddress/1?model_name=CustomerAddress&customer_access_token=stale"
    assert find_address(ADDRESSES, stale) is ADDRESSES[0]


def test_encoded_stale_id_matches():
    encoded = "gid%3A%2F%2Fshopify%2FMailingAddress%2F10%3Fcustomer_access_token%3Dold"
    assert find_address(ADDRESSES, encoded) is ADDRESSES[1]


def test_prefix_of_longer_id_does_not_match():
    assert find_address(ADDRESSES, "gid://shopify/MailingAddress/1") is ADDRESSES[0]
    assert find_address(ADDRESSES[1:], "gid://shopify/MailingAddress/1") is None


def test_unknown_id_returns_none():
    assert find_address(ADDRESSES, "gid://shopify/MailingAddress/99") is None


def test_blank_and_sentinel_ids_return_none():
    assert find_address(ADDRESSES, "") is None
    assert find_address(ADDRESSES, None) is None
    assert find_address(ADDRESSES, "add") is None
    assert find_address(ADDRESSES, "?token=only") is None


def test_empty_list_returns_none():
    assert find_address([], "gid://shopify/MailingAddress/1") is None
