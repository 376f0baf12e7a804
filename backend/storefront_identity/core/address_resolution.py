"""Address Resolution — match a possibly stale address id against a fresh address list.

Invariants:
    - normalize_address_id URL-decodes and drops everything from the first "?"
    - find_address never raises; no match (or a blank/sentinel id) returns None
    - Matching compares stable id portions, so ".../Address/1" never matches ".../Address/10"

Design Decisions:
    - Stale permalinks embed an access-token fragment that changes on every
      customer fetch; only the part before "?" identifies the address
"""

from collections.abc import Sequence
from typing import Protocol, TypeVar
from urllib.parse import unquote

from storefront_identity.core.domain_types import NEW_ADDRESS_ID, AddressId


class HasId(Protocol):
    id: str


AddressT = TypeVar("AddressT", bound=HasId)


def normalize_address_id(raw: str | None) -> AddressId:
    return AddressId(unquote(raw or "").split("?", 1)[0])


def is_new_address(address_id: str | None) -> bool:
    return address_id == NEW_ADDRESS_ID


def find_address(
    addresses: Sequence[AddressT], requested_id: str | None,
) -> AddressT | None:
    """Return the address whose stable id matches `requested_id`, else None."""
    wanted = normalize_address_id(requested_id)
    if not wanted or is_new_address(wanted):
        return None
    for address in addresses:
        if normalize_address_id(address.id) == wanted:
            return address
    return None
