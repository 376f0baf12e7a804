"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - CustomerId, AddressId, CartId wrap opaque remote ids; never parsed beyond
      the documented "?" fragment split
    - NEW_ADDRESS_ID ("add") is a sentinel and never a stored address id
    - SESSION_TOKEN_KEY is the only session key the identity layer reads or writes

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

CustomerId = NewType("CustomerId", str)
AddressId = NewType("AddressId", str)
CartId = NewType("CartId", str)


# ─── Constants ───────────────────────────────────────────────────

SESSION_TOKEN_KEY = "customerAccessToken"
NEW_ADDRESS_ID = "add"
CUSTOMER_GID_PREFIX = "gid://shopify/Customer/"

PROFILE_FIELDS: tuple[str, ...] = ("firstName", "lastName", "email", "phone")

ADDRESS_FIELDS: tuple[str, ...] = (
    "lastName",
    "firstName",
    "address1",
    "address2",
    "city",
    "province",
    "country",
    "zip",
    "phone",
    "company",
)


# ─── Enums ───────────────────────────────────────────────────────

class Operation(str, Enum):
    """Customer-lifecycle operations. Keys the localized message catalog."""
    LOGIN = "login"
    ACTIVATE = "activate"
    RECOVER = "recover"
    UPDATE_PROFILE = "update_profile"
    CREATE_ADDRESS = "create_address"
    UPDATE_ADDRESS = "update_address"
    DELETE_ADDRESS = "delete_address"
    SET_DEFAULT_ADDRESS = "set_default_address"
    BIND_CART = "bind_cart"
    READ_CUSTOMER = "read_customer"


class Locale(str, Enum):
    """Supported message locales. Path prefixes like "es-MX" map by language."""
    EN = "en"
    ES = "es"


def locale_from_prefix(prefix: str | None) -> Locale:
    """Map a storefront locale path segment ("es-mx", "EN-US") to a Locale."""
    if not prefix:
        return Locale.EN
    language = prefix.split("-")[0].lower()
    for locale in Locale:
        if locale.value == language:
            return locale
    return Locale.EN
