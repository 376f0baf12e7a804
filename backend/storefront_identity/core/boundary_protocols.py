"""Boundary Protocols — contracts between the identity core and its collaborators.

Invariants:
    - core never imports from infrastructure or services
    - Remote IO is reached only through these Protocol types
    - Implementations are provided by the shell via dependency injection
    - Header collections are ordered (name, value) pairs; Set-Cookie may repeat

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: boundary methods are async because implementations do IO,
      the pure functions in core never await them
"""

from datetime import datetime
from enum import Enum
from typing import Protocol

HeaderList = list[tuple[str, str]]


class CachePolicy(str, Enum):
    """Query cache hint. Only public shop data may use LONG."""
    NONE = "none"
    SHORT = "short"
    LONG = "long"


class SessionStorage(Protocol):
    """Cookie-backed key-value bag. Serialization format belongs to the implementation."""
    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def unset(self, key: str) -> None: ...
    def expire_at(self, when: datetime | None) -> None: ...
    def commit(self) -> str: ...


class StorefrontAPI(Protocol):
    """Remote GraphQL client. Raises RemoteAPIError on transport/protocol failure."""
    async def query(
        self,
        document: str,
        *,
        variables: dict | None = None,
        cache: CachePolicy = CachePolicy.NONE,
    ) -> dict: ...

    async def mutate(
        self, document: str, *, variables: dict | None = None,
    ) -> dict: ...


class CartAPI(Protocol):
    """Active-cart collaborator."""
    async def update_buyer_identity(self, buyer_identity: dict) -> dict: ...
    def set_cart_id(self, cart_id: str) -> HeaderList: ...
