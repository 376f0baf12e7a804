"""Operation Results — uniform success/failure shapes returned by identity operations.

Invariants:
    - FormError and FieldErrors are transient; never persisted
    - FieldErrors always carries at least one field
    - TwoStepResult.secondary is None when the second step was not attempted
    - TwoStepResult.ok depends on the primary step only (soft-fail policy)

Design Decisions:
    - Frozen dataclasses over dicts: callers pattern-match on type, payload shape
      is produced in exactly one place (to_payload)
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Union


@dataclass(frozen=True)
class AccessToken:
    """Opaque customer credential issued by the remote API."""
    access_token: str
    expires_at: datetime | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        return self.expires_at <= now

    @classmethod
    def from_payload(cls, payload: dict | None) -> "AccessToken | None":
        """Build from a `customerAccessToken { accessToken expiresAt }` node.

        Raises ValueError on a malformed node. A zone-less expiresAt is read as UTC.
        """
        if not payload:
            return None
        if not isinstance(payload, dict):
            raise ValueError("customerAccessToken is not an object")
        if not payload.get("accessToken"):
            return None
        if not isinstance(payload["accessToken"], str):
            raise ValueError("accessToken is not a string")
        expires_raw = payload.get("expiresAt")
        expires_at = None
        if expires_raw:
            if not isinstance(expires_raw, str):
                raise ValueError("expiresAt is not a string")
            expires_at = datetime.fromisoformat(expires_raw.replace("Z", "+00:00"))
            if expires_at.tzinfo is None:
                expires_at = expires_at.replace(tzinfo=timezone.utc)
        return cls(access_token=payload["accessToken"], expires_at=expires_at)

    def __repr__(self) -> str:
        return f"AccessToken(expires_at={self.expires_at!r})"


@dataclass(frozen=True)
class FormError:
    """A single non-field-specific message shown near the submitted form."""
    message: str

    def to_payload(self) -> dict:
        return {"formError": self.message}


@dataclass(frozen=True)
class FieldErrors:
    """Mapping from input field name to an inline message."""
    errors: dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if not self.errors:
            raise ValueError("FieldErrors requires at least one field")

    def to_payload(self) -> dict:
        return {"fieldErrors": dict(self.errors)}


@dataclass(frozen=True)
class Success:
    """Successful operation with an optional payload (token, address id, ...)."""
    value: Any = None
    message: str | None = None


StepResult = Union[Success, FormError, FieldErrors]


def is_failure(result: StepResult | None) -> bool:
    return isinstance(result, (FormError, FieldErrors))


@dataclass(frozen=True)
class TwoStepResult:
    """Outcome of a sequential two-step flow (write entity, then mark default)."""
    primary: StepResult
    secondary: StepResult | None = None

    @property
    def ok(self) -> bool:
        return isinstance(self.primary, Success)

    @property
    def fully_succeeded(self) -> bool:
        return self.ok and not is_failure(self.secondary)

    @property
    def secondary_failed(self) -> bool:
        return is_failure(self.secondary)
