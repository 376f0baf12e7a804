"""Signed Cookie Session — SessionStorage backed by an HS256 JWT cookie.

Invariants:
    - Cookie payload is {"data": {str: str}, "iat", "exp"}; only string values survive a read
    - A missing, tampered or expired cookie reads as an empty (anonymous) session
    - commit() renders exactly one Set-Cookie value; an empty session deletes the cookie
    - Cookie expiry never outlives expire_at() (the customer token's expiresAt)

Design Decisions:
    - python-jose JWT for signing, the same cookie-auth approach as the console backend
"""

import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from storefront_identity.infrastructure.cookies import set_cookie_header

logger = logging.getLogger(__name__)

_ALGORITHM = "HS256"


class SignedCookieSession:
    """Per-request key-value bag read from and committed to one signed cookie."""

    def __init__(
        self,
        data: dict[str, str] | None = None,
        *,
        secret: str,
        cookie_name: str = "session",
        max_age_seconds: int = 60 * 60 * 24 * 30,
        secure: bool = True,
    ):
        self._data: dict[str, str] = dict(data or {})
        self._secret = secret
        self.cookie_name = cookie_name
        self.max_age_seconds = max_age_seconds
        self.secure = secure
        self._expires_at: datetime | None = None

    @classmethod
    def from_cookie(
        cls, cookie_value: str | None, *, secret: str, **kwargs,
    ) -> "SignedCookieSession":
        if not cookie_value:
            return cls(secret=secret, **kwargs)
        try:
            claims = jwt.decode(cookie_value, secret, algorithms=[_ALGORITHM])
        except JWTError as e:
            logger.info(f"Discarding unreadable session cookie: {type(e).__name__}")
            return cls(secret=secret, **kwargs)
        raw = claims.get("data")
        data = (
            {k: v for k, v in raw.items() if isinstance(v, str)}
            if isinstance(raw, dict) else {}
        )
        return cls(data, secret=secret, **kwargs)

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def unset(self, key: str) -> None:
        self._data.pop(key, None)

    def expire_at(self, when: datetime | None) -> None:
        self._expires_at = when

    def commit(self) -> str:
        now = datetime.now(timezone.utc)
        if not self._data:
            return set_cookie_header(
                self.cookie_name, "", max_age=0, secure=self.secure,
            )
        expires = now + timedelta(seconds=self.max_age_seconds)
        if self._expires_at is not None and self._expires_at < expires:
            expires = self._expires_at
        token = jwt.encode(
            {
                "data": self._data,
                "iat": int(now.timestamp()),
                "exp": int(expires.timestamp()),
            },
            self._secret,
            algorithm=_ALGORITHM,
        )
        return set_cookie_header(
            self.cookie_name,
            token,
            max_age=int((expires - now).total_seconds()),
            secure=self.secure,
        )
