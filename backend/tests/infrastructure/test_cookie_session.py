"""Signed Cookie Session — JWT-signed cookie round trip, tampering and expiry.

Tests cover:
    - committed cookie reads back with the same data
    - tampered, foreign-secret and expired cookies read as anonymous
    - empty session commit deletes the cookie
    - expire_at bounds the cookie lifetime
"""

from datetime import datetime, timedelta, timezone
from http.cookies import SimpleCookie

from jose import jwt

from storefront_identity.infrastructure.cookie_session import SignedCookieSession

SECRET = "unit-secret"


def _cookie_value(header: str, name: str = "session") -> str:
    cookie = SimpleCookie()
    cookie.load(header)
    return cookie[name].value


def _max_age(header: str, name: str = "session") -> int:
    cookie = SimpleCookie()
    cookie.load(header)
    return int(cookie[name]["max-age"])


def test_round_trip():
    session = SignedCookieSession(secret=SECRET)
    session.set("customerAccessToken", "tok-1")
    header = session.commit()

    restored = SignedCookieSession.from_cookie(_cookie_value(header), secret=SECRET)
    assert restored.get("customerAccessToken") == "tok-1"


def test_header_attributes():
    session = SignedCookieSession(secret=SECRET, secure=True)
    session.set("k", "v")
    header = session.commit()
    assert header.startswith("session=")
    assert "HttpOnly" in header
    assert "Secure" in header
    assert "Path=/" in header
    assert "SameSite=lax" in header


def test_missing_cookie_is_empty():
    session = SignedCookieSession.from_cookie(None, secret=SECRET)
    assert session.get("customerAccessToken") is None


def test_tampered_cookie_is_empty():
    session = SignedCookieSession(secret=SECRET)
    session.set("customerAccessToken", "tok-1")
    header, _, signature = _cookie_value(session.commit()).split(".")
    forged_payload = jwt.encode(
        {"data": {"customerAccessToken": "stolen"}}, "x", algorithm="HS256",
    ).split(".")[1]
    tampered = f"{header}.{forged_payload}.{signature}"

    restored = SignedCookieSession.from_cookie(tampered, secret=SECRET)
    assert restored.get("customerAccessToken") is None


def test_foreign_secret_is_empty():
    session = SignedCookieSession(secret="other-secret")
    session.set("customerAccessToken", "tok-1")
    restored = SignedCookieSession.from_cookie(
        _cookie_value(session.commit()), secret=SECRET,
    )
    assert restored.get("customerAccessToken") is None


def test_expired_cookie_is_empty():
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {
            "data": {"customerAccessToken": "tok-1"},
            "iat": int((now - timedelta(hours=2)).timestamp()),
            "exp": int((now - timedelta(hours=1)).timestamp()),
        },
        SECRET,
        algorithm="HS256",
    )
    restored = SignedCookieSession.from_cookie(token, secret=SECRET)
    assert restored.get("customerAccessToken") is None


def test_non_string_values_are_dropped():
    token = jwt.encode({"data": {"a": "x", "b": 1}}, SECRET, algorithm="HS256")
    restored = SignedCookieSession.from_cookie(token, secret=SECRET)
    assert restored.get("a") == "x"
    assert restored.get("b") is None


def test_empty_session_commit_deletes_cookie():
    session = SignedCookieSession({"customerAccessToken": "tok-1"}, secret=SECRET)
    session.unset("customerAccessToken")
    header = session.commit()
    assert _max_age(header) == 0


def test_expire_at_bounds_cookie_lifetime():
    session = SignedCookieSession(secret=SECRET, max_age_seconds=86_400)
    session.set("customerAccessToken", "tok-1")
    session.expire_at(datetime.now(timezone.utc) + timedelta(hours=1))
    assert _max_age(session.commit()) <= 3600


def test_later_expiry_does_not_extend_max_age():
    session = SignedCookieSession(secret=SECRET, max_age_seconds=600)
    session.set("customerAccessToken", "tok-1")
    session.expire_at(datetime.now(timezone.utc) + timedelta(days=30))
    assert _max_age(session.commit()) <= 600
