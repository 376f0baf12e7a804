"""Operation Results — payload shapes, access token parsing, two-step outcomes."""

from datetime import datetime, timedelta, timezone

import pytest

from storefront_identity.core.results import (
    AccessToken,
    FieldErrors,
    FormError,
    Success,
    TwoStepResult,
    is_failure,
)


def test_form_error_payload():
    assert FormError("nope").to_payload() == {"formError": "nope"}


def test_field_errors_payload():
    assert FieldErrors({"email": "taken"}).to_payload() == {
        "fieldErrors": {"email": "taken"},
    }


def test_field_errors_requires_a_field():
    with pytest.raises(ValueError):
        FieldErrors({})


def test_access_token_from_payload_parses_expiry():
    token = AccessToken.from_payload(
        {"accessToken": "abc", "expiresAt": "2030-01-01T00:00:00Z"},
    )
    assert token.access_token == "abc"
    assert token.expires_at == datetime(2030, 1, 1, tzinfo=timezone.utc)
    assert not token.is_expired()


def test_access_token_from_empty_payload_is_none():
    assert AccessToken.from_payload(None) is None
    assert AccessToken.from_payload({}) is None
    assert AccessToken.from_payload({"accessToken": None}) is None


@pytest.mark.parametrize("node", [
    {"accessToken": "abc", "expiresAt": "garbage"},
    {"accessToken": "abc", "expiresAt": 12345},
    {"accessToken": 7},
    "abc",
])
def test_access_token_malformed_node_raises(node):
    with pytest.raises(ValueError):
        AccessToken.from_payload(node)


def test_access_token_zoneless_expiry_is_utc():
    token = AccessToken.from_payload(
        {"accessToken": "abc", "expiresAt": "2030-01-01T00:00:00"},
    )
    assert token.expires_at == datetime(2030, 1, 1, tzinfo=timezone.utc)


def test_access_token_expiry():
    past = datetime.now(timezone.utc) - timedelta(seconds=1)
    assert AccessToken("abc", past).is_expired()
    assert not AccessToken("abc").is_expired()


def test_access_token_repr_hides_value():
    assert "abc" not in repr(AccessToken("abc"))


def test_is_failure():
    assert is_failure(FormError("x"))
    assert is_failure(FieldErrors({"a": "b"}))
    assert not is_failure(Success())
    assert not is_failure(None)


def test_two_step_primary_failure_is_not_ok():
    result = TwoStepResult(FormError("x"))
    assert not result.ok
    assert not result.fully_succeeded
    assert result.secondary is None


def test_two_step_secondary_failure_keeps_primary_success():
    result = TwoStepResult(Success("id-1"), FormError("default failed"))
    assert result.ok
    assert result.secondary_failed
    assert not result.fully_succeeded


def test_two_step_skipped_secondary_is_full_success():
    result = TwoStepResult(Success("id-1"))
    assert result.ok
    assert result.fully_succeeded
    assert not result.secondary_failed
