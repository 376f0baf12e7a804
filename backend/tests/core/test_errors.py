"""Error Hierarchy — classification and response shape."""

from storefront_identity.core.errors import (
    ErrorCategory,
    ErrorContext,
    RemoteAPIError,
    RemoteUserError,
    ResourceNotFoundError,
    SessionExpiredError,
)


def test_remote_api_error_hides_transport_detail():
    exc = RemoteAPIError("connect refused to 10.0.0.1", "connection_error")
    body = exc.to_response()["error"]
    assert exc.http_status == 503
    assert body["code"] == "STOREFRONT_API_ERROR"
    assert body["message"] == "Storefront service unavailable"
    assert "10.0.0.1" in exc.message


def test_remote_api_error_keeps_retry_after():
    exc = RemoteAPIError("slow down", "rate_limit", status_code=429, retry_after_ms=1500)
    assert exc.context.retry_after_ms == 1500
    assert exc.to_response()["error"]["retry_after_ms"] == 1500


def test_remote_user_error_joins_messages():
    exc = RemoteUserError([{"message": "City is blank"}, {"message": "Zip is invalid"}])
    assert exc.message == "City is blank, Zip is invalid"
    assert exc.category is ErrorCategory.BUSINESS_RULE
    assert exc.http_status == 400


def test_session_expired_carries_operation():
    exc = SessionExpiredError(ErrorContext(operation="read_customer"))
    assert exc.http_status == 401
    assert exc.to_response()["error"]["operation"] == "read_customer"


def test_not_found_message():
    exc = ResourceNotFoundError("Shop primary domain", "shop")
    assert exc.http_status == 404
    assert exc.message == "Shop primary domain 'shop' not found"
