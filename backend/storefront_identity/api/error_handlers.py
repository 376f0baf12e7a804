"""Error Handlers — global exception handlers for the identity API.

Invariants:
    - SessionExpiredError → logout redirect to the locale login page, session cookie deleted
    - StorefrontIdentityError → JSON error body at the error's own HTTP status
    - RequestValidationError → 400 {fieldErrors}, the same shape form failures use
    - Exception (catch-all) → 500 with the catalog's generic message; details only in logs

Design Decisions:
    - Registration order mirrors specificity: Starlette resolves handlers by MRO,
      so SessionExpiredError wins over its StorefrontIdentityError base
    - Kept out of main.py to keep its import fan-out small
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront_identity.api.responses import locale_of, login_path, redirect
from storefront_identity.config import get_settings
from storefront_identity.core.domain_types import locale_from_prefix
from storefront_identity.core.errors import (
    ErrorSeverity,
    SessionExpiredError,
    StorefrontIdentityError,
)
from storefront_identity.core.message_catalog import MessageKey, get_message
from storefront_identity.infrastructure.cookies import set_cookie_header

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.ERROR,
}


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SessionExpiredError, session_expired_handler)
    app.add_exception_handler(StorefrontIdentityError, identity_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


async def session_expired_handler(request: Request, exc: SessionExpiredError):
    """Dead or missing token: log the visitor out and send them to login."""
    logger.info(
        "Session expired, redirecting to login",
        extra={
            "operation": exc.context.operation,
            "error_code": exc.code,
            "path": request.url.path,
        },
    )
    settings = get_settings()
    clear_cookie = set_cookie_header(
        settings.session_cookie_name, "", max_age=0,
        secure=settings.session_cookie_secure,
    )
    return redirect(login_path(locale_of(request)), [("Set-Cookie", clear_cookie)])


async def identity_error_handler(request: Request, exc: StorefrontIdentityError):
    logger.log(
        _LOG_LEVELS[exc.severity],
        f"{type(exc).__name__}: {exc.message}",
        extra={
            "operation": exc.context.operation,
            "error_code": exc.code,
            "path": request.url.path,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors: dict[str, str] = {}
    for error in exc.errors():
        name = str(error["loc"][-1]) if error.get("loc") else "request"
        errors.setdefault(name, error["msg"])
    logger.warning(
        f"Request validation failed on {request.url.path}: {sorted(errors)}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"fieldErrors": errors},
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled exception on {request.url.path}: {type(exc).__name__}",
        exc_info=True,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    locale = locale_from_prefix(locale_of(request))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"formError": get_message(MessageKey.GENERIC_FAILURE, locale)},
    )
