"""Response helpers — redirects carrying Set-Cookie headers and 400 error payloads."""

import re

from fastapi import Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from storefront_identity.core.boundary_protocols import HeaderList
from storefront_identity.core.results import FieldErrors, FormError
from storefront_identity.schemas.account import FieldErrorsResponse, FormErrorResponse

_LOCALE_PATTERN = re.compile(r"^[A-Za-z]{2}(-[A-Za-z]{2})?$")

# OpenAPI description of the 400 body returned by bad_request()
FORM_FAILURE_RESPONSES: dict = {
    400: {
        "model": FormErrorResponse | FieldErrorsResponse,
        "description": "Submission rejected; nothing was changed",
    },
}


def locale_of(request: Request) -> str | None:
    """Locale path prefix of the request, None when absent or malformed."""
    locale = request.path_params.get("locale")
    if locale and _LOCALE_PATTERN.match(locale):
        return locale
    return None


def account_path(locale: str | None) -> str:
    return f"/{locale}/account" if locale else "/account"


def login_path(locale: str | None) -> str:
    return f"/{locale}/account/login" if locale else "/account/login"


def home_path(locale: str | None) -> str:
    return f"/{locale}" if locale else "/"


def bad_request(result: FormError | FieldErrors) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content=result.to_payload(),
    )


def redirect(url: str, headers: HeaderList | None = None) -> RedirectResponse:
    """302 redirect; repeated Set-Cookie headers are appended, not merged."""
    response = RedirectResponse(url, status_code=status.HTTP_302_FOUND)
    for name, value in headers or []:
        response.headers.append(name, value)
    return response
