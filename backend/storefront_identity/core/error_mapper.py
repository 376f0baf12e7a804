"""Error Mapper — pure translation of remote user errors and exceptions into form results.

Invariants:
    - Output is always FormError or FieldErrors (never raises, never returns raw exceptions)
    - User errors with field hints become FieldErrors keyed by the last hint segment
    - User errors without hints become a catalog FormError keyed by operation
    - RemoteAPIError becomes the catalog "service unavailable" message
    - Any other exception becomes the fixed generic message (fail-closed)

Design Decisions:
    - expose_remote_text is opt-in per call site: the remote wording is returned as
      one FormError, field hints ignored (address delete)
"""

import logging
from collections.abc import Sequence

from storefront_identity.core.domain_types import Locale, Operation
from storefront_identity.core.errors import (
    FormValidationError,
    RemoteAPIError,
    RemoteUserError,
)
from storefront_identity.core.message_catalog import (
    MessageKey,
    get_message,
    rejected_message,
)
from storefront_identity.core.results import FieldErrors, FormError

logger = logging.getLogger(__name__)


def field_name(hint: object) -> str | None:
    """Reduce a remote field hint (["input", "email"] or "email") to a form field name."""
    if isinstance(hint, str):
        return hint or None
    if isinstance(hint, Sequence) and hint:
        last = hint[-1]
        return str(last) if last else None
    return None


def map_user_errors(
    operation: Operation,
    user_errors: Sequence[dict] | None,
    locale: Locale = Locale.EN,
    *,
    expose_remote_text: bool = False,
) -> FormError | FieldErrors | None:
    """Map a `customerUserErrors` list. Returns None when the list is empty."""
    if not user_errors:
        return None

    if expose_remote_text:
        text = ", ".join(e["message"] for e in user_errors if e.get("message"))
        return FormError(text or rejected_message(operation, locale))

    fields: dict[str, str] = {}
    for error in user_errors:
        name = field_name(error.get("field"))
        if name and name not in fields:
            fields[name] = error.get("message") or rejected_message(operation, locale)
    if fields:
        return FieldErrors(fields)

    return FormError(rejected_message(operation, locale))


def map_exception(
    operation: Operation,
    exc: BaseException,
    locale: Locale = Locale.EN,
    *,
    expose_remote_text: bool = False,
) -> FormError | FieldErrors:
    """Map any exception raised while running `operation`."""
    if isinstance(exc, RemoteAPIError):
        return FormError(get_message(MessageKey.SERVICE_UNAVAILABLE, locale))

    if isinstance(exc, RemoteUserError):
        mapped = map_user_errors(
            operation, exc.user_errors, locale,
            expose_remote_text=expose_remote_text,
        )
        return mapped or FormError(rejected_message(operation, locale))

    if isinstance(exc, FormValidationError):
        if exc.field:
            return FieldErrors({exc.field: exc.message})
        return FormError(exc.message)

    logger.error(
        f"Unexpected failure during {operation.value}: {type(exc).__name__}",
        extra={"operation": operation.value},
    )
    return FormError(get_message(MessageKey.GENERIC_FAILURE, locale))
