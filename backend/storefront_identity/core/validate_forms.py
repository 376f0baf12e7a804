"""Form Validation — local checks that run before any remote call.

Invariants:
    - Validators are PURE: return a failure result or None, never raise
    - A submitted value counts as present only if it is a non-empty string
    - Builders copy only the allowed keys; unknown form keys are dropped

Design Decisions:
    - Return-value validation over exceptions: gateway short-circuits on the
      first non-None result without a try block
"""

from collections.abc import Mapping
from typing import Any

from storefront_identity.core.domain_types import (
    ADDRESS_FIELDS,
    CUSTOMER_GID_PREFIX,
    CustomerId,
    PROFILE_FIELDS,
    Locale,
)
from storefront_identity.core.message_catalog import MessageKey, get_message
from storefront_identity.core.results import FieldErrors, FormError

_TRUTHY_FLAGS = frozenset({"on", "true", "1", "yes"})


def is_present(value: Any) -> bool:
    return isinstance(value, str) and len(value) > 0


def form_has(form: Mapping[str, Any], key: str) -> bool:
    return key in form and is_present(form.get(key))


# ─── Validators ──────────────────────────────────────────────────

def validate_login(email: Any, password: Any, locale: Locale = Locale.EN) -> FormError | None:
    if not is_present(email) or not is_present(password):
        return FormError(get_message(MessageKey.LOGIN_MISSING_FIELDS, locale))
    return None


def validate_activation(
    customer_id: Any,
    activation_token: Any,
    password: Any,
    password_confirm: Any,
    locale: Locale = Locale.EN,
) -> FormError | FieldErrors | None:
    if not is_present(customer_id) or not is_present(activation_token):
        return FormError(get_message(MessageKey.ACTIVATE_BAD_LINK, locale))
    if (
        not is_present(password)
        or not is_present(password_confirm)
        or password != password_confirm
    ):
        return FieldErrors({
            "passwordConfirm": get_message(
                MessageKey.ACTIVATE_PASSWORDS_MISMATCH, locale,
            ),
        })
    return None


def validate_recover(email: Any, locale: Locale = Locale.EN) -> FormError | None:
    if not is_present(email):
        return FormError(get_message(MessageKey.RECOVER_MISSING_EMAIL, locale))
    return None


def validate_profile_update(
    current_password: Any,
    new_password: Any,
    new_password2: Any,
    locale: Locale = Locale.EN,
) -> FieldErrors | None:
    """Password rules; new_password is None when the form omitted the field.

    A submitted but empty newPassword still has to match newPassword2.
    """
    if is_present(new_password) and not is_present(current_password):
        return FieldErrors({
            "currentPassword": get_message(
                MessageKey.PROFILE_CURRENT_PASSWORD_REQUIRED, locale,
            ),
        })
    if new_password is not None and new_password != new_password2:
        return FieldErrors({
            "newPassword2": get_message(MessageKey.PROFILE_PASSWORDS_MISMATCH, locale),
        })
    return None


# ─── Builders ────────────────────────────────────────────────────

def build_profile_input(fields: Mapping[str, Any], new_password: Any = None) -> dict:
    """CustomerUpdateInput: only present, non-empty profile fields plus password."""
    customer = {key: fields[key] for key in PROFILE_FIELDS if form_has(fields, key)}
    if is_present(new_password):
        customer["password"] = new_password
    return customer


def build_address_input(fields: Mapping[str, Any]) -> dict:
    """MailingAddressInput: every known address key submitted as a string (may be empty)."""
    return {
        key: fields[key]
        for key in ADDRESS_FIELDS
        if key in fields and isinstance(fields[key], str)
    }


def parse_default_flag(value: Any) -> bool:
    """Checkbox semantics: any submitted truthy marker requests default."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY_FLAGS
    return False


def customer_gid(customer_id: str) -> CustomerId:
    """Compose the global id the activation mutation expects."""
    if customer_id.startswith(CUSTOMER_GID_PREFIX):
        return CustomerId(customer_id)
    return CustomerId(f"{CUSTOMER_GID_PREFIX}{customer_id}")
