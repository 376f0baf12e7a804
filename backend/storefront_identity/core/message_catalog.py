"""Message Catalog — localized user-facing text keyed by message, never by remote wording.

Invariants:
    - All strings are pure data (no IO, no computation)
    - Every MessageKey has an entry for every Locale
    - Remote error text never passes through this module

Design Decisions:
    - Catalog keyed by operation outcome, not remote text: remote wording changes
      cannot reach the UI
"""

from enum import Enum

from storefront_identity.core.domain_types import Locale, Operation


class MessageKey(str, Enum):
    LOGIN_MISSING_FIELDS = "login_missing_fields"
    LOGIN_REJECTED = "login_rejected"
    ACTIVATE_BAD_LINK = "activate_bad_link"
    ACTIVATE_PASSWORDS_MISMATCH = "activate_passwords_mismatch"
    ACTIVATE_REJECTED = "activate_rejected"
    RECOVER_MISSING_EMAIL = "recover_missing_email"
    RECOVER_SENT = "recover_sent"
    PROFILE_CURRENT_PASSWORD_REQUIRED = "profile_current_password_required"
    PROFILE_PASSWORDS_MISMATCH = "profile_passwords_mismatch"
    PROFILE_REJECTED = "profile_rejected"
    ADDRESS_REJECTED = "address_rejected"
    ADDRESS_MISSING_ID = "address_missing_id"
    ADDRESS_DELETE_REJECTED = "address_delete_rejected"
    DEFAULT_ADDRESS_REJECTED = "default_address_rejected"
    SESSION_REQUIRED = "session_required"
    ADD_NAME = "add_name"
    SERVICE_UNAVAILABLE = "service_unavailable"
    GENERIC_FAILURE = "generic_failure"


_MESSAGES: dict[MessageKey, dict[Locale, str]] = {
    MessageKey.LOGIN_MISSING_FIELDS: {
        Locale.EN: "Please provide both an email and a password.",
        Locale.ES: "Por favor, proporciona un correo electrónico y una contraseña.",
    },
    MessageKey.LOGIN_REJECTED: {
        Locale.EN: (
            "Sorry. We did not recognize either your email or password. "
            "Please try to sign in again or create a new account."
        ),
        Locale.ES: (
            "Lo siento. No reconocimos tu correo electrónico o contraseña. "
            "Por favor, intenta iniciar sesión de nuevo o crea una nueva cuenta."
        ),
    },
    MessageKey.ACTIVATE_BAD_LINK: {
        Locale.EN: "Wrong token. The link you followed might be wrong.",
        Locale.ES: "Token incorrecto. El enlace que seguiste podría estar mal.",
    },
    MessageKey.ACTIVATE_PASSWORDS_MISMATCH: {
        Locale.EN: "Please provide matching passwords.",
        Locale.ES: "Por favor, ingrese contraseñas que coincidan.",
    },
    MessageKey.ACTIVATE_REJECTED: {
        Locale.EN: "Sorry. We could not activate your account.",
        Locale.ES: "Lo siento. No pudimos activar su cuenta.",
    },
    MessageKey.RECOVER_MISSING_EMAIL: {
        Locale.EN: "Please provide an email.",
        Locale.ES: "Por favor, proporciona un correo electrónico.",
    },
    MessageKey.RECOVER_SENT: {
        Locale.EN: (
            "If that email address is in our system, you will receive an email "
            "with instructions about how to reset your password in a few minutes."
        ),
        Locale.ES: (
            "Si esa dirección de correo electrónico está en nuestro sistema, "
            "recibirás un correo con instrucciones sobre cómo restablecer tu "
            "contraseña en unos minutos."
        ),
    },
    MessageKey.PROFILE_CURRENT_PASSWORD_REQUIRED: {
        Locale.EN: "Please enter your current password before entering a new password.",
        Locale.ES: "Por favor, ingresa tu contraseña actual antes de ingresar una nueva.",
    },
    MessageKey.PROFILE_PASSWORDS_MISMATCH: {
        Locale.EN: "New passwords must match.",
        Locale.ES: "Las nuevas contraseñas deben coincidir.",
    },
    MessageKey.PROFILE_REJECTED: {
        Locale.EN: "We could not update your profile. Please check your details.",
        Locale.ES: "No pudimos actualizar tu perfil. Por favor, revisa tus datos.",
    },
    MessageKey.ADDRESS_REJECTED: {
        Locale.EN: "We could not save this address. Please check your details.",
        Locale.ES: "No pudimos guardar esta dirección. Por favor, revisa tus datos.",
    },
    MessageKey.ADDRESS_MISSING_ID: {
        Locale.EN: "You must provide an address id.",
        Locale.ES: "Debes proporcionar un ID de dirección.",
    },
    MessageKey.ADDRESS_DELETE_REJECTED: {
        Locale.EN: "We could not delete this address.",
        Locale.ES: "No pudimos eliminar esta dirección.",
    },
    MessageKey.DEFAULT_ADDRESS_REJECTED: {
        Locale.EN: "We could not make this your default address.",
        Locale.ES: "No pudimos establecer esta dirección como predeterminada.",
    },
    MessageKey.SESSION_REQUIRED: {
        Locale.EN: "You must be logged in to edit your account.",
        Locale.ES: "Debes estar registrado para editar tu cuenta.",
    },
    MessageKey.ADD_NAME: {
        Locale.EN: "Add name",
        Locale.ES: "Agregar nombre",
    },
    MessageKey.SERVICE_UNAVAILABLE: {
        Locale.EN: "Something went wrong. Please try again later.",
        Locale.ES: "Algo salió mal. Por favor, inténtalo de nuevo más tarde.",
    },
    MessageKey.GENERIC_FAILURE: {
        Locale.EN: "Something went wrong, please try again later.",
        Locale.ES: "Algo salió mal, por favor inténtalo más tarde.",
    },
}


_REJECTED_BY_OPERATION: dict[Operation, MessageKey] = {
    Operation.LOGIN: MessageKey.LOGIN_REJECTED,
    Operation.ACTIVATE: MessageKey.ACTIVATE_REJECTED,
    Operation.RECOVER: MessageKey.RECOVER_SENT,
    Operation.UPDATE_PROFILE: MessageKey.PROFILE_REJECTED,
    Operation.CREATE_ADDRESS: MessageKey.ADDRESS_REJECTED,
    Operation.UPDATE_ADDRESS: MessageKey.ADDRESS_REJECTED,
    Operation.DELETE_ADDRESS: MessageKey.ADDRESS_DELETE_REJECTED,
    Operation.SET_DEFAULT_ADDRESS: MessageKey.DEFAULT_ADDRESS_REJECTED,
    Operation.BIND_CART: MessageKey.GENERIC_FAILURE,
    Operation.READ_CUSTOMER: MessageKey.SESSION_REQUIRED,
}


def get_message(key: MessageKey, locale: Locale = Locale.EN) -> str:
    """Return catalog text, falling back to English for a missing locale."""
    entry = _MESSAGES[key]
    return entry.get(locale, entry[Locale.EN])


def rejected_message(operation: Operation, locale: Locale = Locale.EN) -> str:
    """Catalog text for a remote rejection of `operation` without field hints."""
    key = _REJECTED_BY_OPERATION.get(operation, MessageKey.GENERIC_FAILURE)
    return get_message(key, locale)
