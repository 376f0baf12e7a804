"""Identity Gateway — one customer-lifecycle operation per call against the Storefront API.

Invariants:
    - Every operation validates locally first; a validation failure makes no remote call
    - No operation retries; each remote call is awaited once, in order
    - Every exception from the remote client is caught here and mapped (ErrorMapper)
    - login/activate never reveal which credential was wrong (generic catalog message)
    - recover reports the same "request sent" result whether or not the email exists
    - upsert_address issues the default-address mutation only after the address write
      succeeded; its failure is reported in TwoStepResult.secondary, never rolled back

Design Decisions:
    - Results over exceptions: callers branch on Success / FormError / FieldErrors
    - Tokens and passwords never appear in log extras
"""

import logging
from collections.abc import Mapping
from typing import Any

from storefront_identity.core.address_resolution import (
    is_new_address,
    normalize_address_id,
)
from storefront_identity.core.boundary_protocols import StorefrontAPI
from storefront_identity.core.domain_types import Locale, Operation
from storefront_identity.core.error_mapper import map_exception, map_user_errors
from storefront_identity.core.graphql_documents import (
    CUSTOMER_ACCESS_TOKEN_CREATE,
    CUSTOMER_ACTIVATE,
    CUSTOMER_ADDRESS_CREATE,
    CUSTOMER_ADDRESS_DELETE,
    CUSTOMER_ADDRESS_UPDATE,
    CUSTOMER_DEFAULT_ADDRESS_UPDATE,
    CUSTOMER_RECOVER,
    CUSTOMER_UPDATE,
)
from storefront_identity.core.message_catalog import (
    MessageKey,
    get_message,
    rejected_message,
)
from storefront_identity.core.results import (
    AccessToken,
    FieldErrors,
    FormError,
    StepResult,
    Success,
    TwoStepResult,
    is_failure,
)
from storefront_identity.core.validate_forms import (
    build_address_input,
    build_profile_input,
    customer_gid,
    is_present,
    validate_activation,
    validate_login,
    validate_profile_update,
    validate_recover,
)

logger = logging.getLogger(__name__)


class IdentityGateway:
    """Executes customer mutations and normalizes their results."""

    def __init__(self, storefront: StorefrontAPI, locale: Locale = Locale.EN):
        self.storefront = storefront
        self.locale = locale

    # ─── Authentication ──────────────────────────────────────────

    async def login(self, email: Any, password: Any) -> Success | FormError:
        """Exchange credentials for an AccessToken (Success.value)."""
        invalid = validate_login(email, password, self.locale)
        if invalid:
            return invalid

        data = await self._mutate(
            Operation.LOGIN,
            CUSTOMER_ACCESS_TOKEN_CREATE,
            {"input": {"email": email, "password": password}},
        )
        if is_failure(data):
            return data

        return self._issued_token(
            Operation.LOGIN, data.get("customerAccessTokenCreate") or {},
        )

    async def activate(
        self,
        customer_id: Any,
        activation_token: Any,
        password: Any,
        password_confirm: Any,
    ) -> Success | FormError | FieldErrors:
        """Set the first password of an invited customer and sign them in."""
        invalid = validate_activation(
            customer_id, activation_token, password, password_confirm, self.locale,
        )
        if invalid:
            return invalid

        data = await self._mutate(
            Operation.ACTIVATE,
            CUSTOMER_ACTIVATE,
            {
                "id": customer_gid(customer_id),
                "input": {"password": password, "activationToken": activation_token},
            },
        )
        if is_failure(data):
            return data

        return self._issued_token(
            Operation.ACTIVATE, data.get("customerActivate") or {},
        )

    async def recover(self, email: Any) -> Success | FormError:
        """Request a password-reset email. Success does not reveal account existence."""
        invalid = validate_recover(email, self.locale)
        if invalid:
            return invalid

        data = await self._mutate(
            Operation.RECOVER, CUSTOMER_RECOVER, {"email": email},
        )
        if is_failure(data):
            return data

        payload = data.get("customerRecover") or {}
        if payload.get("customerUserErrors"):
            self._log_rejection(Operation.RECOVER, payload)
        return Success(message=get_message(MessageKey.RECOVER_SENT, self.locale))

    # ─── Profile ─────────────────────────────────────────────────

    async def update_profile(
        self,
        access_token: str | None,
        fields: Mapping[str, Any],
        current_password: Any = None,
        new_password: Any = None,
        new_password2: Any = None,
    ) -> Success | FormError | FieldErrors:
        """Update the non-empty subset of profile fields (and password).

        The caller must re-verify the token is live (CustomerReader) first.
        Success.value is the CustomerUpdateInput that was sent.
        """
        if not access_token:
            return FormError(get_message(MessageKey.SESSION_REQUIRED, self.locale))
        invalid = validate_profile_update(
            current_password, new_password, new_password2, self.locale,
        )
        if invalid:
            return invalid

        customer = build_profile_input(fields, new_password)
        if not customer:
            return Success(customer)

        data = await self._mutate(
            Operation.UPDATE_PROFILE,
            CUSTOMER_UPDATE,
            {"customerAccessToken": access_token, "customer": customer},
        )
        if is_failure(data):
            return data

        mapped = map_user_errors(
            Operation.UPDATE_PROFILE,
            (data.get("customerUpdate") or {}).get("customerUserErrors"),
            self.locale,
        )
        if mapped:
            return mapped
        return Success(customer)

    # ─── Address book ────────────────────────────────────────────

    async def upsert_address(
        self,
        access_token: str | None,
        address_id: Any,
        fields: Mapping[str, Any],
        make_default: bool = False,
    ) -> TwoStepResult:
        """Create ("add") or update an address, then optionally make it default.

        primary.value is the id of the written address.
        """
        if not access_token:
            return TwoStepResult(
                FormError(get_message(MessageKey.SESSION_REQUIRED, self.locale)),
            )
        if not is_present(address_id):
            return TwoStepResult(
                FormError(get_message(MessageKey.ADDRESS_MISSING_ID, self.locale)),
            )

        address = build_address_input(fields)
        if is_new_address(address_id):
            primary = await self._create_address(access_token, address)
        else:
            primary = await self._update_address(
                access_token, normalize_address_id(address_id), address,
            )

        if not isinstance(primary, Success) or not make_default:
            return TwoStepResult(primary)

        secondary = await self.set_default_address(access_token, primary.value)
        if is_failure(secondary):
            logger.warning(
                "Address saved but default-address update failed",
                extra={"operation": Operation.SET_DEFAULT_ADDRESS.value},
            )
        return TwoStepResult(primary, secondary)

    async def set_default_address(
        self, access_token: str, address_id: str,
    ) -> StepResult:
        data = await self._mutate(
            Operation.SET_DEFAULT_ADDRESS,
            CUSTOMER_DEFAULT_ADDRESS_UPDATE,
            {"customerAccessToken": access_token, "addressId": address_id},
        )
        if is_failure(data):
            return data
        mapped = map_user_errors(
            Operation.SET_DEFAULT_ADDRESS,
            (data.get("customerDefaultAddressUpdate") or {}).get("customerUserErrors"),
            self.locale,
        )
        return mapped or Success(address_id)

    async def delete_address(
        self, access_token: str | None, address_id: Any,
    ) -> Success | FormError:
        """Delete one address; remote rejections are shown with the remote wording."""
        if not access_token:
            return FormError(get_message(MessageKey.SESSION_REQUIRED, self.locale))
        if not is_present(address_id):
            return FormError(get_message(MessageKey.ADDRESS_MISSING_ID, self.locale))

        target_id = normalize_address_id(address_id)
        data = await self._mutate(
            Operation.DELETE_ADDRESS,
            CUSTOMER_ADDRESS_DELETE,
            {"customerAccessToken": access_token, "id": target_id},
            expose_remote_text=True,
        )
        if is_failure(data):
            return data

        mapped = map_user_errors(
            Operation.DELETE_ADDRESS,
            (data.get("customerAddressDelete") or {}).get("customerUserErrors"),
            self.locale,
            expose_remote_text=True,
        )
        if mapped:
            return mapped
        return Success(target_id)

    async def _create_address(self, access_token: str, address: dict) -> StepResult:
        data = await self._mutate(
            Operation.CREATE_ADDRESS,
            CUSTOMER_ADDRESS_CREATE,
            {"customerAccessToken": access_token, "address": address},
        )
        if is_failure(data):
            return data

        payload = data.get("customerAddressCreate") or {}
        mapped = map_user_errors(
            Operation.CREATE_ADDRESS, payload.get("customerUserErrors"), self.locale,
        )
        if mapped:
            return mapped
        new_id = (payload.get("customerAddress") or {}).get("id")
        if not new_id:
            logger.error(
                "Address create returned no address id",
                extra={"operation": Operation.CREATE_ADDRESS.value},
            )
            return FormError(rejected_message(Operation.CREATE_ADDRESS, self.locale))
        return Success(new_id)

    async def _update_address(
        self, access_token: str, address_id: str, address: dict,
    ) -> StepResult:
        data = await self._mutate(
            Operation.UPDATE_ADDRESS,
            CUSTOMER_ADDRESS_UPDATE,
            {"customerAccessToken": access_token, "id": address_id, "address": address},
        )
        if is_failure(data):
            return data
        mapped = map_user_errors(
            Operation.UPDATE_ADDRESS,
            (data.get("customerAddressUpdate") or {}).get("customerUserErrors"),
            self.locale,
        )
        return mapped or Success(address_id)

    # ─── Remote boundary ─────────────────────────────────────────

    async def _mutate(
        self,
        operation: Operation,
        document: str,
        variables: dict,
        *,
        expose_remote_text: bool = False,
    ) -> dict | FormError | FieldErrors:
        """Send one mutation; any exception becomes a mapped failure result."""
        try:
            return await self.storefront.mutate(document, variables=variables)
        except Exception as e:  # mapped fail-closed by ErrorMapper
            logger.warning(
                f"{operation.value} failed: {type(e).__name__}",
                extra={
                    "operation": operation.value,
                    "error_code": getattr(e, "code", None),
                },
            )
            return map_exception(
                operation, e, self.locale, expose_remote_text=expose_remote_text,
            )

    def _issued_token(self, operation: Operation, payload: dict) -> Success | FormError:
        """Read customerAccessToken; an unreadable node fails as unavailable."""
        try:
            token = AccessToken.from_payload(payload.get("customerAccessToken"))
        except ValueError as e:
            logger.error(
                f"{operation.value} returned a malformed access token: {e}",
                extra={"operation": operation.value},
            )
            return FormError(get_message(MessageKey.SERVICE_UNAVAILABLE, self.locale))
        if token is None:
            self._log_rejection(operation, payload)
            return FormError(rejected_message(operation, self.locale))
        return Success(token)

    def _log_rejection(self, operation: Operation, payload: dict) -> None:
        codes = [
            e.get("code") for e in payload.get("customerUserErrors") or []
            if isinstance(e, dict)
        ]
        logger.info(
            f"{operation.value} rejected by storefront: {codes}",
            extra={"operation": operation.value},
        )
