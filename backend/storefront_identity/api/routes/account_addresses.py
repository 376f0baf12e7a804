"""Account Address Routes — address edit form, create/update, delete.

Invariants:
    - address id "add" creates; any other id updates (gateway decides)
    - The form's addressId field wins over the path id (it carries the fresh id)
    - address_id uses the path converter: global ids contain "/" once decoded
    - A failed default-address step after a successful write still redirects
      (soft fail; TwoStepResult.secondary is logged by the gateway)
"""

from fastapi import APIRouter, Depends, Request

from storefront_identity.api.dependencies import (
    get_customer_reader,
    get_customer_session,
    get_gateway,
)
from storefront_identity.api.responses import (
    FORM_FAILURE_RESPONSES,
    account_path,
    bad_request,
    locale_of,
    redirect,
)
from storefront_identity.core.errors import ErrorContext, SessionExpiredError
from storefront_identity.core.results import Success
from storefront_identity.core.validate_forms import parse_default_flag
from storefront_identity.services.customer_reader import (
    CustomerReader,
    build_address_view,
)
from storefront_identity.services.customer_session import CustomerSession
from storefront_identity.services.identity_gateway import IdentityGateway

router = APIRouter(tags=["account-addresses"])


def _require_token(session: CustomerSession, operation: str) -> str:
    token = session.access_token
    if not token:
        raise SessionExpiredError(ErrorContext(operation=operation))
    return token


@router.get("/account/address/{address_id:path}")
@router.get("/{locale}/account/address/{address_id:path}")
async def address_form(
    address_id: str,
    session: CustomerSession = Depends(get_customer_session),
    reader: CustomerReader = Depends(get_customer_reader),
):
    token = _require_token(session, "read_customer")
    customer = await reader.get_customer(token)
    return build_address_view(customer, address_id).model_dump()


@router.post(
    "/account/address/{address_id:path}",
    responses=FORM_FAILURE_RESPONSES,
)
@router.post(
    "/{locale}/account/address/{address_id:path}",
    responses=FORM_FAILURE_RESPONSES,
)
async def save_address(
    request: Request,
    address_id: str,
    session: CustomerSession = Depends(get_customer_session),
    gateway: IdentityGateway = Depends(get_gateway),
):
    token = _require_token(session, "upsert_address")
    form = await request.form()
    result = await gateway.upsert_address(
        token,
        form.get("addressId") or address_id,
        form,
        make_default=parse_default_flag(form.get("defaultAddress")),
    )
    if not result.ok:
        return bad_request(result.primary)
    return redirect(account_path(locale_of(request)))


@router.delete(
    "/account/address/{address_id:path}",
    responses=FORM_FAILURE_RESPONSES,
)
@router.delete(
    "/{locale}/account/address/{address_id:path}",
    responses=FORM_FAILURE_RESPONSES,
)
async def delete_address(
    request: Request,
    address_id: str,
    session: CustomerSession = Depends(get_customer_session),
    gateway: IdentityGateway = Depends(get_gateway),
):
    token = _require_token(session, "delete_address")
    form = await request.form()
    result = await gateway.delete_address(token, form.get("addressId") or address_id)
    if not isinstance(result, Success):
        return bad_request(result)
    return redirect(account_path(locale_of(request)))
