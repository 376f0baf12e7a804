"""Account Profile Routes — account overview and profile edit.

Invariants:
    - Both routes re-fetch the customer with the session token first; a dead token
      raises SessionExpiredError (logout redirect) before any mutation
    - Profile edit failures return 400 without touching the session
"""

from fastapi import APIRouter, Depends, Request

from storefront_identity.api.dependencies import (
    get_customer_reader,
    get_customer_session,
    get_gateway,
    get_locale,
)
from storefront_identity.api.responses import (
    FORM_FAILURE_RESPONSES,
    account_path,
    bad_request,
    locale_of,
    login_path,
    redirect,
)
from storefront_identity.core.domain_types import Locale
from storefront_identity.core.errors import ErrorContext, SessionExpiredError
from storefront_identity.core.results import Success
from storefront_identity.schemas.account import AccountView
from storefront_identity.services.customer_reader import (
    CustomerReader,
    build_account_view,
)
from storefront_identity.services.customer_session import CustomerSession
from storefront_identity.services.identity_gateway import IdentityGateway

router = APIRouter(tags=["account-profile"])


@router.get("/account", response_model=None)
@router.get("/{locale}/account", response_model=None)
async def account_overview(
    request: Request,
    session: CustomerSession = Depends(get_customer_session),
    reader: CustomerReader = Depends(get_customer_reader),
    locale: Locale = Depends(get_locale),
):
    if not session.is_authenticated:
        return redirect(login_path(locale_of(request)))
    customer = await reader.get_customer(session.access_token)
    view: AccountView = build_account_view(customer, locale)
    return view.model_dump()


@router.post("/account/edit", responses=FORM_FAILURE_RESPONSES)
@router.post("/{locale}/account/edit", responses=FORM_FAILURE_RESPONSES)
async def edit_profile(
    request: Request,
    session: CustomerSession = Depends(get_customer_session),
    reader: CustomerReader = Depends(get_customer_reader),
    gateway: IdentityGateway = Depends(get_gateway),
):
    token = session.access_token
    if not token:
        raise SessionExpiredError(ErrorContext(operation="update_profile"))
    await reader.get_customer(token)

    form = await request.form()
    result = await gateway.update_profile(
        token,
        form,
        current_password=form.get("currentPassword"),
        new_password=form.get("newPassword"),
        new_password2=form.get("newPassword2"),
    )
    if not isinstance(result, Success):
        return bad_request(result)
    return redirect(account_path(locale_of(request)))
