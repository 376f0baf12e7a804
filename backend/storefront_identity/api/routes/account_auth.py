"""Account Authentication Routes — login, activation, password recovery and logout.

Invariants:
    - Failed submissions return 400 {formError}/{fieldErrors} and commit no cookie
    - Login commits the session once, after the cart is bound (CartIdentityBinder)
    - Authenticated visitors opening the login or recover page are sent to the account
"""

import logging

from fastapi import APIRouter, Depends, Request

from storefront_identity.api.dependencies import (
    get_cart,
    get_customer_session,
    get_gateway,
)
from storefront_identity.api.responses import (
    FORM_FAILURE_RESPONSES,
    account_path,
    bad_request,
    home_path,
    locale_of,
    redirect,
)
from storefront_identity.config import Settings, get_settings
from storefront_identity.core.results import Success
from storefront_identity.infrastructure.storefront_cart import StorefrontCart
from storefront_identity.services.cart_identity_binder import bind_after_login
from storefront_identity.services.customer_session import CustomerSession
from storefront_identity.services.identity_gateway import IdentityGateway

logger = logging.getLogger(__name__)
router = APIRouter(tags=["account-auth"])


@router.get("/account/login")
@router.get("/{locale}/account/login")
async def login_page(
    request: Request,
    session: CustomerSession = Depends(get_customer_session),
    settings: Settings = Depends(get_settings),
):
    if session.is_authenticated:
        return redirect(account_path(locale_of(request)))
    return {"shopName": settings.shop_name}


@router.post("/account/login", responses=FORM_FAILURE_RESPONSES)
@router.post("/{locale}/account/login", responses=FORM_FAILURE_RESPONSES)
async def login(
    request: Request,
    session: CustomerSession = Depends(get_customer_session),
    gateway: IdentityGateway = Depends(get_gateway),
    cart: StorefrontCart = Depends(get_cart),
):
    form = await request.form()
    result = await gateway.login(form.get("email"), form.get("password"))
    if not isinstance(result, Success):
        return bad_request(result)

    session.set_access_token(result.value)
    binding = await bind_after_login(cart, session, result.value)
    logger.info(
        "Customer logged in",
        extra={"operation": "login", "cart_bound": binding.cart_bound},
    )
    return redirect(account_path(locale_of(request)), binding.headers)


@router.post(
    "/account/activate/{customer_id}/{activation_token}",
    responses=FORM_FAILURE_RESPONSES,
)
@router.post(
    "/{locale}/account/activate/{customer_id}/{activation_token}",
    responses=FORM_FAILURE_RESPONSES,
)
async def activate(
    request: Request,
    customer_id: str,
    activation_token: str,
    session: CustomerSession = Depends(get_customer_session),
    gateway: IdentityGateway = Depends(get_gateway),
):
    form = await request.form()
    result = await gateway.activate(
        customer_id,
        activation_token,
        form.get("password"),
        form.get("passwordConfirm"),
    )
    if not isinstance(result, Success):
        return bad_request(result)

    session.set_access_token(result.value)
    return redirect(
        account_path(locale_of(request)), [("Set-Cookie", session.commit())],
    )


@router.get("/account/recover")
@router.get("/{locale}/account/recover")
async def recover_page(
    request: Request,
    session: CustomerSession = Depends(get_customer_session),
):
    if session.is_authenticated:
        return redirect(account_path(locale_of(request)))
    return {"resetRequested": False}


@router.post("/account/recover", responses=FORM_FAILURE_RESPONSES)
@router.post("/{locale}/account/recover", responses=FORM_FAILURE_RESPONSES)
async def recover(
    request: Request,
    gateway: IdentityGateway = Depends(get_gateway),
):
    form = await request.form()
    result = await gateway.recover(form.get("email"))
    if not isinstance(result, Success):
        return bad_request(result)
    return {"resetRequested": True, "message": result.message}


@router.post("/account/logout")
@router.post("/{locale}/account/logout")
async def logout(
    request: Request,
    session: CustomerSession = Depends(get_customer_session),
):
    session.clear()
    return redirect(home_path(locale_of(request)), [("Set-Cookie", session.commit())])
