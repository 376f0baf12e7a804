"""Request Dependencies — per-request session, cart, gateway and locale wiring.

Invariants:
    - One CustomerSession and one cart adapter per request; nothing shared across requests
    - The Storefront client is created by the lifespan and read from app.state
    - Tests override get_optional_storefront to inject a fake client
"""

from fastapi import Depends, Request

from storefront_identity.config import Settings, get_settings
from storefront_identity.core.boundary_protocols import StorefrontAPI
from storefront_identity.core.domain_types import Locale, locale_from_prefix
from storefront_identity.infrastructure.cookie_session import SignedCookieSession
from storefront_identity.infrastructure.storefront_cart import StorefrontCart
from storefront_identity.services.customer_reader import CustomerReader
from storefront_identity.services.customer_session import CustomerSession
from storefront_identity.services.identity_gateway import IdentityGateway


def get_optional_storefront(request: Request) -> StorefrontAPI | None:
    return getattr(request.app.state, "storefront", None)


def get_storefront(
    storefront: StorefrontAPI | None = Depends(get_optional_storefront),
) -> StorefrontAPI:
    if storefront is None:
        raise RuntimeError("Storefront client not initialized")
    return storefront


def get_locale(request: Request, settings: Settings = Depends(get_settings)) -> Locale:
    return locale_from_prefix(
        request.path_params.get("locale") or settings.default_locale,
    )


def get_customer_session(
    request: Request, settings: Settings = Depends(get_settings),
) -> CustomerSession:
    storage = SignedCookieSession.from_cookie(
        request.cookies.get(settings.session_cookie_name),
        secret=settings.session_secret,
        cookie_name=settings.session_cookie_name,
        max_age_seconds=settings.session_max_age_seconds,
        secure=settings.session_cookie_secure,
    )
    return CustomerSession(storage)


def get_cart(
    request: Request,
    storefront: StorefrontAPI = Depends(get_storefront),
    settings: Settings = Depends(get_settings),
) -> StorefrontCart:
    return StorefrontCart(
        storefront,
        request.cookies.get(settings.cart_cookie_name),
        cookie_name=settings.cart_cookie_name,
        max_age_seconds=settings.cart_max_age_seconds,
        secure=settings.session_cookie_secure,
    )


def get_gateway(
    storefront: StorefrontAPI = Depends(get_storefront),
    locale: Locale = Depends(get_locale),
) -> IdentityGateway:
    return IdentityGateway(storefront, locale)


def get_customer_reader(
    storefront: StorefrontAPI = Depends(get_storefront),
) -> CustomerReader:
    return CustomerReader(storefront)
