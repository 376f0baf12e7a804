"""Storefront Cart — CartAPI adapter over the Storefront cart mutations.

Invariants:
    - update_buyer_identity creates a cart when the request carries no cart id
    - Remote userErrors raise RemoteUserError; transport failures propagate as RemoteAPIError
    - set_cart_id returns a fresh header list holding one cart Set-Cookie
"""

import logging

from storefront_identity.core.boundary_protocols import HeaderList, StorefrontAPI
from storefront_identity.core.errors import ErrorContext, RemoteAPIError, RemoteUserError
from storefront_identity.core.graphql_documents import (
    CART_BUYER_IDENTITY_UPDATE,
    CART_CREATE,
)
from storefront_identity.infrastructure.cookies import set_cookie_header

logger = logging.getLogger(__name__)


class StorefrontCart:
    """Cart collaborator bound to the cart id carried by the current request."""

    def __init__(
        self,
        storefront: StorefrontAPI,
        cart_id: str | None,
        *,
        cookie_name: str = "cart",
        max_age_seconds: int = 60 * 60 * 24 * 14,
        secure: bool = True,
    ):
        self.storefront = storefront
        self.cart_id = cart_id
        self.cookie_name = cookie_name
        self.max_age_seconds = max_age_seconds
        self.secure = secure

    async def update_buyer_identity(self, buyer_identity: dict) -> dict:
        context = ErrorContext(operation="cartBuyerIdentityUpdate")
        if self.cart_id:
            data = await self.storefront.mutate(
                CART_BUYER_IDENTITY_UPDATE,
                variables={"cartId": self.cart_id, "buyerIdentity": buyer_identity},
            )
            payload = data.get("cartBuyerIdentityUpdate") or {}
        else:
            data = await self.storefront.mutate(
                CART_CREATE, variables={"input": {"buyerIdentity": buyer_identity}},
            )
            payload = data.get("cartCreate") or {}

        user_errors = payload.get("userErrors") or []
        if user_errors:
            raise RemoteUserError(user_errors, context=context)
        cart = payload.get("cart")
        if not cart or not cart.get("id"):
            raise RemoteAPIError(
                "Cart mutation returned no cart", "malformed_response",
                context=context,
            )
        self.cart_id = cart["id"]
        return {"cart": cart}

    def set_cart_id(self, cart_id: str) -> HeaderList:
        return [(
            "Set-Cookie",
            set_cookie_header(
                self.cookie_name, cart_id,
                max_age=self.max_age_seconds, secure=self.secure,
            ),
        )]
