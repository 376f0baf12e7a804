"""Cart Identity Binder — attaches a freshly issued access token to the active cart.

Invariants:
    - Runs strictly after the session token is set and before the redirect is built
    - Returned headers hold the cart-id cookie (when bound) followed by exactly one
      session cookie
    - A cart failure never fails the login: headers then hold only the session cookie

Design Decisions:
    - Soft fail on cart errors: the token was already issued and stored
"""

import logging
from dataclasses import dataclass, field

from storefront_identity.core.boundary_protocols import CartAPI, HeaderList
from storefront_identity.core.domain_types import CartId, Operation
from storefront_identity.core.results import AccessToken
from storefront_identity.services.customer_session import CustomerSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CartBinding:
    """Headers for the login redirect plus the bound cart id (None when unbound)."""
    headers: HeaderList = field(default_factory=list)
    cart_id: CartId | None = None

    @property
    def cart_bound(self) -> bool:
        return self.cart_id is not None


async def bind_after_login(
    cart: CartAPI, session: CustomerSession, access_token: AccessToken,
) -> CartBinding:
    """Sync the cart's buyer identity with `access_token`, then commit the session."""
    if session.access_token != access_token.access_token:
        raise RuntimeError("Session token must be set before binding the cart")

    headers: HeaderList = []
    cart_id: CartId | None = None
    try:
        result = await cart.update_buyer_identity(
            {"customerAccessToken": access_token.access_token},
        )
        bound_id = ((result or {}).get("cart") or {}).get("id")
        if bound_id:
            cart_id = CartId(bound_id)
            headers.extend(cart.set_cart_id(cart_id))
        else:
            logger.warning(
                "Buyer identity update returned no cart id",
                extra={"operation": Operation.BIND_CART.value, "cart_bound": False},
            )
    except Exception as e:  # soft fail, login already succeeded
        cart_id = None
        logger.warning(
            f"Cart buyer identity update failed: {type(e).__name__}",
            extra={
                "operation": Operation.BIND_CART.value,
                "error_code": getattr(e, "code", None),
                "cart_bound": False,
            },
        )

    headers.append(("Set-Cookie", session.commit()))
    return CartBinding(headers=headers, cart_id=cart_id)
