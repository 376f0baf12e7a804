"""Customer Reader — live customer fetch plus account and address-form views.

Invariants:
    - Every read re-fetches from the Storefront API (no server-side customer cache)
    - A missing token or a null `customer` raises SessionExpiredError (token is dead)
    - RemoteAPIError propagates to the global handler unchanged
    - build_address_view never raises for unknown ids (blank form instead)
"""

import logging

from storefront_identity.core.address_resolution import find_address, is_new_address
from storefront_identity.core.boundary_protocols import StorefrontAPI
from storefront_identity.core.domain_types import Locale, Operation
from storefront_identity.core.errors import ErrorContext, SessionExpiredError
from storefront_identity.core.graphql_documents import CUSTOMER_QUERY
from storefront_identity.core.message_catalog import MessageKey, get_message
from storefront_identity.schemas.account import AccountView, AddressView, Customer

logger = logging.getLogger(__name__)


class CustomerReader:
    """Fetches the signed-in customer; doubles as the "token still live" check."""

    def __init__(self, storefront: StorefrontAPI):
        self.storefront = storefront

    async def get_customer(self, access_token: str | None) -> Customer:
        context = ErrorContext(operation=Operation.READ_CUSTOMER.value)
        if not access_token:
            raise SessionExpiredError(context)
        data = await self.storefront.query(
            CUSTOMER_QUERY, variables={"customerAccessToken": access_token},
        )
        customer = data.get("customer")
        if not customer:
            logger.info(
                "Storefront returned no customer for session token",
                extra={"operation": context.operation},
            )
            raise SessionExpiredError(context)
        return Customer.model_validate(customer)


def display_name(customer: Customer, locale: Locale = Locale.EN) -> str:
    parts = [p for p in (customer.first_name, customer.last_name) if p]
    if not parts:
        return get_message(MessageKey.ADD_NAME, locale)
    return " ".join(parts)


def build_account_view(customer: Customer, locale: Locale = Locale.EN) -> AccountView:
    return AccountView(
        display_name=display_name(customer, locale),
        email=customer.email,
        phone=customer.phone,
        addresses=customer.addresses,
        default_address_id=(
            customer.default_address.id if customer.default_address else None
        ),
    )


def build_address_view(customer: Customer, requested_id: str) -> AddressView:
    """Resolve a possibly stale address id for the edit form."""
    address = find_address(customer.addresses, requested_id)
    return AddressView(
        address=address,
        requested_id=requested_id,
        is_new=is_new_address(requested_id),
        is_default=address is not None and customer.is_default(address),
    )
