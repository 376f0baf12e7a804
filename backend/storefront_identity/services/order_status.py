"""Order Status Redirect — sends legacy order-status links back to the shop's primary domain.

Invariants:
    - Only the origin is rewritten; path and query string are preserved
    - The primary-domain lookup is public shop data and uses CachePolicy.LONG
    - A missing shop raises ResourceNotFoundError
"""

from urllib.parse import urlsplit

from storefront_identity.core.boundary_protocols import CachePolicy, StorefrontAPI
from storefront_identity.core.errors import ResourceNotFoundError
from storefront_identity.core.graphql_documents import SHOP_PRIMARY_DOMAIN_QUERY


async def order_status_redirect_url(storefront: StorefrontAPI, request_url: str) -> str:
    data = await storefront.query(SHOP_PRIMARY_DOMAIN_QUERY, cache=CachePolicy.LONG)
    primary_url = ((data.get("shop") or {}).get("primaryDomain") or {}).get("url")
    if not primary_url:
        raise ResourceNotFoundError("Shop primary domain", "shop")
    parts = urlsplit(request_url)
    origin = f"{parts.scheme}://{parts.netloc}"
    return request_url.replace(origin, primary_url.rstrip("/"), 1)
