"""Order Status Route — redirects legacy order-status URLs to the shop's primary domain."""

from fastapi import APIRouter, Depends, Request

from storefront_identity.api.dependencies import get_storefront
from storefront_identity.api.responses import redirect
from storefront_identity.core.boundary_protocols import StorefrontAPI
from storefront_identity.services.order_status import order_status_redirect_url

router = APIRouter(tags=["order-status"])


@router.get("/{shop_id}/orders/{token}/authenticate")
@router.get("/{locale}/{shop_id}/orders/{token}/authenticate")
async def order_status(
    request: Request,
    storefront: StorefrontAPI = Depends(get_storefront),
):
    return redirect(await order_status_redirect_url(storefront, str(request.url)))
