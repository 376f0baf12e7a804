"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /api/v1/health/ always returns 200 if the process is up (liveness)
    - GET /api/v1/health/ready returns 503 until the Storefront client is wired and
      the shop query answers (readiness)
    - The readiness query is public shop data, cached briefly (CachePolicy.SHORT)
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from storefront_identity.api.dependencies import get_optional_storefront
from storefront_identity.core.boundary_protocols import CachePolicy, StorefrontAPI
from storefront_identity.core.errors import RemoteAPIError
from storefront_identity.core.graphql_documents import SHOP_PRIMARY_DOMAIN_QUERY

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


def _not_ready(reason: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason},
    )


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    return {"status": "healthy", "service": "storefront-identity"}


@router.get("/ready")
async def readiness_check(
    storefront: StorefrontAPI | None = Depends(get_optional_storefront),
):
    if storefront is None:
        return _not_ready("storefront_uninitialized")
    try:
        await storefront.query(SHOP_PRIMARY_DOMAIN_QUERY, cache=CachePolicy.SHORT)
    except RemoteAPIError as e:
        logger.warning(
            "Readiness probe: storefront unreachable",
            extra={"api_error_type": e.api_error_type},
        )
        return _not_ready("storefront_unreachable")
    return {"status": "ready", "checks": {"storefront": "reachable"}}
