"""Storefront Identity API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map StorefrontIdentityError → structured responses
    - CORS configured from settings (not hardcoded)
    - One httpx.AsyncClient per process, opened and closed by the lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Storefront client on app.state: request dependencies read it, tests replace it
"""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront_identity.api.error_handlers import register_error_handlers
from storefront_identity.api.routes import (
    account_addresses,
    account_auth,
    account_profile,
    health,
    order_status,
)
from storefront_identity.config import get_settings
from storefront_identity.infrastructure.observability import setup_logging
from storefront_identity.infrastructure.storefront_client import StorefrontClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    async with httpx.AsyncClient(
        timeout=settings.storefront_timeout_seconds,
    ) as http:
        app.state.storefront = StorefrontClient(
            http,
            domain=settings.storefront_domain,
            api_version=settings.storefront_api_version,
            public_token=settings.storefront_public_token,
            max_retries=settings.storefront_query_max_retries,
            base_delay_ms=settings.storefront_base_delay_ms,
            max_delay_ms=settings.storefront_max_delay_ms,
            long_cache_seconds=settings.storefront_long_cache_seconds,
        )
        logger.info("Storefront Identity API started")
        yield
        app.state.storefront = None
    logger.info("Storefront Identity API shutting down")


app = FastAPI(
    title="Storefront Identity API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes: health first, order-status last (its catch-all shape must not shadow /account)
app.include_router(health.router)
app.include_router(account_auth.router)
app.include_router(account_profile.router)
app.include_router(account_addresses.router)
app.include_router(order_status.router)

register_error_handlers(app)
