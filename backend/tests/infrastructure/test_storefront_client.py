"""Storefront Client — httpx error mapping, query retry, mutation single-shot, caching.

Tests cover:
    - data object returned; request carries the public token header
    - transport, 5xx, 4xx, malformed and GraphQL errors all raise RemoteAPIError
    - queries retry transient failures; mutations never retry
    - CachePolicy.LONG memoizes query results
"""

import httpx
import pytest

from storefront_identity.core.boundary_protocols import CachePolicy
from storefront_identity.core.errors import RemoteAPIError
from storefront_identity.core.graphql_documents import (
    CUSTOMER_QUERY,
    CUSTOMER_RECOVER,
    SHOP_PRIMARY_DOMAIN_QUERY,
)
from storefront_identity.infrastructure.storefront_client import StorefrontClient


def _client(handler, **kwargs) -> StorefrontClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return StorefrontClient(
        http, domain="shop.test", api_version="2024-01",
        public_token="pub-token", base_delay_ms=1, max_delay_ms=5, **kwargs,
    )


def _responder(*responses):
    """Return a handler serving `responses` in order, recording requests."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        item = responses[min(len(seen), len(responses)) - 1]
        if isinstance(item, Exception):
            raise item
        return item

    handler.seen = seen
    return handler


async def test_returns_data_and_sends_token_header():
    handler = _responder(httpx.Response(200, json={"data": {"customer": None}}))
    client = _client(handler)

    data = await client.query(CUSTOMER_QUERY, variables={"customerAccessToken": "t"})

    assert data == {"customer": None}
    request = handler.seen[0]
    assert request.url == "https://shop.test/api/2024-01/graphql.json"
    assert request.headers["X-Shopify-Storefront-Access-Token"] == "pub-token"


async def test_graphql_errors_raise_remote_api_error():
    handler = _responder(httpx.Response(200, json={"errors": [{"message": "Throttled"}]}))
    with pytest.raises(RemoteAPIError) as exc_info:
        await _client(handler).mutate(CUSTOMER_RECOVER, variables={"email": "a@b.com"})
    assert exc_info.value.api_error_type == "graphql_error"


async def test_non_json_body_is_malformed():
    handler = _responder(httpx.Response(200, text="<html>oops</html>"))
    with pytest.raises(RemoteAPIError) as exc_info:
        await _client(handler).mutate(CUSTOMER_RECOVER)
    assert exc_info.value.api_error_type == "malformed_response"


async def test_missing_data_is_malformed():
    handler = _responder(httpx.Response(200, json={"extensions": {}}))
    with pytest.raises(RemoteAPIError) as exc_info:
        await _client(handler).mutate(CUSTOMER_RECOVER)
    assert exc_info.value.api_error_type == "malformed_response"


async def test_client_error_is_not_retried():
    handler = _responder(httpx.Response(401, json={}))
    with pytest.raises(RemoteAPIError) as exc_info:
        await _client(handler).query(CUSTOMER_QUERY)
    assert exc_info.value.api_error_type == "client_error"
    assert exc_info.value.status_code == 401
    assert len(handler.seen) == 1


async def test_mutation_is_sent_once_on_server_error():
    handler = _responder(
        httpx.Response(502, text="bad gateway"),
        httpx.Response(200, json={"data": {}}),
    )
    with pytest.raises(RemoteAPIError) as exc_info:
        await _client(handler).mutate(CUSTOMER_RECOVER)
    assert exc_info.value.api_error_type == "server_error"
    assert len(handler.seen) == 1


async def test_query_retries_transient_failures():
    handler = _responder(
        httpx.ConnectError("refused"),
        httpx.Response(503, text="unavailable"),
        httpx.Response(200, json={"data": {"customer": None}}),
    )
    data = await _client(handler, max_retries=2).query(CUSTOMER_QUERY)
    assert data == {"customer": None}
    assert len(handler.seen) == 3


async def test_query_gives_up_after_max_retries():
    handler = _responder(httpx.Response(500, text="boom"))
    with pytest.raises(RemoteAPIError):
        await _client(handler, max_retries=2).query(CUSTOMER_QUERY)
    assert len(handler.seen) == 3


async def test_rate_limit_reads_retry_after():
    handler = _responder(httpx.Response(429, headers={"retry-after": "2"}))
    with pytest.raises(RemoteAPIError) as exc_info:
        await _client(handler, max_retries=0).query(CUSTOMER_QUERY)
    assert exc_info.value.api_error_type == "rate_limit"
    assert exc_info.value.context.retry_after_ms == 2000


async def test_timeout_maps_to_timeout_error():
    handler = _responder(httpx.ReadTimeout("slow"))
    with pytest.raises(RemoteAPIError) as exc_info:
        await _client(handler).mutate(CUSTOMER_RECOVER)
    assert exc_info.value.api_error_type == "timeout"


async def test_long_cache_memoizes_query():
    handler = _responder(
        httpx.Response(200, json={"data": {"shop": {"primaryDomain": {"url": "https://a"}}}}),
    )
    client = _client(handler)
    first = await client.query(SHOP_PRIMARY_DOMAIN_QUERY, cache=CachePolicy.LONG)
    second = await client.query(SHOP_PRIMARY_DOMAIN_QUERY, cache=CachePolicy.LONG)
    assert first == second
    assert len(handler.seen) == 1


async def test_uncached_query_hits_remote_each_time():
    handler = _responder(httpx.Response(200, json={"data": {"customer": None}}))
    client = _client(handler)
    await client.query(CUSTOMER_QUERY)
    await client.query(CUSTOMER_QUERY)
    assert len(handler.seen) == 2
