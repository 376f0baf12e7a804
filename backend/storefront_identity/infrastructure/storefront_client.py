"""Storefront GraphQL Client — wraps httpx.AsyncClient with error mapping and query retry.

Invariants:
    - Transport failures, non-2xx statuses, malformed bodies and top-level GraphQL
      `errors` all raise RemoteAPIError (core/errors.py); callers never inspect httpx
    - Mutations are sent exactly once (no retry)
    - Queries retry transient failures (connection, 5xx, 429) with jittered backoff
    - CachePolicy.LONG memoizes public shop queries only; customer queries use NONE

Design Decisions:
    - Wrapper over raw client: isolates retry and mapping from the gateway
    - ±25% jitter on backoff: prevents thundering herd on shared rate limits
"""

import asyncio
import json
import logging
import random
import time

import httpx

from storefront_identity.core.boundary_protocols import CachePolicy
from storefront_identity.core.errors import ErrorContext, RemoteAPIError

logger = logging.getLogger(__name__)

_TRANSIENT_ERROR_TYPES = frozenset({"connection_error", "server_error", "rate_limit"})
_SHORT_CACHE_SECONDS = 60


class StorefrontClient:
    """Executes Storefront API documents and returns the GraphQL `data` object."""

    ACCESS_TOKEN_HEADER = "X-Shopify-Storefront-Access-Token"

    def __init__(
        self,
        http: httpx.AsyncClient,
        domain: str,
        api_version: str,
        public_token: str,
        max_retries: int = 2,
        base_delay_ms: int = 200,
        max_delay_ms: int = 2_000,
        long_cache_seconds: int = 3600,
    ):
        self.http = http
        self.endpoint = f"https://{domain}/api/{api_version}/graphql.json"
        self.public_token = public_token
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms
        self.long_cache_seconds = long_cache_seconds
        self._cache: dict[str, tuple[float, dict]] = {}

    async def query(
        self,
        document: str,
        *,
        variables: dict | None = None,
        cache: CachePolicy = CachePolicy.NONE,
    ) -> dict:
        """Run a read-only document, retrying transient failures."""
        key = self._cache_key(document, variables)
        if cache is not CachePolicy.NONE:
            hit = self._cache.get(key)
            if hit and hit[0] > time.monotonic():
                return hit[1]

        for attempt in range(self.max_retries + 1):
            try:
                data = await self._execute(document, variables)
            except RemoteAPIError as e:
                if e.api_error_type not in _TRANSIENT_ERROR_TYPES:
                    raise
                if attempt >= self.max_retries:
                    raise
                delay = e.context.retry_after_ms or self._backoff(attempt)
                logger.warning(
                    f"Transient storefront error, retry after {delay}ms",
                    extra={"attempt": attempt + 1, "api_error_type": e.api_error_type},
                )
                await asyncio.sleep(delay / 1000)
                continue

            if cache is not CachePolicy.NONE:
                ttl = (
                    self.long_cache_seconds if cache is CachePolicy.LONG
                    else _SHORT_CACHE_SECONDS
                )
                self._cache[key] = (time.monotonic() + ttl, data)
            return data
        raise RemoteAPIError("Retries exhausted", "connection_error")

    async def mutate(self, document: str, *, variables: dict | None = None) -> dict:
        """Run a mutation once. Never retried: the remote side may have applied it."""
        return await self._execute(document, variables)

    async def _execute(self, document: str, variables: dict | None) -> dict:
        context = ErrorContext(operation=_operation_name(document))
        try:
            response = await self.http.post(
                self.endpoint,
                json={"query": document, "variables": variables or {}},
                headers={
                    self.ACCESS_TOKEN_HEADER: self.public_token,
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
            )
        except httpx.TimeoutException:
            raise RemoteAPIError("Request timed out", "timeout", context=context)
        except httpx.TransportError as e:
            raise RemoteAPIError(
                f"Connection failed: {type(e).__name__}", "connection_error",
                context=context,
            )

        self._raise_for_status(response, context)

        try:
            payload = response.json()
        except (json.JSONDecodeError, ValueError):
            raise RemoteAPIError(
                "Response body is not JSON", "malformed_response",
                status_code=response.status_code, context=context,
            )
        if not isinstance(payload, dict):
            raise RemoteAPIError(
                "Response body is not an object", "malformed_response",
                status_code=response.status_code, context=context,
            )

        errors = payload.get("errors")
        if errors:
            messages = "; ".join(
                str(e.get("message", e)) if isinstance(e, dict) else str(e)
                for e in errors
            )
            raise RemoteAPIError(
                messages, "graphql_error",
                status_code=response.status_code, context=context,
            )

        data = payload.get("data")
        if not isinstance(data, dict):
            raise RemoteAPIError(
                "Response has no data object", "malformed_response",
                status_code=response.status_code, context=context,
            )
        logger.debug(
            "Storefront call succeeded",
            extra={"operation": context.operation, "status_code": response.status_code},
        )
        return data

    def _raise_for_status(self, response: httpx.Response, context: ErrorContext) -> None:
        status = response.status_code
        if status < 400:
            return
        if status == 429:
            raise RemoteAPIError(
                "Rate limit exceeded", "rate_limit", status_code=status,
                retry_after_ms=_retry_after_ms(response), context=context,
            )
        if status >= 500:
            raise RemoteAPIError(
                f"Server error {status}", "server_error", status_code=status,
                context=context,
            )
        raise RemoteAPIError(
            f"Client error {status}", "client_error", status_code=status,
            context=context,
        )

    def _backoff(self, attempt: int) -> int:
        """Exponential backoff with ±25% jitter."""
        delay = min(self.max_delay_ms, (2 ** attempt) * self.base_delay_ms)
        return int(delay * random.uniform(0.75, 1.25))  # nosec B311

    @staticmethod
    def _cache_key(document: str, variables: dict | None) -> str:
        return document + json.dumps(variables or {}, sort_keys=True)


def _retry_after_ms(response: httpx.Response) -> int | None:
    """Extract Retry-After header (returns milliseconds)."""
    val = response.headers.get("retry-after")
    if not val:
        return None
    try:
        return int(float(val) * 1000)
    except ValueError:
        return None


def _operation_name(document: str) -> str | None:
    """First word after `query`/`mutation` for log context."""
    for keyword in ("mutation", "query"):
        idx = document.find(keyword)
        if idx != -1:
            rest = document[idx + len(keyword):].strip()
            name = rest.split("(", 1)[0].split("{", 1)[0].strip()
            return name or None
    return None
