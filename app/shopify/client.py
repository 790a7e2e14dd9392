"""Async client for the Shopify Admin GraphQL API."""

from __future__ import annotations

from typing import Any, Protocol

import httpx

from app.config import Settings
from app.shopify.errors import UpstreamQueryError
from app.utils.logging import get_logger

logger = get_logger(__name__)


class AdminGraphQL(Protocol):
    """Anything that can run an Admin GraphQL document."""

    async def query(
        self, document: str, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]: ...


class ShopifyAdminClient:
    """Thin async wrapper around the Admin GraphQL endpoint.

    ``query`` returns the raw ``{"data": ..., "errors": ...}`` payload and
    leaves GraphQL-level errors for the caller to classify. HTTP and
    transport failures are raised as :class:`UpstreamQueryError`.
    """

    def __init__(
        self,
        shop_domain: str,
        access_token: str,
        *,
        api_version: str = "2025-01",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.shop_domain = shop_domain
        self.endpoint = f"https://{shop_domain}/admin/api/{api_version}/graphql.json"
        self._headers = {
            "X-Shopify-Access-Token": access_token,
            "Content-Type": "application/json",
        }
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> ShopifyAdminClient:
        return cls(
            settings.shopify_shop_domain,
            settings.shopify_access_token,
            api_version=settings.shopify_api_version,
            timeout=settings.shopify_timeout_seconds,
        )

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers=self._headers,
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def query(
        self, document: str, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """POST one GraphQL document and return the decoded payload."""
        body: dict[str, Any] = {"query": document}
        if variables:
            body["variables"] = variables

        try:
            response = await self._get_client().post(self.endpoint, json=body)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Shopify GraphQL request failed for %s: HTTP %s",
                self.shop_domain,
                exc.response.status_code,
            )
            raise UpstreamQueryError(
                f"Shopify responded with HTTP {exc.response.status_code}"
            ) from exc
        except httpx.TransportError as exc:
            logger.warning("Shopify GraphQL transport error for %s: %s", self.shop_domain, exc)
            raise UpstreamQueryError(f"Shopify request failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("Shopify returned a non-JSON body for %s", self.shop_domain)
            raise UpstreamQueryError("Shopify returned a non-JSON payload") from exc
        if not isinstance(payload, dict):
            raise UpstreamQueryError("Shopify returned a non-object GraphQL payload")
        return payload

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
