"""Unit tests for the Shopify Admin GraphQL client (httpx.MockTransport)."""

import json

import httpx
import pytest

from app.config import Settings
from app.shopify.client import ShopifyAdminClient
from app.shopify.errors import UpstreamQueryError


def _client(handler) -> ShopifyAdminClient:
    return ShopifyAdminClient(
        "test-shop.myshopify.com",
        "shpat_test",
        api_version="2025-01",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
class TestShopifyAdminClient:
    async def test_posts_query_and_variables(self):
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["token"] = request.headers["X-Shopify-Access-Token"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"data": {"shop": {"name": "Test"}}})

        client = _client(handler)
        payload = await client.query("query Q { shop { name } }", {"first": 5})
        await client.close()

        assert payload == {"data": {"shop": {"name": "Test"}}}
        assert seen["url"] == "https://test-shop.myshopify.com/admin/api/2025-01/graphql.json"
        assert seen["token"] == "shpat_test"
        assert seen["body"] == {"query": "query Q { shop { name } }", "variables": {"first": 5}}

    async def test_graphql_errors_are_returned_not_raised(self):
        client = _client(lambda r: httpx.Response(200, json={"errors": [{"message": "x"}]}))
        payload = await client.query("query Q { shop { name } }")
        assert payload["errors"] == [{"message": "x"}]

    async def test_http_error_becomes_upstream_error(self):
        client = _client(lambda r: httpx.Response(503, text="unavailable"))
        with pytest.raises(UpstreamQueryError, match="503"):
            await client.query("query Q { shop { name } }")

    async def test_transport_error_becomes_upstream_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = _client(handler)
        with pytest.raises(UpstreamQueryError):
            await client.query("query Q { shop { name } }")

    async def test_non_object_payload(self):
        client = _client(lambda r: httpx.Response(200, json=[1, 2]))
        with pytest.raises(UpstreamQueryError):
            await client.query("query Q { shop { name } }")

    async def test_non_json_body_becomes_upstream_error(self):
        client = _client(lambda r: httpx.Response(200, text="<html>maintenance</html>"))
        with pytest.raises(UpstreamQueryError, match="non-JSON"):
            await client.query("query Q { shop { name } }")

    async def test_close_is_idempotent(self):
        client = _client(lambda r: httpx.Response(200, json={"data": {}}))
        await client.query("query Q { shop { name } }")
        await client.close()
        await client.close()


class TestFromSettings:
    def test_uses_configured_shop_and_version(self):
        settings = Settings(
            shopify_shop_domain="https://demo.myshopify.com/",
            shopify_access_token="tok",
            shopify_api_version="2024-10",
        )
        client = ShopifyAdminClient.from_settings(settings)
        assert client.endpoint == "https://demo.myshopify.com/admin/api/2024-10/graphql.json"
