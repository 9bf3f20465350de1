"""Tests for the Shopify Admin GraphQL client."""

import json

import httpx
import pytest

from shopify_admin import ShopifyAdminClient, ShopifyAPIError

pytestmark = pytest.mark.anyio


def _client(handler) -> ShopifyAdminClient:
    return ShopifyAdminClient(
        store_domain="demo.myshopify.com",
        access_token="shpat_test",
        api_version="2025-01",
        transport=httpx.MockTransport(handler),
    )


async def test_execute_posts_query_with_token_header():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["token"] = request.headers["X-Shopify-Access-Token"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"data": {"shop": {"name": "Demo"}}})

    async with _client(handler) as client:
        result = await client.execute("{ shop { name } }", {"first": 1})

    assert seen["url"] == "https://demo.myshopify.com/admin/api/2025-01/graphql.json"
    assert seen["token"] == "shpat_test"
    assert seen["body"] == {"query": "{ shop { name } }", "variables": {"first": 1}}
    assert result["data"] == {"shop": {"name": "Demo"}}
    assert result["_graphql"] == {
        "query": "{ shop { name } }",
        "variables": {"first": 1},
        "response": {"data": {"shop": {"name": "Demo"}}, "errors": None},
    }


async def test_graphql_errors_are_returned_not_raised():
    def handler(request):
        return httpx.Response(200, json={"errors": [{"message": "Field 'foo' doesn't exist"}]})

    async with _client(handler) as client:
        result = await client.execute("{ foo }")

    assert result["errors"][0]["message"] == "Field 'foo' doesn't exist"
    assert result["_graphql"]["response"]["errors"] == result["errors"]


async def test_http_error_status_raises():
    def handler(request):
        return httpx.Response(401, text="Invalid API key or access token")

    async with _client(handler) as client:
        with pytest.raises(ShopifyAPIError, match="HTTP 401"):
            await client.execute("{ shop { name } }")


async def test_invalid_json_raises():
    def handler(request):
        return httpx.Response(200, text="<html>maintenance</html>")

    async with _client(handler) as client:
        with pytest.raises(ShopifyAPIError, match="Invalid JSON"):
            await client.execute("{ shop { name } }")


async def test_transport_error_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        with pytest.raises(ShopifyAPIError, match="HTTP error"):
            await client.execute("{ shop { name } }")


def test_domain_is_normalized():
    client = ShopifyAdminClient("https://demo.myshopify.com/", "token")
    assert client.endpoint == "https://demo.myshopify.com/admin/api/2025-01/graphql.json"
