"""Async client for the Shopify Admin GraphQL API."""

import json
import logging
from typing import Dict, Any, Optional
import httpx
from pydantic import BaseModel

logger = logging.getLogger(__name__)

DEFAULT_API_VERSION = "2025-01"


class ShopifyAPIError(Exception):
    """Raised when the Admin API cannot be reached or returns an unusable response."""


class GraphQLRequest(BaseModel):
    """GraphQL request body."""
    query: str
    variables: Dict[str, Any] = {}


class ShopifyAdminClient:
    """Client for executing GraphQL operations against a Shopify store."""

    def __init__(
        self,
        store_domain: str,
        access_token: str,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the Shopify Admin client.

        Args:
            store_domain: Store domain, e.g. "my-shop.myshopify.com"
            access_token: Admin API access token
            api_version: Admin API version segment of the endpoint URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.store_domain = store_domain.replace("https://", "").rstrip("/")
        self.api_version = api_version
        self.endpoint = f"https://{self.store_domain}/admin/api/{api_version}/graphql.json"
        self.client = httpx.AsyncClient(
            headers={
                "Content-Type": "application/json",
                "X-Shopify-Access-Token": access_token,
            },
            timeout=timeout,
            transport=transport,
        )

    async def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Execute a GraphQL query or mutation.

        The returned payload is the raw GraphQL response body plus a ``_graphql``
        entry holding the query, variables and raw data/errors for debugging.

        Args:
            query: GraphQL document
            variables: GraphQL variables

        Returns:
            Response body with ``data``, optional ``errors`` and ``_graphql``

        Raises:
            ShopifyAPIError: If the request fails or the body is not JSON
        """
        request_data = GraphQLRequest(query=query, variables=variables or {})

        try:
            response = await self.client.post(self.endpoint, json=request_data.model_dump())
            response.raise_for_status()
            result = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Shopify API returned {e.response.status_code}: {e.response.text[:500]}")
            raise ShopifyAPIError(f"HTTP {e.response.status_code} from Shopify Admin API")
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling Shopify Admin API: {e}")
            raise ShopifyAPIError(f"HTTP error: {e}")
        except json.JSONDecodeError as e:
            logger.error(f"JSON decode error in Shopify response: {e}")
            raise ShopifyAPIError(f"Invalid JSON response: {e}")

        if not isinstance(result, dict):
            raise ShopifyAPIError("Unexpected response body from Shopify Admin API")

        result["_graphql"] = {
            "query": query,
            "variables": request_data.variables,
            "response": {
                "data": result.get("data"),
                "errors": result.get("errors"),
            },
        }
        return result

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
