"""Factory helpers for building Shopify clients and the default tool registry."""

import os
from typing import Optional

from operations import ToolRegistry
from .client import DEFAULT_API_VERSION, ShopifyAdminClient
from .tools import ShopifyTools, register_shopify_tools


def create_shopify_client(
    store_domain: Optional[str] = None,
    access_token: Optional[str] = None,
    api_version: Optional[str] = None,
    timeout: Optional[float] = None,
) -> ShopifyAdminClient:
    """
    Create a Shopify Admin client, falling back to environment variables.

    Args:
        store_domain: Store domain (defaults to SHOPIFY_STORE_DOMAIN)
        access_token: Admin API token (defaults to SHOPIFY_ADMIN_TOKEN)
        api_version: API version (defaults to SHOPIFY_API_VERSION or 2025-01)
        timeout: Request timeout in seconds (defaults to SHOPIFY_TIMEOUT_SECONDS or 30)

    Returns:
        Configured ShopifyAdminClient

    Raises:
        ValueError: If the store domain or token is missing
    """
    store_domain = store_domain or os.getenv("SHOPIFY_STORE_DOMAIN")
    access_token = access_token or os.getenv("SHOPIFY_ADMIN_TOKEN")

    if not store_domain:
        raise ValueError("SHOPIFY_STORE_DOMAIN environment variable is required")
    if not access_token:
        raise ValueError("SHOPIFY_ADMIN_TOKEN environment variable is required")

    return ShopifyAdminClient(
        store_domain=store_domain,
        access_token=access_token,
        api_version=api_version or os.getenv("SHOPIFY_API_VERSION", DEFAULT_API_VERSION),
        timeout=timeout if timeout is not None else float(os.getenv("SHOPIFY_TIMEOUT_SECONDS", "30")),
    )


def create_shopify_tools(store_domain: Optional[str] = None, access_token: Optional[str] = None) -> ShopifyTools:
    """Create ShopifyTools backed by a new client."""
    return ShopifyTools(create_shopify_client(store_domain, access_token))


def build_default_registry(tools: Optional[ShopifyTools] = None) -> ToolRegistry:
    """
    Build the registry of tools wired into the assistant.

    Args:
        tools: ShopifyTools to register (created from the environment if omitted)

    Returns:
        ToolRegistry with execute_query, execute_mutation and introspect_schema
    """
    registry = ToolRegistry()
    register_shopify_tools(registry, tools or create_shopify_tools())
    return registry
