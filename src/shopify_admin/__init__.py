"""Shopify Admin GraphQL integration for the store operations agent."""

from .client import ShopifyAdminClient, ShopifyAPIError
from .factory import build_default_registry, create_shopify_client, create_shopify_tools
from .tools import ShopifyTools, register_shopify_tools

__all__ = [
    "ShopifyAdminClient",
    "ShopifyAPIError",
    "ShopifyTools",
    "register_shopify_tools",
    "build_default_registry",
    "create_shopify_client",
    "create_shopify_tools",
]
