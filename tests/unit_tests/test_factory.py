"""Tests for building Shopify clients and the default registry from the environment."""

from unittest.mock import patch

import pytest

from shopify_admin import build_default_registry, create_shopify_client, create_shopify_tools


def test_client_creation_from_environment():
    with patch.dict('os.environ', {
        'SHOPIFY_STORE_DOMAIN': 'demo.myshopify.com',
        'SHOPIFY_ADMIN_TOKEN': 'shpat_test',
        'SHOPIFY_API_VERSION': '2024-10',
    }, clear=True):
        client = create_shopify_client()

    assert client.endpoint == "https://demo.myshopify.com/admin/api/2024-10/graphql.json"
    assert client.client.headers["X-Shopify-Access-Token"] == "shpat_test"


def test_client_defaults_api_version():
    with patch.dict('os.environ', {
        'SHOPIFY_STORE_DOMAIN': 'demo.myshopify.com',
        'SHOPIFY_ADMIN_TOKEN': 'shpat_test',
    }, clear=True):
        client = create_shopify_client()

    assert client.api_version == "2025-01"


def test_missing_store_domain():
    with patch.dict('os.environ', {'SHOPIFY_ADMIN_TOKEN': 'shpat_test'}, clear=True):
        with pytest.raises(ValueError, match="SHOPIFY_STORE_DOMAIN environment variable is required"):
            create_shopify_tools()


def test_missing_admin_token():
    with patch.dict('os.environ', {'SHOPIFY_STORE_DOMAIN': 'demo.myshopify.com'}, clear=True):
        with pytest.raises(ValueError, match="SHOPIFY_ADMIN_TOKEN environment variable is required"):
            create_shopify_tools()


def test_explicit_arguments_win_over_environment():
    with patch.dict('os.environ', {}, clear=True):
        tools = create_shopify_tools("other.myshopify.com", "token")

    assert tools.client.store_domain == "other.myshopify.com"


def test_default_registry_registers_shopify_tools():
    with patch.dict('os.environ', {
        'SHOPIFY_STORE_DOMAIN': 'demo.myshopify.com',
        'SHOPIFY_ADMIN_TOKEN': 'shpat_test',
    }, clear=True):
        registry = build_default_registry()

    assert set(registry.names) == {"execute_query", "execute_mutation", "introspect_schema"}
