"""Shopify Admin tool handlers used by operation plans."""

import logging
from typing import Optional, Dict, Any, List
from .client import ShopifyAdminClient
from .schemas import COMMON_TYPES, TYPE_QUERY, TOOL_DESCRIPTIONS, TOOL_PARAMETERS

logger = logging.getLogger(__name__)


class ShopifyTools:
    """Wrapper exposing Shopify Admin operations as registry tools."""

    def __init__(self, client: ShopifyAdminClient):
        """
        Initialize Shopify tools wrapper.

        Args:
            client: ShopifyAdminClient instance
        """
        self.client = client
        self._type_cache: Dict[str, Dict[str, Any]] = {}

    def _first_error_message(self, errors: Any, default: str) -> str:
        """
        Pull a readable message out of a GraphQL ``errors`` list.

        Args:
            errors: The ``errors`` value of a GraphQL response
            default: Message to use when nothing better is available

        Returns:
            Error message
        """
        if isinstance(errors, list) and errors:
            first = errors[0]
            if isinstance(first, dict) and first.get("message"):
                return str(first["message"])
            if isinstance(first, str):
                return first
        return default

    async def _run_operation(self, document: str, variables: Optional[Dict[str, Any]], default_error: str) -> Dict[str, Any]:
        try:
            result = await self.client.execute(document, variables or {})
        except Exception as e:
            logger.error(f"Shopify operation failed: {e}")
            return {"error": str(e) or default_error}

        if result.get("errors"):
            return {
                "error": self._first_error_message(result["errors"], "Unknown error"),
                "_graphql": result.get("_graphql"),
            }

        return {
            "data": result.get("data"),
            "_graphql": result.get("_graphql"),
        }

    async def execute_query(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Run an arbitrary GraphQL query."""
        return await self._run_operation(
            params["query"], params.get("variables"), "Error executing GraphQL query"
        )

    async def execute_mutation(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Run an arbitrary GraphQL mutation."""
        return await self._run_operation(
            params["mutation"], params.get("variables"), "Error executing GraphQL mutation"
        )

    async def introspect_schema(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Describe part of the Admin GraphQL schema.

        Without a type, returns the commonly used types and how to ask about
        them. With a type, returns its fields; with a field as well, returns
        only that field.

        Args:
            params: Optional "type" and "field" names

        Returns:
            {"data": ...} or {"error": ...}
        """
        type_name = params.get("type")
        field_name = params.get("field")

        if not type_name:
            return {
                "data": {
                    "commonTypes": [
                        {
                            "name": name,
                            "usage": f'Query this type directly with introspect_schema({{ type: "{name}" }})',
                        }
                        for name in COMMON_TYPES
                    ],
                    "queryExample": "To see available query fields, use introspect_schema({ type: 'QueryRoot' })",
                    "mutationExample": "To see available mutation fields, use introspect_schema({ type: 'MutationRoot' })",
                }
            }

        type_info = self._type_cache.get(type_name)
        if type_info is None:
            result = await self._run_operation(TYPE_QUERY, {"name": type_name}, "Error fetching type")
            if result.get("error"):
                return {"error": result["error"]}

            type_info = (result.get("data") or {}).get("__type")
            if not type_info:
                return {"error": f'Type "{type_name}" not found in schema'}
            self._type_cache[type_name] = type_info

        if field_name and type_info.get("fields"):
            field = _find_field(type_info["fields"], field_name)
            if field is None:
                return {"error": f'Field "{field_name}" not found on type "{type_name}"'}
            return {"data": {"field": field}}

        return {"data": {"type": type_info}}


def _find_field(fields: List[Dict[str, Any]], name: str) -> Optional[Dict[str, Any]]:
    for field in fields:
        if field.get("name") == name:
            return field
    return None


def register_shopify_tools(registry, tools: ShopifyTools) -> None:
    """
    Register the Shopify tool handlers on a tool registry.

    Args:
        registry: operations.ToolRegistry to populate
        tools: ShopifyTools instance providing the handlers
    """
    handlers = {
        "execute_query": tools.execute_query,
        "execute_mutation": tools.execute_mutation,
        "introspect_schema": tools.introspect_schema,
    }
    for name, handler in handlers.items():
        registry.register(
            name,
            handler,
            description=TOOL_DESCRIPTIONS[name],
            parameters=TOOL_PARAMETERS[name],
        )
