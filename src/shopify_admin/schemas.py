"""
Parameter schemas for the Shopify Admin tools.

The JSON schemas below are sent to the model as function definitions and are
used by the tool registry to validate resolved parameters.
"""

from typing import Dict, Any


EXECUTE_QUERY_PARAMETERS: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "query": {
            "type": "string",
            "description": "The GraphQL query to execute. Must be a valid GraphQL query string."
        },
        "variables": {
            "type": "object",
            "description": "Variables to use in the GraphQL query. Should match the variables referenced in the query."
        }
    },
    "required": ["query"]
}

EXECUTE_MUTATION_PARAMETERS: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "mutation": {
            "type": "string",
            "description": "The GraphQL mutation to execute. Must be a valid GraphQL mutation string."
        },
        "variables": {
            "type": "object",
            "description": "Variables to use in the GraphQL mutation. Should match the variables referenced in the mutation."
        }
    },
    "required": ["mutation"]
}

INTROSPECT_SCHEMA_PARAMETERS: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "type": {
            "type": "string",
            "description": "Name of a GraphQL type to describe, e.g. 'Product' or 'MutationRoot'."
        },
        "field": {
            "type": "string",
            "description": "Optional field of that type to describe on its own."
        }
    }
}


TOOL_DESCRIPTIONS: Dict[str, str] = {
    "execute_query": "Execute a GraphQL query against the Shopify Admin API to retrieve data.",
    "execute_mutation": "Execute a GraphQL mutation against the Shopify Admin API to modify data.",
    "introspect_schema": "Look up types and fields of the Shopify Admin GraphQL schema.",
}

TOOL_PARAMETERS: Dict[str, Dict[str, Any]] = {
    "execute_query": EXECUTE_QUERY_PARAMETERS,
    "execute_mutation": EXECUTE_MUTATION_PARAMETERS,
    "introspect_schema": INTROSPECT_SCHEMA_PARAMETERS,
}

COMMON_TYPES = [
    "Product", "ProductVariant", "Order", "Customer",
    "Shop", "Collection", "Metafield", "Money",
]

TYPE_QUERY = """
query ($name: String!) {
  __type(name: $name) {
    name
    kind
    description
    fields {
      name
      description
      type {
        name
        kind
        ofType {
          name
          kind
        }
      }
      args {
        name
        description
      }
    }
    inputFields {
      name
      description
    }
  }
}
"""
