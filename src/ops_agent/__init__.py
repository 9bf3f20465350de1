"""Conversational agent that runs multi-step Shopify Admin operations."""

from ops_agent.graph import graph

__all__ = ["graph"]
