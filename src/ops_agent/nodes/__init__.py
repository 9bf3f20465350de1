"""Graph nodes for the store operations agent."""
