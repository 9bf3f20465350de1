"""LangGraph for the store operations agent."""

from langgraph.graph import StateGraph, START, END
from ops_agent.types import State
from ops_agent.nodes.initialize.initialize import initialize_node
from ops_agent.nodes.plan.plan import plan_node
from ops_agent.nodes.execute.execute import execute_node
from ops_agent.nodes.draft.draft import draft_node
from ops_agent.nodes.finalize.finalize import finalize_node


def build_graph():
    """Build the agent graph."""
    g = StateGraph(State)

    # Add nodes
    g.add_node("initialize", initialize_node)
    g.add_node("plan", plan_node)
    g.add_node("execute", execute_node)
    g.add_node("draft", draft_node)
    g.add_node("finalize", finalize_node)

    # Add edges
    g.add_edge(START, "initialize")

    def route_from_initialize(state: State) -> str:
        """Route from initialize node based on success/failure."""
        if state.get("error"):
            return "finalize"
        return "plan"

    def route_from_plan(state: State) -> str:
        """Route from plan node: execute a plan, or finish with a direct reply or error."""
        if state.get("error"):
            return "finalize"
        if state.get("next_node") == "execute":
            return "execute"
        return "finalize"

    def route_from_execute(state: State) -> str:
        """Route from execute node based on success/failure."""
        if state.get("error"):
            return "finalize"
        return "draft"

    g.add_conditional_edges(
        "initialize",
        route_from_initialize,
        {
            "plan": "plan",
            "finalize": "finalize"
        }
    )

    g.add_conditional_edges(
        "plan",
        route_from_plan,
        {
            "execute": "execute",
            "finalize": "finalize"
        }
    )

    g.add_conditional_edges(
        "execute",
        route_from_execute,
        {
            "draft": "draft",
            "finalize": "finalize"
        }
    )

    # Draft always hands over to finalize, with or without an error
    g.add_edge("draft", "finalize")

    # Finalize node always ends
    g.add_edge("finalize", END)

    return g.compile()


# Export the graph for LangGraph CLI
graph = build_graph()
