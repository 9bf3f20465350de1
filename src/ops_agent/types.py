"""Types and state definitions for the store operations agent."""

from typing import Dict, Any, List, Optional
from typing_extensions import TypedDict

from operations import Plan, PlanOrchestrator
from sessions import SessionStore
from .config import AgentSettings


class Message(TypedDict, total=False):
    """Individual message in a conversation."""
    role: str  # "user" or "assistant"
    content: str


class State(TypedDict, total=False):
    """State for the LangGraph."""
    # Input
    session_id: str
    message: str  # New user input for this turn

    # Services
    session_store: SessionStore
    orchestrator: PlanOrchestrator
    settings: AgentSettings

    # Session data (loaded by initialize)
    messages: List[Message]  # Prior history, user/assistant only
    plan: Optional[Plan]  # Plan built or resumed this turn
    resumed: bool  # True when plan is an earlier turn's active plan

    # Model output
    tool_calls: List[Dict[str, Any]]  # Tool calls as returned by the model

    # Output
    response: str
    debug: Optional[Dict[str, Any]]
    error: Optional[str]

    # Routing
    next_node: Optional[str]  # "execute", "draft", "finalize"
