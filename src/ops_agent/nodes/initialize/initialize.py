"""Initialize node: loads session history and any in-flight plan."""

import logging
from ops_agent.types import State
from .schemas import InitializeData

logger = logging.getLogger(__name__)


async def initialize_node(state: State) -> State:
    """
    Load the session's message history and active plan into the state.

    Args:
        state: State with session_id, message and session_store

    Returns:
        Updated state
    """
    print("🚀 Initialize Node: Loading session...")

    state["error"] = None
    state["plan"] = None
    state["resumed"] = False
    state["tool_calls"] = []
    state["response"] = ""

    try:
        if not state.get("message", "").strip():
            raise ValueError("Message is required")

        record = await state["session_store"].get(state["session_id"])
        if record is not None:
            state["messages"] = list(record.messages)
            state["plan"] = record.active_plan
            state["resumed"] = record.active_plan is not None
        else:
            state["messages"] = []

        data = InitializeData(
            session_id=state["session_id"],
            messages_count=len(state["messages"]),
            active_plan_id=state["plan"].id if state["plan"] else None,
            active_plan_status=state["plan"].status.value if state["plan"] else None,
        )
        print(f"✅ Loaded {data.messages_count} messages"
              + (f", active plan {data.active_plan_id} ({data.active_plan_status})" if data.active_plan_id else ""))

    except Exception as e:
        error_msg = f"Initialization failed: {str(e)}"
        logger.error(error_msg)
        print(f"❌ {error_msg}")
        state.setdefault("messages", [])
        state["error"] = str(e)

    return state
