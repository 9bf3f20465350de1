"""
Finalize node for saving the session.

This node handles all final actions before ending the workflow:
- Turns a node error into the error reply
- Appends the turn to the session history
- Keeps a plan that is waiting to be resumed, drops any other
"""

import logging
from ops_agent.types import State
from operations import PlanStatus
from sessions import SessionRecord
from .schemas import FinalizeData

logger = logging.getLogger(__name__)

ERROR_REPLY_PREFIX = "Error processing your request: "


async def finalize_node(state: State) -> State:
    """
    Record the turn in the session store.

    Args:
        state: Current state

    Returns:
        Updated state with the final response and messages
    """
    print("🏁 Finalize Node: Wrapping up...")

    messages = list(state.get("messages", []))
    user_message = state.get("message", "")
    if user_message.strip():
        messages.append({"role": "user", "content": user_message})

    if state.get("error"):
        # Failed turns record only the user message
        state["response"] = f"{ERROR_REPLY_PREFIX}{state['error']}"
    else:
        messages.append({"role": "assistant", "content": state.get("response", "")})

    plan = state.get("plan")
    active_plan = None
    if plan is not None and plan.status == PlanStatus.WAITING_FOR_INPUT and not plan.aborted:
        active_plan = plan

    finalize_data = FinalizeData(
        messages_count=len(messages),
        active_plan_id=active_plan.id if active_plan else None,
    )

    try:
        await state["session_store"].set(
            state["session_id"],
            SessionRecord(messages=messages, active_plan=active_plan),
        )
        finalize_data.session_saved = True
    except Exception as e:
        error_msg = f"Failed to save session {state.get('session_id')}: {str(e)}"
        logger.error(error_msg)
        print(f"⚠️  {error_msg}")
        finalize_data.error = error_msg

    state["messages"] = messages
    state["next_node"] = "end"

    print(f"🎯 Finalize completed - messages: {finalize_data.messages_count}, "
          f"active plan: {finalize_data.active_plan_id or 'none'}")

    return state
