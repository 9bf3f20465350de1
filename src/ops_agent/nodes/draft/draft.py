"""
Draft node implementation.
Phrases the reply to the user from the plan's tool results.
"""

import json
import logging
import time
from typing import Any, List, Optional
from langchain_core.messages import AIMessage, BaseMessage, ToolMessage
from ops_agent.llm import drafter_llm
from ops_agent.prompts import FAILURE_NOTE, PENDING_NOTE, SYSTEM_PROMPT
from ops_agent.types import State
from operations import Plan, PlanOrchestrator, PlanStatus, Step, StepStatus
from utils.prompts import build_chat_messages
from .schemas import DraftData

logger = logging.getLogger(__name__)


async def draft_node(state: State) -> State:
    """
    Generate the reply for a turn that ran a plan.

    The model sees the conversation, its own tool calls and one tool message
    per step. A failed plan gets the failed steps' errors appended; a plan
    left waiting tells the user it can be continued.

    Args:
        state: State holding the driven plan

    Returns:
        Updated state with response and debug
    """
    print("📝 Draft Node: Generating response...")

    plan: Plan = state["plan"]
    orchestrator: PlanOrchestrator = state["orchestrator"]
    start_time = time.time()

    try:
        chat = build_chat_messages(
            SYSTEM_PROMPT,
            state.get("messages", []),
            state["message"],
            state["settings"].history_window,
        )
        chat.extend(_plan_messages(plan))

        response = await drafter_llm().ainvoke(chat)
        reply = response.content or ""

        note = _status_note(plan)
        if note:
            reply = f"{reply}\n\n{note}" if reply else note

        draft_data = DraftData(
            response=reply,
            plan_status=plan.status.value,
            generation_time_ms=(time.time() - start_time) * 1000,
            note=note,
        )
        state["response"] = draft_data.response
        state["debug"] = {
            "tool_calls": state.get("tool_calls") or [_step_call(step) for step in plan.steps],
            "plan": orchestrator.debug_view(plan),
        }
        state["next_node"] = "finalize"

        print(f"✅ Response generated ({draft_data.generation_time_ms:.1f}ms)")
        print(f"📝 Response: {draft_data.response[:100]}...")

    except Exception as e:
        error_msg = f"Draft generation failed: {str(e)}"
        logger.error(error_msg)
        print(f"❌ {error_msg}")
        state["error"] = str(e)
        state["next_node"] = "finalize"

    return state


def _step_call(step: Step) -> dict:
    return {"id": step.id, "name": step.tool_name, "args": step.params}


def _plan_messages(plan: Plan) -> List[BaseMessage]:
    """Assistant tool-call message followed by one tool message per step."""
    messages: List[BaseMessage] = [
        AIMessage(content="", tool_calls=[_step_call(step) for step in plan.steps])
    ]
    for step in plan.steps:
        messages.append(ToolMessage(content=_step_content(step), tool_call_id=step.id))
    return messages


def _step_content(step: Step) -> str:
    payload: Any
    if step.status == StepStatus.COMPLETED:
        payload = step.result
    elif step.status == StepStatus.FAILED:
        payload = {"error": step.error or "Unknown error"}
    else:
        payload = {"status": step.status.value, "error": step.error}
    return json.dumps(payload, default=str)


def _status_note(plan: Plan) -> Optional[str]:
    summary = PlanOrchestrator.summarize(plan)
    if plan.status == PlanStatus.FAILED:
        return FAILURE_NOTE.format(
            completed_steps=summary.completed_steps,
            total_steps=summary.total_steps,
            pending_steps=summary.pending_steps,
            errors="\n".join(f"- {error}" for error in summary.errors),
        )
    if plan.status == PlanStatus.WAITING_FOR_INPUT:
        return PENDING_NOTE.format(
            pending_steps=summary.pending_steps,
            total_steps=summary.total_steps,
        )
    return None
