"""Plan node: resumes an in-flight plan or asks the model which tools to call."""

import logging
from typing import Dict, Any, List
from ops_agent.llm import assistant_llm
from ops_agent.prompts import SYSTEM_PROMPT
from ops_agent.types import State
from operations import PlanStatus, RequestedCall
from operations.resolver import find_placeholders
from utils.prompts import build_chat_messages
from .schemas import PlanDecision

logger = logging.getLogger(__name__)

_RESUMABLE = (PlanStatus.EXECUTING, PlanStatus.WAITING_FOR_INPUT)


async def plan_node(state: State) -> State:
    """
    Decide what this turn does.

    An active plan left executing or waiting by an earlier turn is resumed.
    Otherwise the model is called with the tool definitions bound; a reply
    without tool calls is returned directly, tool calls become a new plan.
    """
    try:
        plan = state.get("plan")
        if plan is not None and plan.status in _RESUMABLE and not plan.aborted:
            state["next_node"] = "execute"
            print(f"🔁 Resuming plan {plan.id} ({len(plan.steps)} steps)")
            return state

        # Finished or aborted plans from earlier turns are dropped
        state["plan"] = None
        state["resumed"] = False

        orchestrator = state["orchestrator"]
        settings = state["settings"]

        llm = assistant_llm().bind_tools(orchestrator.registry.definitions())
        chat = build_chat_messages(
            SYSTEM_PROMPT,
            state.get("messages", []),
            state["message"],
            settings.history_window,
        )
        response = await llm.ainvoke(chat)

        decision = PlanDecision(
            tool_calls=_collect_tool_calls(response),
            direct_reply=None if _has_tool_calls(response) else (response.content or ""),
        )

        if not decision.tool_calls:
            state["response"] = decision.direct_reply or ""
            state["next_node"] = "finalize"
            print("💬 No tools needed - replying directly")
            return state

        state["tool_calls"] = decision.tool_calls
        state["plan"] = orchestrator.build(
            _requested_calls(decision.tool_calls),
            state["message"],
        )
        state["next_node"] = "execute"

        print(f"📋 Plan generated: {len(decision.tool_calls)} tools to execute")
        for i, call in enumerate(decision.tool_calls, 1):
            print(f"   {i}. {call['name']} ({call['id']})")

    except Exception as e:
        error_msg = f"Plan generation failed: {str(e)}"
        logger.error(error_msg)
        print(f"❌ {error_msg}")
        state["error"] = str(e)
        state["next_node"] = "finalize"

    return state


def _has_tool_calls(response) -> bool:
    return bool(getattr(response, "tool_calls", None) or getattr(response, "invalid_tool_calls", None))


def _collect_tool_calls(response) -> List[Dict[str, Any]]:
    """
    Normalize the model's tool calls to {id, name, args} dicts.

    Calls whose arguments could not be parsed keep the raw argument string,
    which plan building rejects.
    """
    calls = []
    for call in getattr(response, "tool_calls", None) or []:
        calls.append({"id": call["id"], "name": call["name"], "args": call.get("args") or {}})
    for call in getattr(response, "invalid_tool_calls", None) or []:
        calls.append({"id": call.get("id"), "name": call.get("name"), "args": call.get("args")})
    return calls


def _requested_calls(tool_calls: List[Dict[str, Any]]) -> List[RequestedCall]:
    """
    Turn model tool calls into plan requests.

    A call whose arguments contain {{templates}} depends on every call listed
    before it, so it only runs once the values it may reference exist.
    """
    requested = []
    earlier_ids: List[str] = []
    for call in tool_calls:
        args = call["args"]
        depends_on = list(earlier_ids) if isinstance(args, dict) and find_placeholders(args) else []
        requested.append(RequestedCall(
            id=call["id"],
            name=call["name"],
            arguments=args,
            depends_on=depends_on,
        ))
        earlier_ids.append(call["id"])
    return requested
