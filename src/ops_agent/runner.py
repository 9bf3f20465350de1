"""Runner for code-first usage of the agent."""

import logging
from typing import Dict, Any, Optional
from ops_agent.config import AgentSettings, load_settings
from ops_agent.graph import build_graph
from operations import Plan, PlanOrchestrator, ToolRegistry
from sessions import InMemorySessionStore, SessionStore, new_session_id

logger = logging.getLogger(__name__)

_app = build_graph()
_default_store: Optional[SessionStore] = None
_default_registry: Optional[ToolRegistry] = None


def default_store(settings: Optional[AgentSettings] = None) -> SessionStore:
    """Process-wide in-memory session store, created on first use."""
    global _default_store
    if _default_store is None:
        settings = settings or load_settings()
        _default_store = InMemorySessionStore(ttl_seconds=settings.session_ttl_seconds)
    return _default_store


def default_registry() -> ToolRegistry:
    """Registry with the Shopify tools, built from the environment on first use."""
    global _default_registry
    if _default_registry is None:
        # Imported here so the engine can run without Shopify credentials
        from shopify_admin import build_default_registry
        print("🔌 Initializing Shopify Admin tools...")
        _default_registry = build_default_registry()
        print(f"✅ Registered {len(_default_registry.names)} tools")
    return _default_registry


async def run_agent(
    message: str,
    session_id: Optional[str] = None,
    store: Optional[SessionStore] = None,
    registry: Optional[ToolRegistry] = None,
    settings: Optional[AgentSettings] = None,
) -> Dict[str, Any]:
    """
    Run one conversation turn.

    Args:
        message: User input
        session_id: Existing session id (a new one is created if omitted)
        store: Session store (process-wide in-memory store if omitted)
        registry: Tool registry (Shopify tools from the environment if omitted)
        settings: Agent settings (loaded from the environment if omitted)

    Returns:
        Dictionary with reply, session_id, messages, plan_status, debug and error
    """
    settings = settings or load_settings()
    store = store or default_store(settings)
    session_id = session_id or new_session_id()

    try:
        registry = registry or default_registry()
    except Exception as e:
        print(f"❌ Failed to initialize tools: {e}")
        return {
            "reply": f"Error processing your request: {str(e)}",
            "session_id": session_id,
            "messages": [],
            "plan_status": None,
            "debug": None,
            "error": f"Tool initialization failed: {str(e)}",
        }

    initial_state = {
        "session_id": session_id,
        "message": message,
        "session_store": store,
        "orchestrator": PlanOrchestrator(registry, max_retries=settings.max_retries),
        "settings": settings,
    }

    # One turn at a time per session
    async with store.session_turn(session_id):
        final_state = await _app.ainvoke(initial_state)

    plan = final_state.get("plan")
    return {
        "reply": final_state.get("response", ""),
        "session_id": session_id,
        "messages": final_state.get("messages", []),
        "plan_status": plan.status.value if plan else None,
        "debug": final_state.get("debug"),
        "error": final_state.get("error"),
    }


async def clear_session(session_id: str, store: Optional[SessionStore] = None) -> bool:
    """
    Forget a session's history and active plan.

    Returns:
        True if the session existed
    """
    store = store or default_store()
    async with store.session_turn(session_id):
        deleted = await store.delete(session_id)
    logger.info(f"Cleared session {session_id}: {deleted}")
    return deleted


async def abort_active_plan(session_id: str, store: Optional[SessionStore] = None) -> Optional[Plan]:
    """
    Abort the plan a session would otherwise resume on its next turn.

    Returns:
        The aborted plan, or None if the session had no active plan
    """
    store = store or default_store()
    async with store.session_turn(session_id):
        record = await store.get(session_id)
        if record is None or record.active_plan is None:
            return None

        plan = record.active_plan
        PlanOrchestrator.abort(plan)
        record.active_plan = None
        await store.set(session_id, record)
        return plan
