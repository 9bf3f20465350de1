"""Execute node: drives the turn's plan, re-driving while steps await retries."""

import asyncio
import logging
import random
import time
from langsmith import traceable
from ops_agent.config import AgentSettings
from ops_agent.types import State
from operations import Plan, PlanOrchestrator, PlanStatus
from utils.formatting import format_plan_report
from .schemas import ExecuteData

logger = logging.getLogger(__name__)


async def execute_node(state: State) -> State:
    """
    Drive the plan built or resumed by the plan node.

    If a step still awaits a retry once the drive cycles for this turn are
    used up, the plan is marked waiting_for_input so a later turn can resume it.
    """
    plan = state.get("plan")
    start_time = time.time()

    try:
        if plan is None:
            raise ValueError("No plan to execute")

        print(f"🔧 Executing plan {plan.id} ({len(plan.steps)} steps)...")
        cycles = await drive_with_retries(state["orchestrator"], plan, state["settings"])

        if state["orchestrator"].needs_redrive(plan):
            plan.status = PlanStatus.WAITING_FOR_INPUT
            logger.info(f"Plan {plan.id} still has steps awaiting retry after {cycles} drives")

        data = ExecuteData(
            plan_id=plan.id,
            drive_cycles=cycles,
            status=plan.status.value,
            execution_time_ms=(time.time() - start_time) * 1000,
        )
        print(f"✅ Plan {data.plan_id} is {data.status} after {data.drive_cycles} drive(s) ({data.execution_time_ms:.1f}ms)")
        print(format_plan_report(plan))
        state["next_node"] = "draft"

    except Exception as e:
        error_msg = f"Plan execution failed: {str(e)}"
        logger.error(error_msg)
        print(f"❌ {error_msg}")
        state["error"] = str(e)
        state["next_node"] = "finalize"

    return state


@traceable(name="drive_plan")
async def drive_with_retries(orchestrator: PlanOrchestrator, plan: Plan, settings: AgentSettings) -> int:
    """
    Drive a plan, then drive again with backoff while a step awaits a retry.

    Args:
        orchestrator: Orchestrator owning the registry
        plan: Plan to drive (mutated in place)
        settings: Supplies max_drive_cycles and retry_delay_seconds

    Returns:
        Number of drive calls made
    """
    await orchestrator.drive(plan)
    cycles = 1

    while cycles < settings.max_drive_cycles and orchestrator.needs_redrive(plan):
        delay = settings.retry_delay_seconds * (2 ** (cycles - 1))
        delay += random.uniform(0, delay / 2)
        logger.info(f"Re-driving plan {plan.id} in {delay:.2f}s (cycle {cycles + 1}/{settings.max_drive_cycles})")
        await asyncio.sleep(delay)
        await orchestrator.drive(plan)
        cycles += 1

    return cycles
