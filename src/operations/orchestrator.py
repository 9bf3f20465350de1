"""Plan orchestrator: builds plans from tool calls and drives them to quiescence."""

import json
import logging
import uuid
from typing import Any, Dict, Iterable, List, Union

from .context import fold_result
from .errors import PlanBuildError, StepExecutionError
from .executor import StepExecutor
from .registry import ToolRegistry
from .scheduler import blocked_steps, next_runnable
from .schemas import (
    DEFAULT_MAX_RETRIES,
    Plan,
    PlanStatus,
    PlanSummary,
    RequestedCall,
    Step,
    StepStatus,
)

logger = logging.getLogger(__name__)

_FINISHED = (PlanStatus.COMPLETED, PlanStatus.FAILED)


class PlanOrchestrator:
    """
    Top-level driver for multi-step tool operations.

    Steps run one at a time in the order chosen by the scheduler. Results of
    completed steps are folded into the plan context so later steps can
    reference them through {{placeholders}}. A step that exhausts its retries
    fails the whole plan immediately, leaving the remaining steps untouched.
    """

    def __init__(self, registry: ToolRegistry, max_retries: int = DEFAULT_MAX_RETRIES):
        """
        Initialize the orchestrator.

        Args:
            registry: Tools available to plan steps
            max_retries: Retries allowed per step beyond the first attempt
        """
        self.registry = registry
        self.max_retries = max_retries
        self.executor = StepExecutor(registry)

    def build(
        self,
        requested_calls: Iterable[Union[RequestedCall, Dict[str, Any]]],
        user_message: str,
    ) -> Plan:
        """
        Create a plan with one pending step per requested tool call.

        Args:
            requested_calls: Calls as RequestedCall objects or {id, name, arguments, depends_on} dicts
            user_message: Input that triggered the calls

        Returns:
            New plan in planning status

        Raises:
            PlanBuildError: If a call has undecodable arguments or a duplicate id
        """
        steps: List[Step] = []
        seen_ids = set()

        for raw_call in requested_calls:
            call = raw_call if isinstance(raw_call, RequestedCall) else RequestedCall(**raw_call)
            if call.id in seen_ids:
                raise PlanBuildError(f"Duplicate tool call id: {call.id}")
            seen_ids.add(call.id)

            steps.append(Step(
                id=call.id,
                tool_name=call.name,
                params=_decode_arguments(call),
                depends_on=list(call.depends_on),
                max_retries=self.max_retries,
            ))

        unknown = self.registry.unknown_names(step.tool_name for step in steps)
        if unknown:
            logger.warning(f"Plan references unregistered tools: {unknown}")

        plan = Plan(id=str(uuid.uuid4()), steps=steps, user_message=user_message)
        logger.info(f"Built plan {plan.id} with {len(steps)} steps")
        return plan

    async def drive(self, plan: Plan) -> Plan:
        """
        Execute runnable steps until none remain or a step fails.

        A retryable failure ends the cycle with the plan still executing so the
        caller can drive it again. A terminal failure marks the plan failed.
        Driving a completed, failed or aborted plan does nothing.

        Args:
            plan: Plan to drive (mutated in place)

        Returns:
            The same plan
        """
        if plan.status in _FINISHED or plan.aborted:
            return plan

        plan.status = PlanStatus.EXECUTING

        while not plan.aborted:
            step = next_runnable(plan)
            if step is None:
                break

            try:
                await self.executor.execute(step, plan.context)
            except StepExecutionError as e:
                if e.terminal:
                    plan.status = PlanStatus.FAILED
                    logger.error(f"Plan {plan.id} failed at step {step.id}: {e.message}")
                else:
                    logger.info(f"Plan {plan.id} paused, step {step.id} awaits retry")
                return plan

            fold_result(plan, step)

        if all(step.status == StepStatus.COMPLETED for step in plan.steps):
            plan.status = PlanStatus.COMPLETED
        elif any(step.status == StepStatus.FAILED for step in plan.steps):
            plan.status = PlanStatus.FAILED
        else:
            blocked = blocked_steps(plan)
            if blocked:
                logger.warning(
                    f"Plan {plan.id} has steps that can never run: {[step.id for step in blocked]}"
                )

        logger.info(f"Plan {plan.id} drive finished with status {plan.status.value}")
        return plan

    @staticmethod
    def abort(plan: Plan) -> Plan:
        """Stop a plan between drives. Steps already dispatched are not interrupted."""
        plan.aborted = True
        logger.info(f"Plan {plan.id} aborted by caller")
        return plan

    @staticmethod
    def needs_redrive(plan: Plan) -> bool:
        """True when the plan is executing and a step is waiting for a retry."""
        if plan.status != PlanStatus.EXECUTING or plan.aborted:
            return False
        return any(step.awaiting_retry for step in plan.steps)

    @staticmethod
    def summarize(plan: Plan) -> PlanSummary:
        return PlanSummary(
            plan_id=plan.id,
            status=plan.status,
            total_steps=len(plan.steps),
            completed_steps=len(plan.steps_with_status(StepStatus.COMPLETED)),
            pending_steps=len(plan.steps_with_status(StepStatus.PENDING)),
            failed_steps=len(plan.steps_with_status(StepStatus.FAILED)),
            errors=[step.error or "Unknown error" for step in plan.steps_with_status(StepStatus.FAILED)],
        )

    @staticmethod
    def debug_view(plan: Plan) -> Dict[str, Any]:
        """
        Bounded projection of a plan for logs and debug panels.

        Large ``_graphql`` diagnostics on step results are cut down to the
        query and variables.
        """
        return {
            "id": plan.id,
            "status": plan.status.value,
            "steps": [
                {
                    "id": step.id,
                    "tool_name": step.tool_name,
                    "status": step.status.value,
                    "retry_count": step.retry_count,
                    "error": step.error,
                    "result": _trim_result(step.result),
                }
                for step in plan.steps
            ],
            "context": plan.context,
        }


def _decode_arguments(call: RequestedCall) -> Dict[str, Any]:
    arguments = call.arguments
    if arguments is None or arguments == "":
        return {}
    if isinstance(arguments, str):
        try:
            arguments = json.loads(arguments)
        except json.JSONDecodeError as e:
            raise PlanBuildError(f"Arguments for call {call.id} are not valid JSON: {e}")
    if not isinstance(arguments, dict):
        raise PlanBuildError(f"Arguments for call {call.id} must be an object")
    return arguments


def _trim_result(result: Any) -> Any:
    if not isinstance(result, dict) or not isinstance(result.get("_graphql"), dict):
        return result
    graphql = result["_graphql"]
    return {
        **result,
        "_graphql": {
            "query": graphql.get("query"),
            "variables": graphql.get("variables"),
        },
    }
