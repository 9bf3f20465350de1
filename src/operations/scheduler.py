"""Selection of the next runnable step in a plan."""

from typing import List, Optional

from .schemas import Plan, Step, StepStatus

_SKIPPED = (StepStatus.COMPLETED, StepStatus.RUNNING, StepStatus.FAILED)


def next_runnable(plan: Plan) -> Optional[Step]:
    """
    Find the first step, in declaration order, that can run now.

    A step is runnable when it is pending and every step it depends on exists
    in the plan and is completed. Steps with unmet dependencies are skipped,
    not failed.

    Args:
        plan: Plan to scan

    Returns:
        The runnable step, or None when nothing can run
    """
    for step in plan.steps:
        if step.status in _SKIPPED:
            continue
        if step.depends_on and not _dependencies_met(plan, step):
            continue
        return step
    return None


def blocked_steps(plan: Plan) -> List[Step]:
    """Pending steps whose dependencies can never complete (unknown or failed)."""
    blocked = []
    for step in plan.steps:
        if step.status != StepStatus.PENDING:
            continue
        for dep_id in step.depends_on:
            dependency = plan.get_step(dep_id)
            if dependency is None or dependency.status == StepStatus.FAILED:
                blocked.append(step)
                break
    return blocked


def _dependencies_met(plan: Plan, step: Step) -> bool:
    for dep_id in step.depends_on:
        dependency = plan.get_step(dep_id)
        if dependency is None or dependency.status != StepStatus.COMPLETED:
            return False
    return True
