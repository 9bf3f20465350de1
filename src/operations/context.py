"""Folding completed step results into the plan context."""

import logging
from typing import Any, Mapping, Optional

from .errors import InvalidStepStateError
from .schemas import Plan, Step, StepStatus

logger = logging.getLogger(__name__)


def fold_result(plan: Plan, step: Step) -> None:
    """
    Store a completed step's result in the plan context.

    The full result is kept under the step id. When the result carries a
    ``data`` mapping, each of its top-level keys is also copied into the
    context under its own name so later steps can write {{productId}}
    instead of referencing the step. Later writes overwrite earlier ones.

    Args:
        plan: Plan whose context is updated
        step: Completed step

    Raises:
        InvalidStepStateError: If the step is not completed
    """
    if step.status != StepStatus.COMPLETED:
        raise InvalidStepStateError(f"Cannot fold step {step.id} with status '{step.status.value}'")

    plan.context[step.id] = step.result

    data = _data_payload(step.result)
    if data is None:
        return

    for key, value in data.items():
        if key in plan.context and plan.context[key] != value:
            logger.debug(f"Context key '{key}' overwritten by step {step.id}")
        plan.context[key] = value


def _data_payload(result: Any) -> Optional[Mapping[str, Any]]:
    if not isinstance(result, Mapping):
        return None
    data = result.get("data")
    if isinstance(data, Mapping):
        return data
    return None
