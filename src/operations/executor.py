"""Step executor: runs one step with bounded retry."""

import logging
import time
from typing import Any, Mapping

from .errors import (
    InvalidStepStateError,
    StepExecutionError,
    ToolError,
    UnknownToolError,
)
from .registry import ToolRegistry
from .resolver import find_placeholders, resolve_params
from .schemas import Step, StepStatus

logger = logging.getLogger(__name__)


class StepExecutor:
    """Executes single plan steps against a tool registry."""

    def __init__(self, registry: ToolRegistry):
        """
        Initialize the executor.

        Args:
            registry: Registry used to look up and invoke tools
        """
        self.registry = registry

    async def execute(self, step: Step, context: Mapping[str, Any]) -> Any:
        """
        Run one attempt of a step and record the outcome on it.

        The step moves pending -> running -> completed on success. A failure
        increments retry_count and puts the step back to pending while attempts
        remain, or marks it failed once max_retries is exceeded. An unknown
        tool fails the step immediately.

        Args:
            step: Pending step to run (mutated in place)
            context: Plan context used to resolve placeholders

        Returns:
            The raw tool result

        Raises:
            StepExecutionError: If the attempt failed; ``terminal`` tells whether
                the step is now failed
            InvalidStepStateError: If the step is not pending
        """
        if step.status != StepStatus.PENDING:
            raise InvalidStepStateError(
                f"Step {step.id} cannot run from status '{step.status.value}'"
            )

        step.status = StepStatus.RUNNING
        start_time = time.time()
        logger.info(f"Running step {step.id} ({step.tool_name}), attempt {step.retry_count + 1}")

        try:
            if not self.registry.has(step.tool_name):
                raise UnknownToolError(step.tool_name)

            params = resolve_params(step.params, context)
            unresolved = find_placeholders(params)
            if unresolved:
                logger.warning(f"Step {step.id} has unresolved placeholders: {sorted(unresolved)}")

            result = await self.registry.invoke(step.tool_name, params)
            _raise_for_result(result)

        except UnknownToolError as e:
            step.execution_time_ms = (time.time() - start_time) * 1000
            step.status = StepStatus.FAILED
            step.error = str(e)
            logger.error(f"Step {step.id} failed permanently: {e}")
            raise StepExecutionError(step.id, step.error, terminal=True, cause=e) from e

        except Exception as e:
            step.execution_time_ms = (time.time() - start_time) * 1000
            self._record_failure(step, e)
            raise StepExecutionError(
                step.id, step.error, terminal=step.status == StepStatus.FAILED, cause=e
            ) from e

        step.execution_time_ms = (time.time() - start_time) * 1000
        step.status = StepStatus.COMPLETED
        step.result = result
        logger.info(f"Step {step.id} completed ({step.execution_time_ms:.1f}ms)")
        return result

    def _record_failure(self, step: Step, error: Exception) -> None:
        message = str(error) or error.__class__.__name__
        step.retry_count += 1

        if step.retry_count > step.max_retries:
            step.status = StepStatus.FAILED
            step.error = message
            logger.error(f"Step {step.id} failed after {step.retry_count} attempts: {message}")
            return

        step.status = StepStatus.PENDING
        step.error = f"Error (retry {step.retry_count}/{step.max_retries}): {message}"
        logger.warning(f"Step {step.id} will be retried: {step.error}")


def _raise_for_result(result: Any) -> None:
    """Treat empty returns and explicit error payloads as failures."""
    if result is None or (isinstance(result, (Mapping, list, str)) and not result):
        raise ToolError("No result returned")
    if isinstance(result, Mapping) and result.get("error"):
        raise ToolError(str(result["error"]))
