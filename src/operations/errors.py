"""Exceptions raised by the operation engine."""

from typing import Optional


class OperationError(Exception):
    """Base class for operation engine errors."""


class PlanBuildError(OperationError):
    """Raised when requested tool calls cannot be turned into a plan."""


class UnknownToolError(OperationError):
    """Raised when a step names a tool that is not registered. Never retried."""

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class ResolutionError(OperationError):
    """Raised when step parameters cannot be resolved against the plan context."""


class ToolError(OperationError):
    """Raised when a tool reports an error or returns nothing."""


class InvalidStepStateError(OperationError):
    """Raised when a step is asked to run from a status other than pending."""


class StepExecutionError(OperationError):
    """
    Raised by the step executor when an attempt fails.

    Args:
        step_id: Identifier of the failed step
        message: Failure message recorded on the step
        terminal: True when the step is now failed and will not be retried
    """

    def __init__(self, step_id: str, message: str, terminal: bool, cause: Optional[BaseException] = None):
        self.step_id = step_id
        self.message = message
        self.terminal = terminal
        self.cause = cause
        super().__init__(message)
