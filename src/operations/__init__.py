"""Multi-step operation planning and execution engine."""

from .errors import (
    OperationError,
    PlanBuildError,
    ResolutionError,
    StepExecutionError,
    ToolError,
    UnknownToolError,
)
from .orchestrator import PlanOrchestrator
from .registry import ToolRegistry
from .resolver import resolve_params
from .scheduler import next_runnable
from .schemas import Plan, PlanStatus, PlanSummary, RequestedCall, Step, StepStatus

__all__ = [
    "PlanOrchestrator",
    "ToolRegistry",
    "resolve_params",
    "next_runnable",
    "Plan",
    "PlanStatus",
    "PlanSummary",
    "RequestedCall",
    "Step",
    "StepStatus",
    "OperationError",
    "PlanBuildError",
    "ResolutionError",
    "StepExecutionError",
    "ToolError",
    "UnknownToolError",
]
