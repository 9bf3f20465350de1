"""
Schemas for multi-step operation plans.
"""

from enum import Enum
from typing import Dict, Any, List, Optional
from pydantic import BaseModel, Field


DEFAULT_MAX_RETRIES = 3


class StepStatus(str, Enum):
    """Lifecycle of a single step."""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class PlanStatus(str, Enum):
    """Lifecycle of a plan."""
    PLANNING = "planning"
    EXECUTING = "executing"
    COMPLETED = "completed"
    FAILED = "failed"
    WAITING_FOR_INPUT = "waiting_for_input"


class RequestedCall(BaseModel):
    """Schema for a tool call requested by the model."""
    id: str = Field(..., description="Caller-supplied call identifier")
    name: str = Field(..., description="Name of the tool to call")
    arguments: Any = Field(default_factory=dict, description="Arguments as a mapping or a JSON string")
    depends_on: List[str] = Field(default_factory=list, description="Call ids that must complete first")


class Step(BaseModel):
    """Schema for one tool invocation inside a plan."""
    id: str = Field(..., description="Step identifier, unique within the plan")
    tool_name: str = Field(..., description="Registry key of the tool to invoke")
    params: Dict[str, Any] = Field(default_factory=dict, description="Tool parameters, may contain {{placeholders}}")
    depends_on: List[str] = Field(default_factory=list, description="Step ids that must be completed first")
    status: StepStatus = Field(default=StepStatus.PENDING)
    result: Optional[Any] = Field(None, description="Raw tool result once completed")
    error: Optional[str] = Field(None, description="Last recorded failure message")
    retry_count: int = Field(default=0, ge=0)
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0)
    execution_time_ms: Optional[float] = Field(None, description="Duration of the last attempt")

    @property
    def is_terminal(self) -> bool:
        return self.status in (StepStatus.COMPLETED, StepStatus.FAILED)

    @property
    def awaiting_retry(self) -> bool:
        """True when the step failed transiently and is queued for another attempt."""
        return self.status == StepStatus.PENDING and self.retry_count > 0


class Plan(BaseModel):
    """Schema for a multi-step operation derived from one user turn."""
    id: str = Field(..., description="Unique plan identifier")
    steps: List[Step] = Field(default_factory=list, description="Steps in request order")
    status: PlanStatus = Field(default=PlanStatus.PLANNING)
    context: Dict[str, Any] = Field(default_factory=dict, description="Results shared between steps")
    user_message: str = Field("", description="Input that triggered the plan")
    aborted: bool = Field(default=False, description="Set when the caller stops the plan between drives")

    def get_step(self, step_id: str) -> Optional[Step]:
        for step in self.steps:
            if step.id == step_id:
                return step
        return None

    def steps_with_status(self, status: StepStatus) -> List[Step]:
        return [step for step in self.steps if step.status == status]


class PlanSummary(BaseModel):
    """Counts and failure messages used to report a plan back to the user."""
    plan_id: str
    status: PlanStatus
    total_steps: int
    completed_steps: int
    pending_steps: int
    failed_steps: int
    errors: List[str] = Field(default_factory=list, description="Messages of failed steps, in plan order")
