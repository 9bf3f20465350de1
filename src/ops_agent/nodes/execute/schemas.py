"""
Schemas for the Execute node.
"""

from pydantic import BaseModel, Field


class ExecuteData(BaseModel):
    """Outcome of driving a plan during one turn."""
    plan_id: str = Field(..., description="Plan that was driven")
    drive_cycles: int = Field(..., description="Number of drive calls made this turn")
    status: str = Field(..., description="Plan status after the last drive")
    execution_time_ms: float = Field(..., description="Wall time spent driving")
