"""
Schemas for the Draft node.
"""

from typing import Optional
from pydantic import BaseModel, Field


class DraftData(BaseModel):
    """Data structure for the drafted reply."""
    response: str = Field(..., description="Reply shown to the user")
    plan_status: str = Field(..., description="Plan status the reply describes")
    generation_time_ms: float = Field(..., description="Time spent in the model call")
    note: Optional[str] = Field(None, description="Failure or pending note appended to the reply")
