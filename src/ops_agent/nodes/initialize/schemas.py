"""
Schemas for the Initialize node.
"""

from typing import Optional
from pydantic import BaseModel, Field


class InitializeData(BaseModel):
    """What initialize found for the session."""
    session_id: str = Field(..., description="Session the turn belongs to")
    messages_count: int = Field(..., description="Number of history messages loaded")
    active_plan_id: Optional[str] = Field(None, description="Plan carried over from an earlier turn")
    active_plan_status: Optional[str] = Field(None, description="Status of the carried-over plan")
