"""
Schemas for the Plan node.
"""

from typing import Dict, Any, List, Optional
from pydantic import BaseModel, Field


class PlanDecision(BaseModel):
    """Outcome of the plan node for one turn."""
    direct_reply: Optional[str] = Field(None, description="Model reply when no tools are needed")
    tool_calls: List[Dict[str, Any]] = Field(default_factory=list, description="Tool calls requested by the model")
