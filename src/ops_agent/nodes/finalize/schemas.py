"""
Schemas for the Finalize node.
"""

from typing import Optional
from pydantic import BaseModel


class FinalizeData(BaseModel):
    """Data structure for finalize node."""
    session_saved: bool = False
    messages_count: int = 0
    active_plan_id: Optional[str] = None
    error: Optional[str] = None
