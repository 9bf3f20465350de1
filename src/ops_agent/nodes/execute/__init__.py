"""Execute node for driving operation plans."""

from .execute import drive_with_retries, execute_node
from .schemas import ExecuteData

__all__ = ["execute_node", "drive_with_retries", "ExecuteData"]
