"""Plan node for tool selection and plan building."""

from .plan import plan_node
from .schemas import PlanDecision

__all__ = ["plan_node", "PlanDecision"]
