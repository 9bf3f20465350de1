"""Initialize node for loading session state."""

from .initialize import initialize_node
from .schemas import InitializeData

__all__ = ["initialize_node", "InitializeData"]
