"""Draft node for phrasing replies from plan results."""

from .draft import draft_node
from .schemas import DraftData

__all__ = ["draft_node", "DraftData"]
