"""Finalize node for saving session state."""

from .finalize import ERROR_REPLY_PREFIX, finalize_node
from .schemas import FinalizeData

__all__ = ["finalize_node", "FinalizeData", "ERROR_REPLY_PREFIX"]
