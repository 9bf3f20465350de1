"""Session storage for the store operations agent."""

from .store import InMemorySessionStore, SessionRecord, SessionStore, new_session_id

__all__ = ["InMemorySessionStore", "SessionRecord", "SessionStore", "new_session_id"]
