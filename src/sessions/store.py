"""Session storage for conversation history and in-flight operation plans."""

import asyncio
import logging
import random
import string
import time
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from typing import Dict, Any, AsyncIterator, List, Optional
from pydantic import BaseModel, Field

from operations import Plan

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL_SECONDS = 7 * 24 * 60 * 60


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_session_id() -> str:
    """Generate a session id of the form chat_<millis>_<random7>."""
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=7))
    return f"chat_{int(time.time() * 1000)}_{suffix}"


class SessionRecord(BaseModel):
    """Everything remembered about one chat session."""
    messages: List[Dict[str, Any]] = Field(default_factory=list, description="User/assistant history")
    active_plan: Optional[Plan] = Field(None, description="Plan still in progress for this session")
    updated_at: datetime = Field(default_factory=_utcnow)


class SessionStore(ABC):
    """Async key/value store of SessionRecord objects keyed by session id."""

    def __init__(self):
        self._key_locks: Dict[str, asyncio.Lock] = {}
        self._lock_users: Dict[str, int] = {}

    def session_lock(self, session_id: str) -> asyncio.Lock:
        """Lock serializing turns for one session id."""
        lock = self._key_locks.get(session_id)
        if lock is None:
            lock = asyncio.Lock()
            self._key_locks[session_id] = lock
        return lock

    @asynccontextmanager
    async def session_turn(self, session_id: str) -> AsyncIterator[None]:
        """Hold the session's lock for one turn. Its lock is kept while any turn uses it."""
        lock = self.session_lock(session_id)
        self._lock_users[session_id] = self._lock_users.get(session_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[session_id] -= 1
            if not self._lock_users[session_id]:
                del self._lock_users[session_id]

    def _release_lock(self, session_id: str) -> None:
        """Forget a session's lock unless a turn holds or waits for it."""
        if session_id not in self._lock_users:
            self._key_locks.pop(session_id, None)

    @abstractmethod
    async def get(self, session_id: str) -> Optional[SessionRecord]:
        """Return the record for a session, or None if unknown or expired."""

    @abstractmethod
    async def set(self, session_id: str, record: SessionRecord) -> None:
        """Store the record for a session."""

    @abstractmethod
    async def delete(self, session_id: str) -> bool:
        """Delete a session. Returns True if it existed."""


class InMemorySessionStore(SessionStore):
    """In-process session store with TTL support.

    Expired sessions are swept on every write, so ids that are never read
    again do not accumulate. Session locks held by a running turn are never
    discarded.
    """

    def __init__(self, ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS):
        super().__init__()
        self.ttl_seconds = ttl_seconds
        self.sessions: Dict[str, Dict[str, Any]] = {}
        self._lock = asyncio.Lock()

    async def set(self, session_id: str, record: SessionRecord) -> None:
        async with self._lock:
            record.updated_at = _utcnow()
            self.sessions[session_id] = {
                "record": record,
                "expires_at": record.updated_at + timedelta(seconds=self.ttl_seconds),
            }
            self._evict_expired(record.updated_at)

    async def get(self, session_id: str) -> Optional[SessionRecord]:
        async with self._lock:
            entry = self.sessions.get(session_id)
            if entry is None:
                return None

            if _utcnow() > entry["expires_at"]:
                logger.info(f"Session {session_id} expired")
                del self.sessions[session_id]
                self._release_lock(session_id)
                return None

            return entry["record"]

    async def delete(self, session_id: str) -> bool:
        async with self._lock:
            self._release_lock(session_id)
            if session_id in self.sessions:
                del self.sessions[session_id]
                return True
            return False

    async def clear_expired(self) -> int:
        """Drop expired sessions and return how many were removed."""
        async with self._lock:
            return self._evict_expired(_utcnow())

    def _evict_expired(self, now: datetime) -> int:
        expired = [
            session_id for session_id, entry in self.sessions.items()
            if now > entry["expires_at"]
        ]
        for session_id in expired:
            del self.sessions[session_id]

        # Locks of sessions that are gone, unless a turn still holds them
        for session_id in [key for key in self._key_locks if key not in self.sessions]:
            self._release_lock(session_id)

        if expired:
            logger.info(f"Cleared {len(expired)} expired sessions")
        return len(expired)
