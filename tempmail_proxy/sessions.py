# Copyright @ISmartCoder
# Updates Channel https://t.me/abirxdhackz
"""In-memory session store. Nothing here survives a restart."""

import logging
import re
import secrets
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Optional

logger = logging.getLogger(__name__)

SESSION_ID_PATTERN = re.compile(r'^[A-Za-z0-9_-]{16,64}$')


@dataclass
class Session:
    address: str
    local_part: str
    domain: str
    provider: str
    credential: Any = field(default=None, repr=False)
    adapter: Any = field(default=None, repr=False, compare=False)
    id: Optional[str] = None
    created_at: float = 0.0
    last_activity: float = 0.0
    message_count: int = 0


def is_valid_session_id(value):
    return bool(value) and bool(SESSION_ID_PATTERN.match(value))


class SessionStore:
    def __init__(self, clock=time.time):
        self._clock = clock
        self._sessions = {}
        self._lock = threading.Lock()
        self._reserved = 0

    def __len__(self):
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id):
        with self._lock:
            return session_id in self._sessions

    def reserve(self, max_sessions):
        """Claim a slot for a session that is still being created.

        Stored sessions and outstanding reservations together never exceed
        ``max_sessions``. A claimed slot is consumed by ``insert(reserved=True)``
        or given back with ``release()``.
        """
        with self._lock:
            if len(self._sessions) + self._reserved >= max_sessions:
                return False
            self._reserved += 1
            return True

    def release(self):
        with self._lock:
            self._reserved = max(self._reserved - 1, 0)

    def insert(self, session, reserved=False):
        now = self._clock()
        with self._lock:
            if reserved:
                self._reserved = max(self._reserved - 1, 0)
            session_id = secrets.token_urlsafe(18)
            while session_id in self._sessions:
                session_id = secrets.token_urlsafe(18)
            session.id = session_id
            session.created_at = now
            session.last_activity = now
            self._sessions[session_id] = session
        return session_id

    def get(self, session_id):
        with self._lock:
            return self._sessions.get(session_id)

    def touch(self, session_id, message_count=None):
        now = self._clock()
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return
            session.last_activity = max(now, session.created_at)
            if message_count is not None:
                session.message_count = message_count

    def evict_expired(self, max_age):
        """Remove sessions with ``now - created_at > max_age``; the boundary itself is kept."""
        now = self._clock()
        with self._lock:
            expired = [sid for sid, s in self._sessions.items() if now - s.created_at > max_age]
            for sid in expired:
                del self._sessions[sid]
        if expired:
            logger.info("Evicted %d session(s) older than %ss", len(expired), max_age)
        return len(expired)

    def evict_emergency(self, emergency_age):
        removed = self.evict_expired(emergency_age)
        if removed:
            logger.warning("Emergency eviction removed %d session(s)", removed)
        return removed

    def evict_excess(self, max_sessions):
        with self._lock:
            excess = len(self._sessions) - max_sessions
            if excess <= 0:
                return 0
            # dicts keep insertion order, so sorting by created_at is stable on ties
            oldest = sorted(self._sessions.values(), key=lambda s: s.created_at)[:excess]
            for session in oldest:
                del self._sessions[session.id]
        logger.info("Evicted %d oldest session(s) to stay within %d", excess, max_sessions)
        return excess
