"""Admin Session Store: opaque token -> admin id, expiring after a fixed TTL.

Invariants:
    - Tokens are 32 random bytes, urlsafe-encoded; the admin id is the only payload
    - get() returns None for missing, expired, destroyed or malformed tokens
    - Expiry is fixed from issuance (no sliding refresh)

Design Decisions:
    - In-process cachetools.TTLCache: sessions are lost on restart and not shared
      between workers (single-process uvicorn)
    - Singleton session_store initialized on startup, like db_manager
"""

import secrets
import threading
import time
from uuid import UUID

from cachetools import TTLCache


class InMemorySessionStore:
    """SessionStore backed by a TTL cache."""

    def __init__(
        self, ttl_seconds: int, max_entries: int = 10_000, timer=time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._sessions = TTLCache(
            maxsize=max_entries, ttl=ttl_seconds, timer=timer,
        )
        self._lock = threading.Lock()

    def create(self, admin_id: UUID) -> str:
        token = secrets.token_urlsafe(32)
        with self._lock:
            self._sessions[token] = admin_id
        return token

    def get(self, token: str | None) -> UUID | None:
        if not token:
            return None
        with self._lock:
            return self._sessions.get(token)

    def destroy(self, token: str | None) -> None:
        if not token:
            return
        with self._lock:
            self._sessions.pop(token, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


# Singleton (initialized on startup)
session_store: InMemorySessionStore | None = None


def init_session_store(ttl_seconds: int, max_entries: int = 10_000) -> InMemorySessionStore:
    global session_store
    session_store = InMemorySessionStore(ttl_seconds, max_entries)
    return session_store


def get_session_store() -> InMemorySessionStore:
    """FastAPI dependency for the admin session store."""
    if session_store is None:
        raise RuntimeError("Session store not initialized")
    return session_store
