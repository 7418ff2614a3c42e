"""Session memory store - per-session, in-process conversation history."""

import asyncio
from collections.abc import Sequence

from rag_agent.schemas.requests import Message


class SessionStore:
    """Ordered, append-only message history keyed by session id.

    Sessions are created lazily on first append and live for the lifetime
    of the process. Callers that read history and then append within one
    request must hold ``session_lock(session_id)`` for the whole sequence;
    locks are per key, so different sessions never wait on each other.

    Locks are ``asyncio.Lock`` objects and must only be used from the event
    loop that serves requests.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, list[Message]] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def get(self, session_id: str) -> tuple[Message, ...]:
        """Return the full history for a session (empty if unseen)."""
        return tuple(self._sessions.get(session_id, ()))

    def append(self, session_id: str, message: Message) -> None:
        """Append a message to a session, creating the session if absent."""
        self._sessions.setdefault(session_id, []).append(message)

    def recent_window(self, session_id: str, n: int) -> list[Message]:
        """Return the last ``n`` messages of a session, oldest first."""
        if n <= 0:
            return []
        return list(self._sessions.get(session_id, ())[-n:])

    def session_lock(self, session_id: str) -> asyncio.Lock:
        """Return the mutual-exclusion lock for one session id."""
        # No await between lookup and insert, so this is atomic on the loop.
        lock = self._locks.get(session_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[session_id] = lock
        return lock

    def session_ids(self) -> Sequence[str]:
        return list(self._sessions)

    def __len__(self) -> int:
        return len(self._sessions)
