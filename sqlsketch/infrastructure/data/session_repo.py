from __future__ import annotations

from collections import OrderedDict

from ...domain.models import SessionState


class InMemorySessionRepository:
    """Session states keyed by session id; the least recently used is evicted past ``max_sessions``."""

    def __init__(self, max_sessions: int = 1000):
        self.max_sessions = max_sessions
        self._store: OrderedDict[str, SessionState] = OrderedDict()

    def __len__(self) -> int:
        return len(self._store)

    def get(self, session_id: str) -> SessionState:
        """Return the session's state, creating a fresh one on first use."""
        state = self._store.get(session_id)
        if state is None:
            state = SessionState()
            self._store[session_id] = state
            while len(self._store) > self.max_sessions:
                self._store.popitem(last=False)
        else:
            self._store.move_to_end(session_id)
        return state

    def clear(self, session_id: str) -> None:
        self._store.pop(session_id, None)
