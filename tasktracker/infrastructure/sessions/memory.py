# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from threading import Lock

from tasktracker.domain.users.entities import SessionToken
from tasktracker.domain.users.repositories import SessionStore


class InMemorySessionStore(SessionStore):
    """Process-local session map. Sessions are lost on restart."""

    def __init__(self) -> None:
        self._sessions: dict[str, SessionToken] = {}
        self._lock = Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def save(self, session: SessionToken) -> None:
        with self._lock:
            self._sessions[session.token] = session

    def get(self, token: str) -> SessionToken | None:
        with self._lock:
            return self._sessions.get(token)

    def delete(self, token: str) -> None:
        with self._lock:
            self._sessions.pop(token, None)

    def delete_expired(self, now: datetime) -> int:
        with self._lock:
            expired = [token for token, s in self._sessions.items() if s.is_expired(now)]
            for token in expired:
                del self._sessions[token]
            return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()
