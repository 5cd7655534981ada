"""Use-case for revoking session tokens."""

from __future__ import annotations

from tasktracker.application.services.session_manager import SessionManager


class LogoutUserUseCase:
    def __init__(self, *, sessions: SessionManager) -> None:
        self._sessions = sessions

    def execute(self, token: str | None) -> None:
        self._sessions.destroy_session(token)
