# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from tasktracker.application.services.session_manager import SessionManager
from tasktracker.shared.errors.base import UnauthenticatedError


class AccessGuard:
    def __init__(self, *, sessions: SessionManager) -> None:
        self._sessions = sessions

    def require_authenticated(self, token: str | None) -> int:
        user_id = self._sessions.resolve_session(token)
        if user_id is None:
            raise UnauthenticatedError()
        return user_id
