# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from tasktracker.application.services.session_manager import SessionManager
from tasktracker.application.use_cases.users.authenticate_user import \
    AuthenticateUserUseCase


class LoginUserUseCase:
    def __init__(
        self,
        *,
        authenticate: AuthenticateUserUseCase,
        sessions: SessionManager,
    ) -> None:
        self._authenticate = authenticate
        self._sessions = sessions

    def execute(self, email: str, password: str) -> tuple[int, str]:
        user_id = self._authenticate.execute(email, password)
        return user_id, self._sessions.create_session(user_id)
