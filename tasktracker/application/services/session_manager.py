# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Opaque session tokens with a fixed expiry window."""

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from tasktracker.domain.users.entities import SessionToken
from tasktracker.domain.users.repositories import SessionStore
from tasktracker.shared.logging import logger

DEFAULT_LIFETIME = timedelta(hours=24)


def utcnow() -> datetime:
    return datetime.now(UTC)


class SessionManager:
    def __init__(
        self,
        *,
        store: SessionStore,
        lifetime: timedelta = DEFAULT_LIFETIME,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._store = store
        self._lifetime = lifetime
        self._clock = clock

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    def create_session(self, user_id: int) -> str:
        token = secrets.token_urlsafe(48)
        expires_at = self._clock() + self._lifetime
        self._store.save(SessionToken(user_id=user_id, token=token, expires_at=expires_at))
        logger.info(
            f"session.create: user={user_id} exp={expires_at.isoformat()} tok={token[:8]}…"
        )
        return token

    def resolve_session(self, token: str | None) -> int | None:
        if not token:
            return None
        session = self._store.get(token)
        if session is None:
            return None
        if session.is_expired(self._clock()):
            self._store.delete(token)
            logger.debug(f"session.resolve: expired tok={token[:8]}…")
            return None
        return session.user_id

    def destroy_session(self, token: str | None) -> None:
        if token:
            self._store.delete(token)

    def sweep_expired(self) -> int:
        removed = self._store.delete_expired(self._clock())
        if removed:
            logger.info(f"session.sweep: removed {removed} expired sessions")
        return removed
