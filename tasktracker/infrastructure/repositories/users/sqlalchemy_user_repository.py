# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tasktracker.domain.users.entities import SessionToken as DomainSessionToken
from tasktracker.domain.users.entities import User as DomainUser
from tasktracker.domain.users.exceptions import UserAlreadyExistsError
from tasktracker.domain.users.repositories import SessionStore, UserRepository
from tasktracker.infrastructure.db.models import SessionToken, User
from tasktracker.infrastructure.unit_of_work import as_utc, unit_of_work_scope
from tasktracker.shared.logging import logger


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        created_at=as_utc(row.created_at),
    )


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    if getattr(orig, "sqlstate", None) == "23505" or getattr(orig, "pgcode", None) == "23505":
        return True
    message = str(orig).lower()
    return "unique" in message or "duplicate" in message


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def find_by_username(self, username: str) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.query(User).filter(User.username == username).first()
            return _to_domain(row) if row else None

    def find_by_email(self, email: str) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.query(User).filter(User.email == email).first()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def add(self, user: DomainUser) -> DomainUser:
        with unit_of_work_scope(self._session_factory) as session:
            row = User(
                username=user.username,
                email=user.email,
                password_hash=user.password_hash,
                created_at=user.created_at,
            )
            session.add(row)
            try:
                session.flush()
            except IntegrityError as exc:
                if not _is_unique_violation(exc):
                    raise
                # Lost a registration race against the unique constraints.
                logger.info("users.add: unique constraint rejected new user")
                raise UserAlreadyExistsError() from exc
            session.refresh(row)
            logger.info(f"users.add: created user_id={row.id}")
            return _to_domain(row)


class SqlAlchemySessionStore(SessionStore):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def save(self, session_token: DomainSessionToken) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            session.add(
                SessionToken(
                    user_id=session_token.user_id,
                    token=session_token.token,
                    expires_at=session_token.expires_at,
                )
            )

    def get(self, token: str) -> DomainSessionToken | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.query(SessionToken).filter(SessionToken.token == token).first()
            if not row:
                return None
            return DomainSessionToken(
                user_id=row.user_id,
                token=row.token,
                expires_at=as_utc(row.expires_at),
            )

    def delete(self, token: str) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            session.query(SessionToken).filter(SessionToken.token == token).delete()

    def delete_expired(self, now: datetime) -> int:
        with unit_of_work_scope(self._session_factory) as session:
            return (
                session.query(SessionToken)
                .filter(SessionToken.expires_at <= now)
                .delete(synchronize_session=False)
            )
