# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .entities import SessionToken, User


class UserRepository(Protocol):
    def find_by_username(self, username: str) -> User | None: ...
    def find_by_email(self, email: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...
    def add(self, user: User) -> User: ...


class SessionStore(Protocol):
    def save(self, session: SessionToken) -> None: ...
    def get(self, token: str) -> SessionToken | None: ...
    def delete(self, token: str) -> None: ...
    def delete_expired(self, now: datetime) -> int: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
