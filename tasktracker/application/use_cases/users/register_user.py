# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from tasktracker.domain.users.entities import User
from tasktracker.domain.users.exceptions import UserAlreadyExistsError
from tasktracker.domain.users.repositories import PasswordHasher, UserRepository
from tasktracker.domain.users.validation import validate_registration


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, username: str, email: str, password: str) -> User:
        registration = validate_registration(username, email, password)
        if self._users.find_by_username(registration.username) or self._users.find_by_email(
            registration.email
        ):
            raise UserAlreadyExistsError()
        hashed = self._password_hasher.hash(registration.password)
        user = User(
            id=0,
            username=registration.username,
            email=registration.email,
            password_hash=hashed,
            created_at=datetime.now(UTC),
        )
        return self._users.add(user)
