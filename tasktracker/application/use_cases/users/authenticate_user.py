# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from tasktracker.domain.users.exceptions import InvalidCredentialsError
from tasktracker.domain.users.repositories import PasswordHasher, UserRepository
from tasktracker.domain.users.validation import normalize_email


class AuthenticateUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        # Stands in for the stored hash of an unknown email, so every
        # failure path runs exactly one verification.
        self._unknown_user_hash = password_hasher.hash("unknown-user")

    def execute(self, email: str, password: str) -> int:
        user = self._users.find_by_email(normalize_email(email))
        stored_hash = user.password_hash if user is not None else self._unknown_user_hash
        matches = self._password_hasher.verify(password or "", stored_hash)
        if user is None or not matches or not password:
            raise InvalidCredentialsError()
        return user.id
