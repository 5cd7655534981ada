# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:

    id: int
    username: str
    email: str
    password_hash: str
    created_at: datetime


@dataclass(slots=True, frozen=True)
class Registration:
    """Normalised registration input, ready to be hashed and persisted."""

    username: str
    email: str
    password: str


@dataclass(slots=True, frozen=True)
class SessionToken:

    user_id: int
    token: str
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now
