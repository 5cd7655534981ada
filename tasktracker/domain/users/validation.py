# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re

from tasktracker.shared.errors.validation import field_error

from .entities import Registration

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
USERNAME_MAX = 64
EMAIL_MAX = 254


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def validate_registration(username: str, email: str, password: str) -> Registration:
    username = (username or "").strip()
    email = normalize_email(email)

    if not username:
        raise field_error("username", "Username is required", "missing")
    if len(username) > USERNAME_MAX:
        raise field_error("username", f"Username must be at most {USERNAME_MAX} characters")
    if not email:
        raise field_error("email", "Email is required", "missing")
    if len(email) > EMAIL_MAX or not EMAIL_RE.match(email):
        raise field_error("email", "Email address is not valid")
    if not password:
        raise field_error("password", "Password is required", "missing")

    return Registration(username=username, email=email, password=password)
