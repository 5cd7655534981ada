# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Any

_MASK = "***REDACTED***"


def _assignment(key: str, value: str = r"[^'\"\s,;&}]+") -> re.Pattern[str]:
    return re.compile(rf"({key}\s*[:=]\s*['\"]?)({value})", re.IGNORECASE)


# Order matters: hashes first so that "password_hash=scrypt:..." is caught whole.
_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"(?:scrypt|pbkdf2)[:$][^\s'\",}]+"), "***HASH***"),
    (_assignment(r"password(?:_confirm)?"), rf"\1{_MASK}"),
    (_assignment(r"session[_-]?token"), rf"\1{_MASK}"),
    (_assignment(r"secret[_-]?key"), rf"\1{_MASK}"),
    (_assignment(r"token", r"[A-Za-z0-9_\-\.]{20,}"), rf"\1{_MASK}"),
    (re.compile(r"(cookie\s*:\s*)([^\r\n]+)", re.IGNORECASE), rf"\1{_MASK}"),
    (
        re.compile(r"(postgres(?:ql)?|mysql)(\+\w+)?://([^:/\s]+):([^@\s]+)@"),
        rf"\1\2://\3:{_MASK}@",
    ),
    (re.compile(r"[A-Za-z0-9._%+-]+@([A-Za-z0-9.-]+\.[A-Za-z]{2,})"), r"***@\1"),
]


def sanitize_message(message: str) -> str:
    """Mask credentials, session tokens, hashes and email local parts."""
    for pattern, replacement in _RULES:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    record["message"] = sanitize_message(record["message"])
    return True
