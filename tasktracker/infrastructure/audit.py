# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Audit trail for account and task events.

Entries go through the regular log pipeline with ``audit`` bound in
``extra``, so a sink can pick them out with a filter.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from tasktracker.shared.logging import logger

_REDACTED_KEYS = ("password", "token", "secret", "email")


class AuditAction(str, Enum):
    # Accounts
    REGISTER = "register"
    REGISTER_FAILED = "register_failed"
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"
    LOGOUT = "logout"

    # Tasks
    TASK_CREATED = "task_created"
    TASK_STATUS_UPDATED = "task_status_updated"
    TASK_DELETED = "task_deleted"


def _redact(details: Mapping[str, Any]) -> dict[str, Any]:
    return {
        key: "***" if any(marker in key.lower() for marker in _REDACTED_KEYS) else value
        for key, value in details.items()
    }


@dataclass(frozen=True, slots=True)
class AuditEvent:
    action: AuditAction
    user_id: int | None = None
    ip_address: str | None = None
    success: bool = True
    details: Mapping[str, Any] = field(default_factory=dict)

    def render(self) -> str:
        parts = [
            f"action={self.action.value}",
            f"user={self.user_id if self.user_id is not None else '-'}",
            f"ip={self.ip_address or '-'}",
            f"ok={str(self.success).lower()}",
        ]
        parts.extend(f"{key}={value}" for key, value in sorted(_redact(self.details).items()))
        return "AUDIT " + " ".join(parts)


def audit_log(
    action: AuditAction,
    *,
    user_id: int | None = None,
    ip_address: str | None = None,
    details: Mapping[str, Any] | None = None,
    success: bool = True,
) -> AuditEvent:
    event = AuditEvent(
        action=action,
        user_id=user_id,
        ip_address=ip_address,
        success=success,
        details=dict(details or {}),
    )
    bound = logger.bind(audit=True, audit_action=action.value)
    if success:
        bound.info(event.render())
    else:
        bound.warning(event.render())
    return event


__all__ = ["AuditAction", "AuditEvent", "audit_log"]
