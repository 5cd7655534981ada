# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import date

from tasktracker.shared.errors.validation import field_error

from .entities import TaskDraft, TaskPriority, TaskStatus

TITLE_MAX = 200
DESCRIPTION_MAX = 2000


def parse_status(value: str | TaskStatus) -> TaskStatus:
    try:
        return TaskStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in TaskStatus)
        raise field_error("status", f"Status must be one of: {allowed}", "enum") from None


def parse_priority(value: str | TaskPriority | None) -> TaskPriority:
    if value is None or value == "":
        return TaskPriority.MEDIUM
    try:
        return TaskPriority(value)
    except ValueError:
        allowed = ", ".join(p.value for p in TaskPriority)
        raise field_error("priority", f"Priority must be one of: {allowed}", "enum") from None


def validate_new_task(
    title: str | None,
    description: str | None = None,
    priority: str | TaskPriority | None = None,
    due_date: date | None = None,
) -> TaskDraft:
    title = (title or "").strip()
    if not title:
        raise field_error("title", "Title is required", "missing")
    if len(title) > TITLE_MAX:
        raise field_error("title", f"Title must be at most {TITLE_MAX} characters")

    description = (description or "").strip() or None
    if description and len(description) > DESCRIPTION_MAX:
        raise field_error(
            "description", f"Description must be at most {DESCRIPTION_MAX} characters"
        )

    return TaskDraft(
        title=title,
        description=description,
        priority=parse_priority(priority),
        due_date=due_date,
    )
