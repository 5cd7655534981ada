# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(slots=True, frozen=True)
class Task:

    id: int
    owner_id: int
    title: str
    description: str | None
    status: TaskStatus
    priority: TaskPriority
    due_date: date | None
    created_at: datetime
    updated_at: datetime


@dataclass(slots=True, frozen=True)
class TaskDraft:
    """A validated, not yet persisted task. Status always starts as pending."""

    title: str
    description: str | None = None
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: date | None = None


@dataclass(slots=True, frozen=True)
class TaskStats:
    total: int = 0
    pending: int = 0
    in_progress: int = 0
    completed: int = 0


def compute_stats(tasks: Iterable[Task]) -> TaskStats:
    counts = {status: 0 for status in TaskStatus}
    total = 0
    for task in tasks:
        counts[task.status] += 1
        total += 1
    return TaskStats(
        total=total,
        pending=counts[TaskStatus.PENDING],
        in_progress=counts[TaskStatus.IN_PROGRESS],
        completed=counts[TaskStatus.COMPLETED],
    )
