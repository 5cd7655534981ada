# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .tasks.entities import Task, TaskDraft, TaskPriority, TaskStats, TaskStatus, compute_stats
from .tasks.exceptions import TaskNotFoundError
from .users.entities import Registration, SessionToken, User
from .users.exceptions import InvalidCredentialsError, UserAlreadyExistsError

__all__ = [
    "InvalidCredentialsError",
    "Registration",
    "SessionToken",
    "Task",
    "TaskDraft",
    "TaskNotFoundError",
    "TaskPriority",
    "TaskStats",
    "TaskStatus",
    "User",
    "UserAlreadyExistsError",
    "compute_stats",
]
