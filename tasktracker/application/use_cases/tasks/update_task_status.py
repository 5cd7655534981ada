# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from tasktracker.domain.tasks.entities import Task, TaskStatus
from tasktracker.domain.tasks.repositories import TaskRepository
from tasktracker.domain.tasks.validation import parse_status


class UpdateTaskStatusUseCase:
    """Any status may move to any other; no workflow is enforced."""

    def __init__(self, *, tasks: TaskRepository) -> None:
        self._tasks = tasks

    def execute(self, owner_id: int, task_id: int, status: str | TaskStatus) -> Task:
        return self._tasks.update_status(owner_id, task_id, parse_status(status))
