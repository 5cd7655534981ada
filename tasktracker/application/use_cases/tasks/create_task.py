# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import date

from tasktracker.domain.tasks.entities import Task, TaskPriority
from tasktracker.domain.tasks.repositories import TaskRepository
from tasktracker.domain.tasks.validation import validate_new_task


class CreateTaskUseCase:
    def __init__(self, *, tasks: TaskRepository) -> None:
        self._tasks = tasks

    def execute(
        self,
        owner_id: int,
        title: str,
        description: str | None = None,
        priority: str | TaskPriority | None = None,
        due_date: date | None = None,
    ) -> Task:
        draft = validate_new_task(title, description, priority, due_date)
        return self._tasks.add(owner_id, draft)
