# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from tasktracker.domain.tasks.repositories import TaskRepository


class DeleteTaskUseCase:
    def __init__(self, *, tasks: TaskRepository) -> None:
        self._tasks = tasks

    def execute(self, owner_id: int, task_id: int) -> None:
        self._tasks.delete(owner_id, task_id)
