# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from tasktracker.domain.tasks.entities import Task, TaskStats, compute_stats
from tasktracker.domain.tasks.repositories import TaskRepository
from tasktracker.domain.users.repositories import UserRepository
from tasktracker.shared.errors.base import UnauthenticatedError


@dataclass(slots=True, frozen=True)
class Dashboard:
    username: str
    tasks: Sequence[Task]
    stats: TaskStats


class LoadDashboardUseCase:
    def __init__(self, *, users: UserRepository, tasks: TaskRepository) -> None:
        self._users = users
        self._tasks = tasks

    def execute(self, owner_id: int) -> Dashboard:
        user = self._users.find_by_id(owner_id)
        if user is None:
            # Session outlived its user row.
            raise UnauthenticatedError()
        tasks = list(self._tasks.list_by_owner(owner_id))
        return Dashboard(username=user.username, tasks=tasks, stats=compute_stats(tasks))
