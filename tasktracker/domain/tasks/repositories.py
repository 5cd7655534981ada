# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Task, TaskDraft, TaskStatus


class TaskRepository(Protocol):
    def add(self, owner_id: int, draft: TaskDraft) -> Task: ...
    def list_by_owner(self, owner_id: int) -> Sequence[Task]: ...
    def update_status(self, owner_id: int, task_id: int, status: TaskStatus) -> Task: ...
    def delete(self, owner_id: int, task_id: int) -> None: ...
