from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from datetime import UTC, datetime, timedelta

import pytest

from tasktracker.application.use_cases.tasks.create_task import CreateTaskUseCase
from tasktracker.application.use_cases.tasks.delete_task import DeleteTaskUseCase
from tasktracker.application.use_cases.tasks.load_dashboard import LoadDashboardUseCase
from tasktracker.application.use_cases.tasks.update_task_status import UpdateTaskStatusUseCase
from tasktracker.domain import Task, TaskDraft, TaskNotFoundError, TaskPriority, TaskStatus, User
from tasktracker.domain.tasks.repositories import TaskRepository
from tasktracker.shared.errors.base import UnauthenticatedError, ValidationError

START = datetime(2026, 1, 1, tzinfo=UTC)


class InMemoryTaskRepository(TaskRepository):
    def __init__(self) -> None:
        self.tasks: dict[int, Task] = {}
        self._seq = 1
        self._now = START

    def _tick(self) -> datetime:
        self._now += timedelta(seconds=1)
        return self._now

    def add(self, owner_id: int, draft: TaskDraft) -> Task:
        now = self._tick()
        task = Task(
            id=self._seq,
            owner_id=owner_id,
            title=draft.title,
            description=draft.description,
            status=TaskStatus.PENDING,
            priority=draft.priority,
            due_date=draft.due_date,
            created_at=now,
            updated_at=now,
        )
        self._seq += 1
        self.tasks[task.id] = task
        return task

    def list_by_owner(self, owner_id: int) -> Sequence[Task]:
        owned = [t for t in self.tasks.values() if t.owner_id == owner_id]
        return sorted(owned, key=lambda t: t.created_at, reverse=True)

    def _owned(self, owner_id: int, task_id: int) -> Task:
        task = self.tasks.get(task_id)
        if task is None or task.owner_id != owner_id:
            raise TaskNotFoundError()
        return task

    def update_status(self, owner_id: int, task_id: int, status: TaskStatus) -> Task:
        task = replace(self._owned(owner_id, task_id), status=status, updated_at=self._tick())
        self.tasks[task_id] = task
        return task

    def delete(self, owner_id: int, task_id: int) -> None:
        self._owned(owner_id, task_id)
        del self.tasks[task_id]


class StaticUsers:
    def __init__(self, *users: User) -> None:
        self._users = {u.id: u for u in users}

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)


@pytest.fixture()
def repo() -> InMemoryTaskRepository:
    return InMemoryTaskRepository()


def test_create_task_defaults(repo: InMemoryTaskRepository) -> None:
    task = CreateTaskUseCase(tasks=repo).execute(1, "T1")

    assert task.status is TaskStatus.PENDING
    assert task.priority is TaskPriority.MEDIUM
    assert task.owner_id == 1


def test_create_task_rejects_blank_title(repo: InMemoryTaskRepository) -> None:
    with pytest.raises(ValidationError):
        CreateTaskUseCase(tasks=repo).execute(1, "   ")
    assert repo.tasks == {}


@pytest.mark.parametrize(
    ("start", "target"),
    [
        (TaskStatus.COMPLETED, TaskStatus.PENDING),
        (TaskStatus.PENDING, TaskStatus.COMPLETED),
        (TaskStatus.IN_PROGRESS, TaskStatus.PENDING),
    ],
)
def test_any_status_transition_is_allowed(repo, start, target) -> None:
    task = CreateTaskUseCase(tasks=repo).execute(1, "T1")
    update = UpdateTaskStatusUseCase(tasks=repo)
    update.execute(1, task.id, start)

    updated = update.execute(1, task.id, target.value)

    assert updated.status is target
    assert updated.updated_at > task.updated_at


def test_update_status_rejects_unknown_status(repo: InMemoryTaskRepository) -> None:
    task = CreateTaskUseCase(tasks=repo).execute(1, "T1")
    with pytest.raises(ValidationError):
        UpdateTaskStatusUseCase(tasks=repo).execute(1, task.id, "archived")


def test_foreign_task_is_not_found_and_untouched(repo: InMemoryTaskRepository) -> None:
    task = CreateTaskUseCase(tasks=repo).execute(1, "mine")

    with pytest.raises(TaskNotFoundError):
        UpdateTaskStatusUseCase(tasks=repo).execute(2, task.id, TaskStatus.COMPLETED)
    with pytest.raises(TaskNotFoundError):
        DeleteTaskUseCase(tasks=repo).execute(2, task.id)

    assert repo.tasks[task.id] == task


def test_load_dashboard_scenario(repo: InMemoryTaskRepository) -> None:
    alice = User(id=1, username="alice", email="a@x.com", password_hash="h", created_at=START)
    task = CreateTaskUseCase(tasks=repo).execute(alice.id, "T1")
    UpdateTaskStatusUseCase(tasks=repo).execute(alice.id, task.id, "completed")

    dashboard = LoadDashboardUseCase(users=StaticUsers(alice), tasks=repo).execute(alice.id)

    assert dashboard.username == "alice"
    assert [t.title for t in dashboard.tasks] == ["T1"]
    assert dashboard.stats.total == 1
    assert dashboard.stats.completed == 1
    assert dashboard.stats.pending == 0


def test_load_dashboard_for_missing_user_is_unauthenticated(repo) -> None:
    with pytest.raises(UnauthenticatedError):
        LoadDashboardUseCase(users=StaticUsers(), tasks=repo).execute(99)
