# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from tasktracker.domain.tasks.entities import Task as DomainTask
from tasktracker.domain.tasks.entities import TaskDraft, TaskPriority, TaskStatus
from tasktracker.domain.tasks.exceptions import TaskNotFoundError
from tasktracker.domain.tasks.repositories import TaskRepository
from tasktracker.infrastructure.db.models import Task
from tasktracker.infrastructure.unit_of_work import as_utc, unit_of_work_scope


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _to_domain(row: Task) -> DomainTask:
    return DomainTask(
        id=row.id,
        owner_id=row.owner_id,
        title=row.title,
        description=row.description,
        status=TaskStatus(row.status),
        priority=TaskPriority(row.priority),
        due_date=row.due_date,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


class SqlAlchemyTaskRepository(TaskRepository):
    """Task persistence where every query is filtered by the owning user."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._session_factory = session_factory
        self._clock = clock

    @staticmethod
    def _owned(session: Session, owner_id: int, task_id: int) -> Task:
        row = (
            session.query(Task)
            .filter(Task.id == task_id, Task.owner_id == owner_id)
            .first()
        )
        if row is None:
            raise TaskNotFoundError()
        return row

    def add(self, owner_id: int, draft: TaskDraft) -> DomainTask:
        now = self._clock()
        with unit_of_work_scope(self._session_factory) as session:
            row = Task(
                owner_id=owner_id,
                title=draft.title,
                description=draft.description,
                status=TaskStatus.PENDING.value,
                priority=draft.priority.value,
                due_date=draft.due_date,
                created_at=now,
                updated_at=now,
            )
            session.add(row)
            session.flush()
            session.refresh(row)
            return _to_domain(row)

    def list_by_owner(self, owner_id: int) -> Sequence[DomainTask]:
        with unit_of_work_scope(self._session_factory) as session:
            rows = (
                session.query(Task)
                .filter(Task.owner_id == owner_id)
                .order_by(Task.created_at.desc(), Task.id.asc())
                .all()
            )
            return [_to_domain(row) for row in rows]

    def update_status(self, owner_id: int, task_id: int, status: TaskStatus) -> DomainTask:
        with unit_of_work_scope(self._session_factory) as session:
            row = self._owned(session, owner_id, task_id)
            row.status = status.value
            row.updated_at = self._clock()
            session.flush()
            return _to_domain(row)

    def delete(self, owner_id: int, task_id: int) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            session.delete(self._owned(session, owner_id, task_id))
