# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, redirect, render_template, request, url_for
from pydantic import ValidationError as PydanticValidationError

from tasktracker.application.services.access_guard import AccessGuard
from tasktracker.application.use_cases.tasks.create_task import CreateTaskUseCase
from tasktracker.application.use_cases.tasks.delete_task import DeleteTaskUseCase
from tasktracker.application.use_cases.tasks.load_dashboard import \
    LoadDashboardUseCase
from tasktracker.application.use_cases.tasks.update_task_status import \
    UpdateTaskStatusUseCase
from tasktracker.domain.tasks.entities import TaskPriority, TaskStatus
from tasktracker.domain.tasks.exceptions import TaskNotFoundError
from tasktracker.infrastructure.audit import AuditAction, audit_log
from tasktracker.interfaces.http.auth import client_ip, current_user_id, login_required
from tasktracker.interfaces.http.dto.tasks import TaskCreateForm, TaskStatusForm
from tasktracker.shared.errors.base import ValidationError
from tasktracker.shared.errors.validation import first_message, raise_validation_error
from tasktracker.shared.logging import logger


def _parse_task_id(raw: str) -> int | None:
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value > 0 else None


class TasksController:
    def __init__(
        self,
        *,
        guard: AccessGuard,
        load_dashboard: LoadDashboardUseCase,
        create_task: CreateTaskUseCase,
        update_status: UpdateTaskStatusUseCase,
        delete_task: DeleteTaskUseCase,
    ) -> None:
        self._guard = guard
        self._load_dashboard = load_dashboard
        self._create_task = create_task
        self._update_status = update_status
        self._delete_task = delete_task

    def _render_dashboard(self, *, error: str | None = None, status: HTTPStatus = HTTPStatus.OK):
        dashboard = self._load_dashboard.execute(current_user_id())
        return (
            render_template(
                "dashboard.html",
                username=dashboard.username,
                tasks=dashboard.tasks,
                stats=dashboard.stats,
                statuses=list(TaskStatus),
                priorities=list(TaskPriority),
                error=error,
                form=request.form.to_dict() if error else {},
            ),
            status,
        )

    def dashboard(self):
        return self._render_dashboard()

    def create(self):
        user_id = current_user_id()
        try:
            try:
                form = TaskCreateForm.model_validate(request.form.to_dict())
            except PydanticValidationError as exc:
                raise_validation_error(exc)
            task = self._create_task.execute(
                user_id,
                form.title,
                description=form.description,
                priority=form.priority,
                due_date=form.due_date,
            )
        except ValidationError as exc:
            logger.info(f"tasks.create: rejected user={user_id} fields={exc.fields}")
            return self._render_dashboard(
                error=first_message(exc), status=HTTPStatus.UNPROCESSABLE_ENTITY
            )

        audit_log(AuditAction.TASK_CREATED, user_id=user_id, ip_address=client_ip(),
                  details={"task_id": task.id})
        return redirect(url_for("tasks.dashboard"))

    def update_status(self, task_id: str):
        user_id = current_user_id()
        parsed_id = _parse_task_id(task_id)
        try:
            try:
                form = TaskStatusForm.model_validate(request.form.to_dict())
            except PydanticValidationError as exc:
                raise_validation_error(exc)
            if parsed_id is None:
                raise TaskNotFoundError()
            task = self._update_status.execute(user_id, parsed_id, form.status)
        except ValidationError as exc:
            return self._render_dashboard(
                error=first_message(exc), status=HTTPStatus.UNPROCESSABLE_ENTITY
            )
        except TaskNotFoundError:
            logger.info(f"tasks.update_status: no task {task_id!r} for user={user_id}")
            return redirect(url_for("tasks.dashboard"))

        audit_log(
            AuditAction.TASK_STATUS_UPDATED,
            user_id=user_id,
            ip_address=client_ip(),
            details={"task_id": task.id, "status": task.status.value},
        )
        return redirect(url_for("tasks.dashboard"))

    def delete(self, task_id: str):
        user_id = current_user_id()
        parsed_id = _parse_task_id(task_id)
        try:
            if parsed_id is None:
                raise TaskNotFoundError()
            self._delete_task.execute(user_id, parsed_id)
        except TaskNotFoundError:
            logger.info(f"tasks.delete: no task {task_id!r} for user={user_id}")
            return redirect(url_for("tasks.dashboard"))

        audit_log(AuditAction.TASK_DELETED, user_id=user_id, ip_address=client_ip(),
                  details={"task_id": parsed_id})
        return redirect(url_for("tasks.dashboard"))

    def as_blueprint(self) -> Blueprint:
        guarded = login_required(self._guard)
        bp = Blueprint("tasks", __name__)
        bp.add_url_rule(
            "/dashboard", endpoint="dashboard", view_func=guarded(self.dashboard), methods=["GET"]
        )
        bp.add_url_rule("/tasks", endpoint="create", view_func=guarded(self.create), methods=["POST"])
        bp.add_url_rule(
            "/tasks/<task_id>/status",
            endpoint="update_status",
            view_func=guarded(self.update_status),
            methods=["POST"],
        )
        bp.add_url_rule(
            "/tasks/<task_id>/delete",
            endpoint="delete",
            view_func=guarded(self.delete),
            methods=["POST"],
        )
        return bp
