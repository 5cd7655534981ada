# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from tasktracker.shared.errors.base import DomainError


class TaskNotFoundError(DomainError):
    """Raised for missing tasks and for tasks owned by someone else alike."""

    code = "task_not_found"
    status = HTTPStatus.NOT_FOUND
