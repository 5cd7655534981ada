from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tasktracker.domain.tasks.entities import TaskPriority, TaskStatus
from tasktracker.domain.tasks.validation import DESCRIPTION_MAX, TITLE_MAX


class TaskCreateForm(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str = Field("", max_length=TITLE_MAX)
    description: str | None = Field(None, max_length=DESCRIPTION_MAX)
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: date | None = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        # Length caps apply to the text that is stored, not the padding.
        return value.strip() if isinstance(value, str) else value

    @field_validator("description", "priority", "due_date", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: object, info) -> object:
        # HTML forms submit untouched inputs as empty strings.
        if isinstance(value, str) and not value.strip():
            return TaskPriority.MEDIUM if info.field_name == "priority" else None
        return value


class TaskStatusForm(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: TaskStatus
