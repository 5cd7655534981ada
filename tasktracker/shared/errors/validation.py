# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError

_VALUE_ERROR_PREFIX = "Value error, "


def _field_path(loc: Iterable[Any]) -> str:
    return ".".join(str(part) for part in loc if part is not None)


def _readable(field: str, message: str) -> str:
    message = message.removeprefix(_VALUE_ERROR_PREFIX)
    if not field:
        return message
    label = field.replace("_", " ").capitalize()
    return f"{label}: {message[:1].lower()}{message[1:]}"


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    errors = []
    for error in exc.errors():
        field = _field_path(error.get("loc", ()))
        errors.append(
            {
                "field": field or "unknown",
                "type": error.get("type", "value_error"),
                "message": _readable(field, error.get("msg", "")),
            }
        )
    fields = sorted({entry["field"] for entry in errors if entry["field"] != "unknown"})
    return {"fields": fields, "errors": errors}


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    raise ValidationError(context=format_pydantic_errors(exc)) from exc


def field_error(field: str, message: str, error_type: str = "value_error") -> ValidationError:
    """Build a ValidationError for a single offending field."""
    return ValidationError(
        context={
            "fields": [field],
            "errors": [{"field": field, "type": error_type, "message": message}],
        }
    )


def first_message(error: ValidationError, default: str = "Invalid input") -> str:
    entries = (error.context or {}).get("errors", [])
    return next((str(entry["message"]) for entry in entries if entry.get("message")), default)


__all__ = [
    "field_error",
    "first_message",
    "format_pydantic_errors",
    "raise_validation_error",
]
