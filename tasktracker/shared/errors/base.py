# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Error hierarchy shared by every layer.

An ``AppError`` carries a machine readable ``code``, the HTTP ``status`` it
maps to and optional ``context``. Concrete errors declare ``code`` and
``status`` as class attributes and are raised without arguments.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from types import MemberDescriptorType
from typing import Any

_PUBLIC_MESSAGES: dict[HTTPStatus, str] = {
    HTTPStatus.NOT_FOUND: "That item could not be found.",
    HTTPStatus.SERVICE_UNAVAILABLE: "The service is temporarily unavailable. Please try again later.",
    HTTPStatus.INTERNAL_SERVER_ERROR: "Something went wrong while processing your request.",
}
_DEFAULT_PUBLIC_MESSAGE = "The request could not be completed."


def public_message_for(status: HTTPStatus) -> str:
    return _PUBLIC_MESSAGES.get(status, _DEFAULT_PUBLIC_MESSAGE)


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    @property
    def public_message(self) -> str:
        """Text safe to show an end user; never includes ``context``."""
        return public_message_for(self.status)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


def _declared(cls: type, name: str, fallback: Any) -> Any:
    # Slot descriptors on AppError itself are not declarations.
    for klass in cls.__mro__:
        if klass is AppError:
            break
        value = klass.__dict__.get(name)
        if value is not None and not isinstance(value, MemberDescriptorType):
            return value
    return fallback


class _DeclaredError(AppError):
    _fallback_code = "app_error"
    _fallback_status = HTTPStatus.BAD_REQUEST

    def __init__(self, *, context: Mapping[str, Any] | None = None) -> None:
        cls = type(self)
        super().__init__(
            code=_declared(cls, "code", cls._fallback_code),
            status=_declared(cls, "status", cls._fallback_status),
            context=context,
        )


class DomainError(_DeclaredError):
    _fallback_code = "domain_error"


class InfrastructureError(_DeclaredError):
    _fallback_code = "infrastructure_error"
    _fallback_status = HTTPStatus.INTERNAL_SERVER_ERROR


class StorageUnavailableError(InfrastructureError):
    code = "storage_unavailable"
    status = HTTPStatus.SERVICE_UNAVAILABLE


class ValidationError(DomainError):
    code = "validation_error"
    status = HTTPStatus.UNPROCESSABLE_ENTITY

    @property
    def fields(self) -> list[str]:
        if not self.context:
            return []
        return list(self.context.get("fields", []))


class UnauthenticatedError(DomainError):
    code = "unauthenticated"
    status = HTTPStatus.UNAUTHORIZED
