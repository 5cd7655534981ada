# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .base import (
    AppError,
    DomainError,
    InfrastructureError,
    StorageUnavailableError,
    UnauthenticatedError,
    ValidationError,
    public_message_for,
)
from .http import register_error_handler

__all__ = [
    "AppError",
    "DomainError",
    "InfrastructureError",
    "StorageUnavailableError",
    "UnauthenticatedError",
    "ValidationError",
    "public_message_for",
    "register_error_handler",
]
