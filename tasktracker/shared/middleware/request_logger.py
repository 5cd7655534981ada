# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets
import time
from collections.abc import Mapping

from flask import Flask, Response, g, request

from tasktracker.shared.config import load_config
from tasktracker.shared.logging import clear_correlation_id, logger, set_correlation_id

REQUEST_ID_HEADER = "X-Request-ID"

_HASHED_HEADERS = frozenset({"authorization", "cookie", "set-cookie"})
_REDACTED_FIELDS = ("password", "token", "secret", "email")


def _fingerprint(value: str) -> str:
    return f"<sha256:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"


def safe_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Headers with credentials replaced by a short, non-reversible fingerprint."""
    return {
        key: _fingerprint(value) if key.lower() in _HASHED_HEADERS else value
        for key, value in headers.items()
    }


def safe_form(form: Mapping[str, str]) -> dict[str, str]:
    return {
        key: "<redacted>" if any(marker in key.lower() for marker in _REDACTED_FIELDS) else value
        for key, value in form.items()
    }


def _remote() -> str:
    forwarded = request.headers.get("X-Forwarded-For", "")
    return forwarded.split(",")[0].strip() or request.remote_addr or "unknown"


def configure_request_logging(app: Flask) -> None:
    """Tag each request with a correlation id and log its start and outcome."""
    verbose = load_config().debug_logging

    @app.before_request
    def _start() -> None:
        g.request_started = time.perf_counter()
        set_correlation_id(request.headers.get(REQUEST_ID_HEADER) or secrets.token_hex(6))
        if verbose:
            logger.debug(
                f"--> {request.method} {request.path} from {_remote()} "
                f"form={safe_form(request.form.to_dict())} "
                f"headers={safe_headers(dict(request.headers))}"
            )

    @app.after_request
    def _finish(response: Response) -> Response:
        elapsed_ms = (time.perf_counter() - g.get("request_started", time.perf_counter())) * 1000
        logger.info(
            f"<-- {request.method} {request.path} {response.status_code} "
            f"{elapsed_ms:.1f}ms user={g.get('user_id', '-')}"
        )
        return response

    @app.teardown_request
    def _teardown(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"request failed: {type(exc).__name__} on {request.method} {request.path}")
        clear_correlation_id()


__all__ = ["configure_request_logging", "safe_form", "safe_headers"]
