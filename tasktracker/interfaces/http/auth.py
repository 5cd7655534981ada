# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import Response, g, redirect, request, url_for

from tasktracker.application.services.access_guard import AccessGuard
from tasktracker.shared.config import load_config
from tasktracker.shared.errors.base import UnauthenticatedError
from tasktracker.shared.logging import logger


def client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


def read_session_token() -> str:
    return request.cookies.get(load_config().session.cookie_name, "")


def set_session_cookie(response: Response, token: str) -> None:
    config = load_config()
    response.set_cookie(
        config.session.cookie_name,
        token,
        httponly=True,
        samesite=config.security.cookie_samesite,
        secure=config.security.cookie_secure,
        max_age=config.session.lifetime,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(load_config().session.cookie_name)


def current_user_id() -> int:
    return int(g.user_id)


def login_required(guard: AccessGuard) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Gate a view on a valid session, exposing the caller as ``g.user_id``."""

    def decorator(f: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(f)
        def inner(*a, **kw):
            token = read_session_token()
            try:
                g.user_id = guard.require_authenticated(token)
            except UnauthenticatedError:
                logger.info(
                    f"Auth required on {request.method} {request.path}: "
                    f"{'stale' if token else 'no'} session"
                )
                response = redirect(url_for("auth.login_form"))
                if token:
                    clear_session_cookie(response)
                return response
            logger.debug(f"Auth OK: user={g.user_id} {request.method} {request.path}")
            return f(*a, **kw)

        return inner

    return decorator
