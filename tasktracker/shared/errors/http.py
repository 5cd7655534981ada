# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, g, jsonify, redirect, render_template, request, url_for
from werkzeug.exceptions import HTTPException

from tasktracker.shared.config import load_config
from tasktracker.shared.logging import logger

from .base import AppError, UnauthenticatedError, public_message_for


def _wants_json() -> bool:
    return request.path.startswith("/api/")


def render_error_page(status: HTTPStatus) -> tuple[str, HTTPStatus]:
    return render_template(
        "error.html", status=int(status), message=public_message_for(status)
    ), status


def handle_app_error(error: AppError) -> tuple[Response, HTTPStatus] | tuple[str, HTTPStatus]:
    if _wants_json():
        return jsonify(error.to_dict()), error.status
    return render_error_page(error.status)


def register_error_handler(
    app: Flask, *, default_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR
) -> None:
    config = load_config()
    debug_mode = config.debug_logging

    @app.errorhandler(UnauthenticatedError)
    def _handle_unauthenticated(exc: UnauthenticatedError):
        if _wants_json():
            return jsonify(exc.to_dict()), exc.status
        return redirect(url_for("auth.login_form"))

    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        logger.warning(f"Handled application error {exc.code} on {request.method} {request.path}")
        return handle_app_error(exc)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        return exc

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        ip_address = (
            request.headers.get("X-Forwarded-For", "").split(",")[0].strip()
            if request.headers.get("X-Forwarded-For")
            else (request.remote_addr or "unknown")
        )
        user_id = getattr(g, "user_id", None)

        if debug_mode:
            logger.exception(
                f"Unhandled exception: {request.method} {request.path} "
                f"from {ip_address}, user={user_id}, "
                f"query={dict(request.args)}, body_size={len(request.data)}"
            )
        else:
            logger.error(f"Error: {type(exc).__name__} on {request.method} {request.path}")

        if _wants_json():
            return jsonify({"error": "internal_error"}), default_status
        return render_error_page(default_status)
