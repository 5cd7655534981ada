# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from flask import Blueprint, jsonify, redirect, render_template, url_for

from tasktracker.application.services.session_manager import SessionManager
from tasktracker.infrastructure.health import check_database
from tasktracker.interfaces.http.auth import read_session_token
from tasktracker.shared.logging import logger


class MiscController:
    def __init__(
        self,
        *,
        sessions: SessionManager,
        health_check: Callable[[], bool] = check_database,
    ) -> None:
        self._sessions = sessions
        self._health_check = health_check

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/", endpoint="index", view_func=self.index, methods=["GET"])
        bp.add_url_rule("/api/health", endpoint="health", view_func=self.health, methods=["GET"])
        return bp

    def index(self):
        if self._sessions.resolve_session(read_session_token()) is not None:
            return redirect(url_for("tasks.dashboard"))
        return render_template("index.html")

    def health(self):
        try:
            healthy = self._health_check()
        except Exception as exc:  # pragma: no cover
            logger.warning(f"health: database check failed: {type(exc).__name__}")
            healthy = False
        body = {"ok": healthy, "database": "ok" if healthy else "error"}
        return jsonify(body), 200 if healthy else 503
