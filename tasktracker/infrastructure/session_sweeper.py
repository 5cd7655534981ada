# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import threading

from tasktracker.application.services.session_manager import SessionManager
from tasktracker.shared.errors.base import AppError
from tasktracker.shared.logging import logger


class SessionSweeper:
    """Background thread that drops expired sessions every ``interval`` seconds."""

    def __init__(self, sessions: SessionManager, interval: float) -> None:
        self._sessions = sessions
        self._interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running or self._interval <= 0:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name="session-sweeper", daemon=True
        )
        self._thread.start()
        logger.info(f"session.sweeper: started interval={self._interval}s")

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.info("session.sweeper: stopped")

    def run_once(self) -> int:
        try:
            return self._sessions.sweep_expired()
        except AppError as exc:
            # Storage may be briefly unavailable; the next tick retries.
            logger.warning(f"session.sweeper: sweep failed: {exc.code}")
            return 0

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            self.run_once()
