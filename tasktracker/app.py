# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import atexit
import os
import threading

from flask import Flask

from tasktracker.infrastructure.container import Container, container
from tasktracker.infrastructure.db import init_db
from tasktracker.shared.config import load_config
from tasktracker.shared.errors import register_error_handler
from tasktracker.shared.logging import logger, setup_logging
from tasktracker.shared.middleware.request_logger import configure_request_logging
from tasktracker.shared.middleware.security_headers import configure_security_headers

_config = load_config()
_BOOTSTRAPPED = threading.Event()


def _should_boot() -> bool:
    if os.environ.get("TASKTRACKER_BOOT_WORKERS") == "1":
        return True
    return os.environ.get("WERKZEUG_RUN_MAIN") == "true"


def _start_session_sweeper(deps: Container) -> None:
    sweeper = deps.session_sweeper
    sweeper.start()
    atexit.register(sweeper.stop)


def create_app(deps: Container | None = None) -> Flask:
    deps = deps or container
    init_db()
    setup_logging(debug_mode=_config.debug_logging)

    app = Flask(__name__)
    app.config.update(SECRET_KEY=_config.secret_key)

    register_error_handler(app)
    configure_request_logging(app)
    configure_security_headers(app)

    app.register_blueprint(deps.misc_controller.as_blueprint())
    app.register_blueprint(deps.auth_controller.as_blueprint())
    app.register_blueprint(deps.tasks_controller.as_blueprint())

    if _should_boot() and not _BOOTSTRAPPED.is_set():
        _BOOTSTRAPPED.set()
        _start_session_sweeper(deps)

    logger.info(f"Flask app initialized env={_config.app_env} sessions={_config.session.backend}")
    return app


app = create_app()


if __name__ == "__main__":
    app.run(host="127.0.0.1", port=int(os.environ.get("PORT", "5000")), debug=True)
