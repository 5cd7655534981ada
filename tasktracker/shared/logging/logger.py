"""Application logging on top of loguru.

Each record carries the request correlation id in ``extra`` and passes the
secret redaction filter before it reaches a sink. Stdlib loggers (werkzeug,
SQLAlchemy) are routed into the same pipeline.
"""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from pathlib import Path

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> "
    "<lvl>{level:<7}</lvl> "
    "<magenta>[{extra[correlation_id]}]</magenta> "
    "<cyan>{name}:{line}</cyan> - <lvl>{message}</lvl>"
)
_FILE_FORMAT = (
    "{time:YYYY-MM-DDTHH:mm:ss.SSSZZ} {level:<7} [{extra[correlation_id]}] "
    "{name}:{function}:{line} - {message}"
)

_QUIET_LOGGERS = {
    "werkzeug": logging.INFO,
    "sqlalchemy.engine": logging.WARNING,
}

_correlation_id: ContextVar[str] = ContextVar("tasktracker_correlation_id", default="-")

_logger.configure(extra={"correlation_id": "-"})


def _log_file() -> Path:
    configured = os.getenv("LOG_FILE")
    if configured:
        return Path(configured)
    return Path("instance") / "tasktracker.log"


class _InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        _logger.opt(depth=depth, exception=record.exc_info).bind(
            correlation_id=_correlation_id.get()
        ).log(level, record.getMessage())


class ContextualLogger:
    """loguru proxy that stamps each call with the current correlation id."""

    def __getattr__(self, name: str):
        return getattr(_logger.bind(correlation_id=_correlation_id.get()), name)


def set_correlation_id(value: str | None) -> None:
    _correlation_id.set(value or "-")


def get_correlation_id() -> str:
    return _correlation_id.get()


def clear_correlation_id() -> None:
    _correlation_id.set("-")


def setup_logging(level: str | None = None, *, debug_mode: bool = False) -> None:
    """Replace all sinks with a console sink and a rotating file sink."""
    level = (level or os.getenv("LOG_LEVEL") or ("DEBUG" if debug_mode else "INFO")).upper()
    log_file = _log_file()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    _logger.remove()
    _logger.add(
        sys.stderr,
        level=level,
        format=_CONSOLE_FORMAT,
        filter=sanitize_record,
        colorize=True,
        backtrace=False,
        diagnose=False,
    )
    _logger.add(
        str(log_file),
        level=level,
        format=_FILE_FORMAT,
        filter=sanitize_record,
        rotation="10 MB",
        retention=5,
        enqueue=True,
        encoding="utf-8",
        backtrace=False,
        diagnose=False,
    )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name, logger_level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(logger_level)


logger = ContextualLogger()

__all__ = [
    "logger",
    "setup_logging",
    "set_correlation_id",
    "clear_correlation_id",
    "get_correlation_id",
]
