# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Readiness probe behind ``/api/health``."""

from __future__ import annotations

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine

from tasktracker.infrastructure.db import ENGINE
from tasktracker.shared.logging import logger

REQUIRED_TABLES = frozenset({"users", "tasks", "session_tokens"})


def missing_tables(engine: Engine = ENGINE) -> set[str]:
    return set(REQUIRED_TABLES - set(inspect(engine).get_table_names()))


def check_database(engine: Engine = ENGINE) -> bool:
    """Ping the database and confirm the schema is in place.

    Driver errors propagate so the caller can report them.
    """
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))
    missing = missing_tables(engine)
    if missing:
        logger.warning(f"health: schema incomplete, missing={sorted(missing)}")
        return False
    return True


__all__ = ["REQUIRED_TABLES", "check_database", "missing_tables"]
