# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, scoped_session, sessionmaker

from tasktracker.shared.config import load_config
from tasktracker.shared.config.settings import DatabaseConfig
from tasktracker.shared.logging import logger

_SQLITE_PRAGMAS = (
    "PRAGMA journal_mode=WAL;",
    "PRAGMA foreign_keys=ON;",
    "PRAGMA busy_timeout=30000;",
)


class Base(DeclarativeBase):
    pass


def _apply_sqlite_pragmas(dbapi_conn, _record) -> None:
    cursor = dbapi_conn.cursor()
    try:
        for pragma in _SQLITE_PRAGMAS:
            cursor.execute(pragma)
    finally:
        cursor.close()


def build_engine(database: DatabaseConfig) -> Engine:
    """Create the engine; SQLite connections get WAL and enforced foreign keys."""
    is_sqlite = database.url.startswith("sqlite")
    connect_args: dict[str, object] = {}
    if is_sqlite:
        connect_args = {"check_same_thread": False, "timeout": int(database.pool_timeout)}

    engine = create_engine(
        database.url,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
        pool_timeout=database.pool_timeout,
        connect_args=connect_args,
    )
    if is_sqlite:
        event.listen(engine, "connect", _apply_sqlite_pragmas)
    logger.debug(f"db: engine ready dialect={engine.dialect.name}")
    return engine


ENGINE: Engine = build_engine(load_config().database)

SessionLocal = scoped_session(
    sessionmaker(bind=ENGINE, autoflush=False, expire_on_commit=False)
)


def init_db() -> None:
    from tasktracker.infrastructure.db import models  # noqa: F401

    Base.metadata.create_all(bind=ENGINE)
    logger.info("Database schema ensured")
