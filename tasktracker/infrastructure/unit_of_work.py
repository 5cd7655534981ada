# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Transaction scope shared by the SQLAlchemy repositories."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import UTC, datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tasktracker.shared.errors.base import StorageUnavailableError
from tasktracker.shared.logging import logger


@contextmanager
def unit_of_work_scope(factory: Callable[[], Session]) -> Iterator[Session]:
    """Run one transaction: commit on a clean exit, roll back otherwise.

    Driver and ORM failures leave as ``StorageUnavailableError``; application
    errors raised inside the block propagate unchanged.
    """
    session = factory()
    try:
        yield session
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error(f"uow: storage failure {type(exc).__name__}: {exc}")
        raise StorageUnavailableError() from exc
    except BaseException as exc:
        session.rollback()
        logger.debug(f"uow: rolled back on {type(exc).__name__}")
        raise
    finally:
        session.close()


def as_utc(value: datetime) -> datetime:
    """SQLite hands datetimes back naive; they are always stored as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
