from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator

import pytest

_TMP_DIR = tempfile.mkdtemp(prefix="tasktracker-tests-")

# The engine is built from config at import time, so this has to run first.
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["LOG_FILE"] = os.path.join(_TMP_DIR, "app.log")
os.environ["APP_ENV"] = "test"
os.environ["SESSION_BACKEND"] = "database"
os.environ["SESSION_SWEEP_INTERVAL"] = "0"
os.environ["PASSWORD_HASH_METHOD"] = "pbkdf2:sha256:1000"


@pytest.fixture()
def reset_database() -> Iterator[None]:
    from tasktracker.infrastructure.db import ENGINE, Base, SessionLocal
    from tasktracker.infrastructure.db import models  # noqa: F401

    SessionLocal.remove()
    Base.metadata.drop_all(bind=ENGINE)
    Base.metadata.create_all(bind=ENGINE)
    yield
    SessionLocal.remove()
    Base.metadata.drop_all(bind=ENGINE)
