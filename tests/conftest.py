# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from taskboard.db import Database, init_db


@pytest.fixture()
def db(tmp_path: Path) -> Database:
    return Database(tmp_path / "task_manager.db")


@pytest.fixture()
def stores(db: Database):
    """AccountStore and TaskStore over a fresh SQLite file, schemas created."""
    return init_db(db)


@pytest.fixture()
def accounts(stores):
    return stores[0]


@pytest.fixture()
def tasks(stores):
    return stores[1]
