# tests/test_db.py

from __future__ import annotations

from pathlib import Path

import pytest

from taskboard.db import Database, init_db


def test_database_creates_parent_dir(tmp_path: Path) -> None:
    db = Database(tmp_path / "nested" / "dir" / "task_manager.db")
    assert db.path.parent.is_dir()


def test_connection_commits_on_success_and_rolls_back_on_error(db: Database) -> None:
    init_db(db)
    with db.connection() as conn:
        conn.execute("INSERT INTO users (username, password) VALUES ('a', 'x')")

    with pytest.raises(RuntimeError):
        with db.connection() as conn:
            conn.execute("INSERT INTO users (username, password) VALUES ('b', 'x')")
            raise RuntimeError("boom")

    with db.connection() as conn:
        names = [r["username"] for r in conn.execute("SELECT username FROM users ORDER BY id")]
    assert names == ["a"]


def test_init_db_is_repeatable(tmp_path: Path) -> None:
    with Database(tmp_path / "task_manager.db") as db:
        accounts, tasks = init_db(db)
        user = accounts.register("alice", "pw")
        tasks.create("T", "", "High", user.id)

        accounts, tasks = init_db(db)
        (task,) = tasks.list_all()
        assert task.assigned_to_username == "alice"
