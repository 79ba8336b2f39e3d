# tests/test_models.py

from __future__ import annotations

import pytest

from taskboard.models import Task, User, format_assignee, parse_assignee, preview_text, priority_rank


def _task(**kw) -> Task:
    base = dict(
        id=1,
        title="Test Task",
        description="This is a test task.",
        priority="High",
        assigned_to_user_id=42,
        assigned_to_username="doubtfire",
        is_complete=False,
        progress=50,
    )
    base.update(kw)
    return Task(**base)


def test_task_str_contains_summary_fields() -> None:
    s = str(_task())
    assert s.startswith("[PENDING]")
    assert "ID: 1" in s
    assert "Test Task" in s
    assert "Priority: High" in s
    assert "50%" in s
    assert "doubtfire" in s
    assert str(_task(is_complete=True)).startswith("[COMPLETE]")


def test_task_fields_are_mutable() -> None:
    task = _task()
    task.title = "Updated Title"
    task.is_complete = True
    task.progress = 10
    assert task.title == "Updated Title"
    # completion and progress stay independent
    assert task.is_complete and task.progress == 10


@pytest.mark.parametrize(
    ("priority", "rank"),
    [("High", 3), ("medium", 2), ("LOW", 1), ("Urgent", 0), ("", 0), (None, 0)],
)
def test_priority_rank(priority, rank) -> None:
    assert priority_rank(priority) == rank


def test_preview_text() -> None:
    assert preview_text("short") == "short"
    assert preview_text(None) == ""
    assert preview_text("x" * 50) == "x" * 50
    long = preview_text("y" * 51)
    assert long == "y" * 47 + "..."
    assert len(long) == 50


def test_assignee_label_parsing() -> None:
    label = format_assignee(User(id=3, username="bob - the builder"))
    assert label == "3 - bob - the builder"
    assert parse_assignee(label) == 3
    for bad in ("bob", "", None, "x - bob"):
        with pytest.raises(ValueError):
            parse_assignee(bad)
