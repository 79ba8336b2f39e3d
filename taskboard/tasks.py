import logging
import sqlite3
from dataclasses import dataclass, field

from .models import UNKNOWN_USER, Task, priority_rank

logger = logging.getLogger(__name__)

_TASK_COLUMNS = "id, title, description, priority, assigned_to_user_id, is_complete, progress"


def sort_by_priority(tasks):
    """High > Medium > Low, unknown priorities last. Returns a new list."""
    return sorted(tasks, key=lambda t: -priority_rank(t.priority))


def sort_by_assignee(tasks):
    return sorted(tasks, key=lambda t: t.assigned_to_username)


@dataclass
class Board:
    mine: list = field(default_factory=list)
    active: list = field(default_factory=list)
    completed: list = field(default_factory=list)


def partition_board(tasks, user_id):
    """
    Split a fetched batch into the three board columns:
    - mine: incomplete tasks assigned to user_id
    - active: every incomplete task
    - completed: every complete task
    Each column comes back sorted by priority.
    """
    mine = [t for t in tasks if t.assigned_to_user_id == user_id and not t.is_complete]
    active = [t for t in tasks if not t.is_complete]
    completed = [t for t in tasks if t.is_complete]
    return Board(
        mine=sort_by_priority(mine),
        active=sort_by_priority(active),
        completed=sort_by_priority(completed),
    )


class TaskStore:
    """Tasks table CRUD. Assignee names are resolved through the AccountStore."""

    def __init__(self, db, accounts):
        self.db = db
        self.accounts = accounts

    def ensure_schema(self):
        try:
            with self.db.connection() as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS tasks (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        title TEXT NOT NULL,
                        description TEXT,
                        priority TEXT CHECK(priority IN ('High', 'Medium', 'Low')) NOT NULL,
                        assigned_to_user_id INTEGER NOT NULL,
                        is_complete BOOLEAN NOT NULL DEFAULT 0,
                        progress INTEGER NOT NULL DEFAULT 0,
                        FOREIGN KEY (assigned_to_user_id) REFERENCES users(id)
                    )
                    """
                )
        except sqlite3.Error:
            logger.exception("Error creating tasks table")

    def create(self, title, description, priority, assigned_to_user_id):
        if not (title or "").strip():
            logger.warning("Create task failed: title is required")
            return False
        try:
            with self.db.connection() as conn:
                c = conn.cursor()
                c.execute(
                    """
                    INSERT INTO tasks (title, description, priority, assigned_to_user_id, is_complete, progress)
                    VALUES (?, ?, ?, ?, 0, 0)
                    """,
                    (title, description, priority, int(assigned_to_user_id)),
                )
                tid = c.lastrowid
        except (sqlite3.Error, TypeError, ValueError):
            logger.exception("Error creating task %r", title)
            return False
        logger.info("Created task %s: %s", tid, title)
        return True

    def edit(self, task_id, title, description, priority, assigned_to_user_id, is_complete, progress):
        if not (title or "").strip():
            logger.warning("Edit task %s failed: title is required", task_id)
            return False
        try:
            with self.db.connection() as conn:
                c = conn.cursor()
                c.execute(
                    """
                    UPDATE tasks SET title=?, description=?, priority=?, assigned_to_user_id=?,
                    is_complete=?, progress=?
                    WHERE id=?
                    """,
                    (
                        title,
                        description,
                        priority,
                        int(assigned_to_user_id),
                        int(bool(is_complete)),
                        int(progress),
                        int(task_id),
                    ),
                )
                updated = c.rowcount
        except (sqlite3.Error, TypeError, ValueError):
            logger.exception("Error editing task %s", task_id)
            return False
        if updated == 0:
            logger.warning("Edit task failed: no task with id=%s", task_id)
            return False
        logger.info("Updated task %s", task_id)
        return True

    def delete(self, task_id):
        try:
            with self.db.connection() as conn:
                c = conn.cursor()
                c.execute("DELETE FROM tasks WHERE id=?", (int(task_id),))
                deleted = c.rowcount
        except (sqlite3.Error, TypeError, ValueError):
            logger.exception("Error deleting task %s", task_id)
            return False
        if deleted == 0:
            logger.warning("Delete task failed: no task with id=%s", task_id)
            return False
        logger.info("Deleted task %s", task_id)
        return True

    def list_all(self):
        try:
            with self.db.connection() as conn:
                rows = conn.execute(f"SELECT {_TASK_COLUMNS} FROM tasks ORDER BY id ASC").fetchall()
            names = self.accounts.usernames_by_id(r["assigned_to_user_id"] for r in rows)
        except sqlite3.Error:
            logger.exception("Error fetching tasks")
            return []
        return [self._row_to_task(r, names) for r in rows]

    def get(self, task_id):
        try:
            with self.db.connection() as conn:
                row = conn.execute(
                    f"SELECT {_TASK_COLUMNS} FROM tasks WHERE id=?", (int(task_id),)
                ).fetchone()
            if row is None:
                return None
        except sqlite3.Error:
            logger.exception("Error fetching task %s", task_id)
            return None
        user_id = int(row["assigned_to_user_id"])
        username = self.accounts.get_username(user_id)
        return self._row_to_task(row, {user_id: username} if username is not None else {})

    def sort_by_priority(self, tasks):
        return sort_by_priority(tasks)

    def sort_by_assignee(self, tasks):
        return sort_by_assignee(tasks)

    @staticmethod
    def _row_to_task(row, names):
        user_id = int(row["assigned_to_user_id"])
        return Task(
            id=int(row["id"]),
            title=row["title"],
            description=row["description"] or "",
            priority=row["priority"],
            assigned_to_user_id=user_id,
            assigned_to_username=names.get(user_id, UNKNOWN_USER),
            is_complete=bool(row["is_complete"]),
            progress=int(row["progress"]),
        )
