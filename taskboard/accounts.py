import logging
import sqlite3

from werkzeug.security import check_password_hash, generate_password_hash

from .models import User

logger = logging.getLogger(__name__)

# stays under SQLite's bound-parameter limit
_ID_CHUNK = 500


class AccountStore:
    """Users table: registration, login and display-name lookups."""

    def __init__(self, db):
        self.db = db

    def ensure_schema(self):
        try:
            with self.db.connection() as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS users (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        username TEXT NOT NULL UNIQUE,
                        password TEXT NOT NULL
                    )
                    """
                )
        except sqlite3.Error:
            logger.exception("Error creating users table")

    def register(self, username, password):
        """
        Create an account and return the new User, or None.

        The UNIQUE constraint on username is the only duplicate check: the
        insert is attempted and an IntegrityError means the name is taken.
        The password column holds a salted hash, never the password itself.
        """
        if not (username or "").strip() or not (password or "").strip():
            logger.warning("Registration failed: username and password cannot be empty")
            return None

        try:
            with self.db.connection() as conn:
                c = conn.cursor()
                c.execute(
                    "INSERT INTO users (username, password) VALUES (?, ?)",
                    (username, generate_password_hash(password)),
                )
                user_id = c.lastrowid
        except sqlite3.IntegrityError:
            logger.warning("Registration failed: username %r already exists", username)
            return None
        except sqlite3.Error:
            logger.exception("Registration failed for %r", username)
            return None

        logger.info("Registered user id=%s username=%s", user_id, username)
        return User(id=int(user_id), username=username)

    def login(self, username, password):
        try:
            with self.db.connection() as conn:
                row = conn.execute(
                    "SELECT id, username, password FROM users WHERE username = ?",
                    (username,),
                ).fetchone()
        except sqlite3.Error:
            logger.exception("Login error for %r", username)
            return None

        if row is None:
            logger.warning("Login failed: invalid username or password")
            return None
        try:
            matched = check_password_hash(row["password"], password or "")
        except ValueError:
            # stored value is not a werkzeug hash (e.g. a legacy plaintext row)
            logger.warning("Login failed: unreadable password hash for %r", username)
            return None
        if not matched:
            logger.warning("Login failed: invalid username or password")
            return None

        logger.info("User logged in id=%s username=%s", row["id"], row["username"])
        return User(id=int(row["id"]), username=row["username"])

    def list_users(self):
        try:
            with self.db.connection() as conn:
                rows = conn.execute("SELECT id, username FROM users ORDER BY id ASC").fetchall()
        except sqlite3.Error:
            logger.exception("Error fetching all users")
            return []
        return [User(id=int(r["id"]), username=r["username"]) for r in rows]

    def get_username(self, user_id):
        try:
            with self.db.connection() as conn:
                row = conn.execute(
                    "SELECT username FROM users WHERE id = ?", (user_id,)
                ).fetchone()
        except sqlite3.Error:
            logger.exception("Error fetching username for id=%s", user_id)
            return None
        return row["username"] if row else None

    def usernames_by_id(self, user_ids):
        """Resolve many user ids in as few queries as possible; unknown ids are left out."""
        ids = sorted({int(i) for i in user_ids})
        if not ids:
            return {}
        names = {}
        with self.db.connection() as conn:
            for start in range(0, len(ids), _ID_CHUNK):
                chunk = ids[start : start + _ID_CHUNK]
                placeholders = ",".join("?" for _ in chunk)
                rows = conn.execute(
                    f"SELECT id, username FROM users WHERE id IN ({placeholders})", chunk
                ).fetchall()
                names.update((int(r["id"]), r["username"]) for r in rows)
        return names
