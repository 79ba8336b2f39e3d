import contextlib
import logging
import sqlite3
from pathlib import Path

from .accounts import AccountStore
from .tasks import TaskStore

logger = logging.getLogger(__name__)


class Database:
    """
    Handle to the SQLite file shared by the account and task stores.

    Every call to connection() opens its own short-lived connection and
    closes it when the block exits, so there is nothing to pool or release
    between calls.
    """

    def __init__(self, path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    @contextlib.contextmanager
    def connection(self):
        conn = sqlite3.connect(str(self.path))
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def close(self):
        logger.debug("Database released db=%s", self.path)


def init_db(db):
    accounts = AccountStore(db)
    accounts.ensure_schema()
    tasks = TaskStore(db, accounts)
    tasks.ensure_schema()
    logger.info("Database ready db=%s", db.path)
    return accounts, tasks
