# main.py
import logging

from ttkbootstrap import Window

from .config import get_settings
from .db import Database, init_db
from .logging_setup import setup_logging
from .ui import TaskBoardApp

logger = logging.getLogger(__name__)


def main():
    settings = get_settings()
    console_level = getattr(logging, settings.log_level, logging.INFO)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)
    logger.info("Starting %s db=%s", settings.app_name, settings.db_path)

    with Database(settings.db_path) as db:
        accounts, tasks = init_db(db)
        root = Window(themename=settings.theme)
        root.geometry(settings.geometry)
        TaskBoardApp(root, accounts, tasks, title=settings.app_name)
        root.mainloop()

    logger.info("Bye.")


if __name__ == "__main__":
    main()
