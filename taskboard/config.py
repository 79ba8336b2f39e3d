"""Settings loaded from environment variables (+ optional .env file)."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKBOARD"


def _k(suffix):
    return f"{ENV_PREFIX}_{suffix}"


def _env(name, default=""):
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v


def _env_path(name, default):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True)
class Settings:
    app_name: str
    log_level: str
    data_dir: Path
    db_path: Path
    log_dir: Path
    theme: str
    geometry: str

    @staticmethod
    def from_env():
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskboard"))
        return Settings(
            app_name=_env(_k("APP_NAME"), "Team Task Management System"),
            log_level=_env(_k("LOG_LEVEL"), "INFO").upper(),
            data_dir=data_dir,
            db_path=_env_path(_k("DB_PATH"), data_dir / "task_manager.db"),
            log_dir=_env_path(_k("LOG_DIR"), data_dir),
            theme=_env(_k("THEME"), "litera"),
            geometry=_env(_k("GEOMETRY"), "1100x700"),
        )


_SETTINGS = None


def get_settings():
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
