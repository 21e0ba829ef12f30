"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from sqlalchemy.pool import StaticPool

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "HabitTracker"
    DB_FILENAME = "habittracker.db"
    SQLITE_PRAGMAS = {"journal_mode": "wal", "foreign_keys": "on"}

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("HABITTRACKER_DEV_MODE", default=True)
        self.SQL_ECHO = _env_bool("HABITTRACKER_SQL_ECHO", default=False)
        self.DATABASE_URL = os.getenv("HABITTRACKER_DATABASE_URL", self._build_sqlite_url())

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("HABITTRACKER_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    @property
    def is_memory_database(self) -> bool:
        url = self.DATABASE_URL
        return url in {"sqlite://", "sqlite:///:memory:"} or "mode=memory" in url

    def sqlite_pragmas(self) -> dict[str, str]:
        """Pragmas applied to every new SQLite connection."""

        pragmas = dict(self.SQLITE_PRAGMAS)
        if self.is_memory_database:
            # WAL is not available for in-memory databases.
            pragmas.pop("journal_mode", None)
        return pragmas

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        engine_options: dict[str, Any] = {"echo": self.SQL_ECHO}
        if self.DATABASE_URL.startswith("sqlite"):
            engine_options["connect_args"] = {"check_same_thread": False}
            if self.is_memory_database:
                # Share the single in-memory connection across sessions.
                engine_options["poolclass"] = StaticPool
        return engine_options


class TestConfig(BaseConfig):
    """Isolated configuration backed by an in-memory SQLite database."""

    __test__ = False

    def __init__(self, data_dir: Path | str | None = None) -> None:
        super().__init__()
        if data_dir is not None:
            self.DATA_DIR = Path(data_dir)
        self.DATABASE_URL = "sqlite://"
        self.DEV_MODE = True
