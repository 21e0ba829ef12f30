"""Database infrastructure: engine, schema, sessions and the store object."""

from __future__ import annotations

import logging
from contextlib import AbstractContextManager, contextmanager
from typing import Callable, Iterator, Optional, Tuple

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from ..config import BaseConfig
from ..errors import StoreInitError, StoreReadError, StoreWriteError

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], AbstractContextManager[Session]]


def _install_sqlite_pragmas(engine: Engine, pragmas: dict[str, str]) -> None:
    """Run ``PRAGMA`` statements on every new DBAPI connection."""

    if not pragmas:
        return

    @event.listens_for(engine, "connect")
    def _set_pragmas(dbapi_connection, connection_record):  # noqa: ARG001
        cursor = dbapi_connection.cursor()
        try:
            for key, value in pragmas.items():
                cursor.execute(f"PRAGMA {key}={value}")
        finally:
            cursor.close()


def create_db_engine(config: BaseConfig) -> Engine:
    """Create SQLModel engine from configuration."""

    engine = create_engine(config.DATABASE_URL, **config.sqlalchemy_engine_options())
    if engine.dialect.name == "sqlite":
        _install_sqlite_pragmas(engine, config.sqlite_pragmas())
    return engine


def init_database(engine: Engine) -> None:
    """Initialize database schema."""
    # Import all models to ensure they're registered
    from .. import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def create_session_factory(engine: Engine):
    """Create a session factory function."""

    @contextmanager
    def factory() -> Iterator[Session]:
        """Create a new session."""
        session = Session(engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return factory


@contextmanager
def write_scope(session_factory, operation: str) -> Iterator[Session]:
    """Session scope whose database failures surface as ``StoreWriteError``."""

    try:
        with session_factory() as session:
            yield session
    except SQLAlchemyError as exc:
        logger.exception("Error saving %s", operation, extra={"operation": operation})
        raise StoreWriteError(operation, exc) from exc


@contextmanager
def read_scope(session_factory, operation: str) -> Iterator[Session]:
    """Session scope whose database failures surface as ``StoreReadError``."""

    try:
        with session_factory() as session:
            yield session
    except SQLAlchemyError as exc:
        logger.exception("Error fetching %s", operation, extra={"operation": operation})
        raise StoreReadError(operation, exc) from exc


def bootstrap_database(config: BaseConfig | None = None) -> Tuple:
    """Convenience bootstrap for engine + session_factory with schema init.

    Returns ``(engine, session_factory)``. Any failure to connect or create the
    schema is reported as ``StoreInitError``.
    """

    cfg = config or BaseConfig()
    try:
        engine = create_db_engine(cfg)
        init_database(engine)
    except SQLAlchemyError as exc:
        logger.critical("Unable to open record store at %s", cfg.DATABASE_URL, exc_info=True)
        raise StoreInitError(f"Unable to open record store: {exc}") from exc
    return engine, create_session_factory(engine)


class Store:
    """Explicitly constructed record store with init/teardown.

    Usage::

        with Store(config) as store:
            manager = HabitDataManager(store)
    """

    def __init__(self, config: Optional[BaseConfig] = None) -> None:
        self.config = config or BaseConfig()
        self._engine: Optional[Engine] = None
        self._session_factory = None

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Store is not open")
        return self._engine

    @property
    def session_factory(self):
        if self._session_factory is None:
            raise RuntimeError("Store is not open")
        return self._session_factory

    def open(self) -> "Store":
        """Connect and create the schema; idempotent."""

        if self._engine is None:
            self._engine, self._session_factory = bootstrap_database(self.config)
            logger.info("Record store opened", extra={"database_url": self.config.DATABASE_URL})
        return self

    def close(self) -> None:
        """Dispose of pooled connections."""

        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Record store closed")

    def __enter__(self) -> "Store":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = [
    "SessionFactory",
    "Store",
    "bootstrap_database",
    "create_db_engine",
    "create_session_factory",
    "init_database",
    "read_scope",
    "write_scope",
]
