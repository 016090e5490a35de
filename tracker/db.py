"""
Engine and session management.

``db`` is shared by the whole process. The API process and every Celery
worker process call ``db.initialize()`` once; worker tasks then open a
unit of work with ``db.session()``, which commits on success and rolls
back on error. Service functions such as ``create_issue`` take a plain
``Session`` so callers can pass either one of these or their own.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Optional

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from .config import Settings, get_settings
from .logging import db_logger


class Base(DeclarativeBase):
    pass


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite ignores foreign keys unless every connection turns them on."""

    @event.listens_for(engine, "connect")
    def _foreign_keys_on(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _engine_options(url: str, settings: Settings) -> dict[str, Any]:
    if url.startswith("sqlite"):
        # One shared connection, so ``sqlite://`` stays a single database.
        return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    return {
        "poolclass": QueuePool,
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": settings.db_pool_pre_ping,
    }


class DatabaseManager:
    """Lazily built engine plus a session factory bound to it."""

    def __init__(self):
        self.engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker[Session]] = None

    def initialize(self, database_url: str | None = None) -> None:
        """Build the engine; later calls are no-ops until ``reset()``."""
        if self.engine is not None:
            return

        settings = get_settings()
        url = database_url or settings.database_url
        self.engine = create_engine(url, echo=settings.debug, **_engine_options(url, settings))
        if self.engine.dialect.name == "sqlite":
            enable_sqlite_foreign_keys(self.engine)

        # Issues stay readable after commit so their side effects can be queued.
        self._session_factory = sessionmaker(
            bind=self.engine, autoflush=False, expire_on_commit=False
        )
        db_logger.info("database_initialized", dialect=self.engine.dialect.name)

    def create_all_tables(self) -> None:
        Base.metadata.create_all(bind=self._require_engine())

    @contextmanager
    def session(self) -> Iterator[Session]:
        self._require_engine()
        session = self._session_factory()  # type: ignore[misc]
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def reset(self) -> None:
        """Dispose of the engine so the next ``initialize()`` starts fresh."""
        if self.engine is not None:
            self.engine.dispose()
        self.engine = None
        self._session_factory = None

    def _require_engine(self) -> Engine:
        if self.engine is None:
            raise RuntimeError("Database is not initialized; call db.initialize() first")
        return self.engine


db = DatabaseManager()


__all__ = ["Base", "DatabaseManager", "db", "enable_sqlite_foreign_keys"]
