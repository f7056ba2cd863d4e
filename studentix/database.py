"""Database access object and request-scoped sessions."""
from collections.abc import Iterator
from pathlib import Path

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session as DbSession, sessionmaker
from sqlalchemy.pool import StaticPool


# Base class for models
class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _is_sqlite_memory(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:")


def _sqlite_file_path(url: str) -> Path | None:
    if not url.startswith("sqlite:///") or _is_sqlite_memory(url):
        return None
    return Path(url[len("sqlite:///"):])


class Database:
    """Owns the engine and session factory for one application instance.

    Created once by ``create_app``, tables are created at startup and the
    engine is disposed at shutdown.
    """

    def __init__(self, url: str) -> None:
        self.url = url
        engine_kwargs: dict[str, object] = {}
        if _is_sqlite(url):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if _is_sqlite_memory(url):
                # Every session must see the same in-memory database
                engine_kwargs["poolclass"] = StaticPool
        self.engine: Engine = create_engine(url, **engine_kwargs)
        if _is_sqlite(url):
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        self.session_factory = sessionmaker(
            autocommit=False, autoflush=False, bind=self.engine
        )

    def create_all(self) -> None:
        """Create all tables that do not exist yet."""
        # Register every mapped class on Base.metadata
        import studentix.models.db  # noqa: F401

        db_file = _sqlite_file_path(self.url)
        if db_file is not None:
            db_file.parent.mkdir(parents=True, exist_ok=True)
        Base.metadata.create_all(bind=self.engine)

    def session(self) -> DbSession:
        """Open a new session (one logical transaction)."""
        return self.session_factory()

    def dispose(self) -> None:
        """Close all pooled connections."""
        self.engine.dispose()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_db(request: Request) -> Iterator[DbSession]:
    """Dependency to get database session."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
