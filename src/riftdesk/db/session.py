"""Database session management.

Provides cached engines and session factories for the SQLite store,
configured for use from FastAPI's threadpool.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from riftdesk.config import get_settings
from riftdesk.db.schema import Base

# Module-level engine cache for connection pooling
_engine_cache: dict[str, Engine] = {}

# Module-level session factory cache
_session_factory_cache: dict[str, sessionmaker] = {}


def _resolve_path(db_path: Path | str | None) -> Path:
    if db_path is None:
        db_path = get_settings().database_path
    return Path(db_path)


def get_engine(db_path: Path | str | None = None) -> Engine:
    """Get SQLAlchemy engine for the database.

    Engines are cached by resolved db_path. Uses StaticPool and
    check_same_thread=False so the single SQLite connection can be
    shared by request threads.

    Args:
        db_path: Path to SQLite database file. Defaults to
            Settings.database_path.

    Returns:
        SQLAlchemy engine instance (cached).
    """
    db_path = _resolve_path(db_path)
    cache_key = str(db_path.resolve())

    if cache_key in _engine_cache:
        return _engine_cache[cache_key]

    db_path.parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    _engine_cache[cache_key] = engine

    return engine


def _get_session_factory(db_path: Path | str | None = None) -> sessionmaker:
    db_path = _resolve_path(db_path)
    cache_key = str(db_path.resolve())

    if cache_key in _session_factory_cache:
        return _session_factory_cache[cache_key]

    factory = sessionmaker(bind=get_engine(db_path))
    _session_factory_cache[cache_key] = factory

    return factory


def get_session(db_path: Path | str | None = None) -> Session:
    """Get a database session.

    Note: Caller is responsible for closing the session. For automatic
    resource management, use get_db_session() instead.
    """
    factory = _get_session_factory(db_path)
    return factory()


@contextmanager
def get_db_session(db_path: Path | str | None = None) -> Generator[Session, None, None]:
    """Context manager for database sessions with automatic cleanup.

    Commits on successful exit, rolls back on exception, and always
    closes the session.

    Example:
        with get_db_session() as session:
            session.add(match)
    """
    session = get_session(db_path)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(db_path: Path | str | None = None) -> None:
    """Create all tables. Call once during application startup."""
    engine = get_engine(db_path)
    Base.metadata.create_all(engine)
