"""
db/session.py

SQLAlchemy engine and session factory.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from functools import lru_cache
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from db.config import env_bool, env_int, resolve_database_url

logger = logging.getLogger(__name__)


def create_db_engine(database_url: str | None = None) -> Engine:
    url = database_url or resolve_database_url()

    engine_kwargs: dict[str, Any] = {
        "echo": env_bool("SQL_ECHO", False),
        "pool_pre_ping": True,
    }
    # SQLite engines use a single-connection pool that rejects sizing options.
    if not url.startswith("sqlite"):
        engine_kwargs.update(
            pool_recycle=env_int("DB_POOL_RECYCLE", 1800),
            pool_size=env_int("DB_POOL_SIZE", 5),
            max_overflow=env_int("DB_MAX_OVERFLOW", 10),
        )

    return create_engine(url, **engine_kwargs)


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Process-wide engine, built from the environment on first use."""
    return create_db_engine()


@lru_cache(maxsize=1)
def _session_factory() -> sessionmaker:
    return sessionmaker(bind=get_engine(), autoflush=False, expire_on_commit=False)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: one session per request, always closed."""
    with _session_factory()() as db:
        yield db


def check_db_connection(engine: Engine | None = None) -> None:
    """Run SELECT 1. Raises RuntimeError if the DB is unreachable."""
    try:
        with (engine or get_engine()).connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as exc:
        raise RuntimeError("Database unavailable.") from exc


def init_db(engine: Engine | None = None) -> None:
    """
    Create the tables registered on Base.metadata when they are absent.

    Existing tables are left untouched; there is no migration step.
    """
    import db.models  # noqa: F401 - registers all ORM models on Base.metadata
    from db.base import Base

    Base.metadata.create_all(bind=engine or get_engine())
    logger.info("Tables ensured: %s", ", ".join(sorted(Base.metadata.tables)))
