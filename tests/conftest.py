"""
tests/conftest.py

Shared fixtures: an in-memory SQLite store with the prices table, and
builders for zip / tar payloads.
"""

from __future__ import annotations

import io
import tarfile
import zipfile
from collections.abc import Callable, Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from db.session import init_db

SAMPLE_CSV = (
    b"id,name,category,price,create_date\n"
    b"1,Widget,Tools,9.99,2024-03-01\n"
    b"2,Gadget,Toys,5.00,2024-03-02\n"
    b"3,Sprocket,Tools,12.50,2024-03-03\n"
)


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        bind=engine,
        class_=Session,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture()
def db_session(session_factory: sessionmaker) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


# ---------------------------------------------------------------------------
# Payload builders
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_csv() -> bytes:
    return SAMPLE_CSV


@pytest.fixture()
def make_zip() -> Callable[..., bytes]:
    """Build a zip archive from ``(name, content)`` pairs, in order."""

    def _make(*entries: tuple[str, bytes]) -> bytes:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, mode="w", compression=zipfile.ZIP_DEFLATED) as archive:
            for name, content in entries:
                archive.writestr(name, content)
        return buffer.getvalue()

    return _make


@pytest.fixture()
def make_tar() -> Callable[..., bytes]:
    """Build a tar archive from ``(name, content)`` pairs; ``content=None`` adds a directory."""

    def _make(*entries: tuple[str, bytes | None], gzip: bool = False) -> bytes:
        buffer = io.BytesIO()
        with tarfile.open(fileobj=buffer, mode="w:gz" if gzip else "w") as archive:
            for name, content in entries:
                info = tarfile.TarInfo(name)
                if content is None:
                    info.type = tarfile.DIRTYPE
                    archive.addfile(info)
                    continue
                info.size = len(content)
                archive.addfile(info, io.BytesIO(content))
        return buffer.getvalue()

    return _make
