"""
db/config.py

Environment readers shared by the app and db layers, and database URL
resolution.

Values come from the process environment, optionally seeded once from
``.env`` / ``.env.local`` at the project root. Seeded values never
override variables that are already set.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from urllib.parse import quote

_PROJECT_ROOT = Path(__file__).resolve().parents[1]
_ENV_FILENAMES = (".env", ".env.local")
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _parse_env_line(raw_line: str) -> tuple[str, str] | None:
    line = raw_line.strip()
    if not line or line.startswith("#") or "=" not in line:
        return None
    key, value = line.split("=", 1)
    key = key.strip()
    if not key:
        return None
    return key, value.strip().strip('"').strip("'")


@lru_cache(maxsize=1)
def load_env_files() -> None:
    """
    Seed ``os.environ`` from the project's ``.env`` files, once per process.
    """

    for filename in _ENV_FILENAMES:
        env_path = _PROJECT_ROOT / filename
        if not env_path.is_file():
            continue
        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            parsed = _parse_env_line(raw_line)
            if parsed is not None:
                os.environ.setdefault(*parsed)


def env_str(name: str, default: str) -> str:
    """Return the stripped value of *name*, or *default* when unset or blank."""
    load_env_files()
    value = (os.getenv(name) or "").strip()
    return value or default


def env_bool(name: str, default: bool) -> bool:
    load_env_files()
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def env_int(name: str, default: int) -> int:
    """Return *name* as an int; unset or unparsable values give *default*."""
    load_env_files()
    try:
        return int(os.getenv(name, ""))
    except ValueError:
        return default


def normalize_postgres_url(url: str) -> str:
    """
    Rewrite ``postgres://`` and ``postgresql://`` URLs to the psycopg driver form.
    """

    for scheme in ("postgres://", "postgresql://"):
        if url.startswith(scheme):
            return "postgresql+psycopg://" + url[len(scheme):]
    return url


def resolve_database_url() -> str:
    """
    Resolve the database URL.

    ``DATABASE_URL`` wins when set. Otherwise a PostgreSQL URL is composed
    from ``POSTGRES_HOST`` / ``POSTGRES_PORT`` / ``POSTGRES_USER`` /
    ``POSTGRES_PASSWORD`` / ``POSTGRES_DB``.
    """

    direct_url = env_str("DATABASE_URL", "")
    if direct_url:
        return normalize_postgres_url(direct_url)

    user = quote(env_str("POSTGRES_USER", "validator"), safe="")
    password = quote(env_str("POSTGRES_PASSWORD", "val1dat0r"), safe="")
    host = env_str("POSTGRES_HOST", "localhost")
    port = env_str("POSTGRES_PORT", "5432")
    database = env_str("POSTGRES_DB", "project-sem-1")

    return f"postgresql+psycopg://{user}:{password}@{host}:{port}/{database}"
