"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from db.config import env_bool, env_int, env_str

_DEFAULT_MAX_PAYLOAD_BYTES = 10 << 20


@dataclass(frozen=True)
class IngestionSettings:
    """
    Runtime settings for price payload ingestion.
    """

    max_payload_bytes: int = _DEFAULT_MAX_PAYLOAD_BYTES
    default_archive_type: str = "zip"
    log_row_diagnostics: bool = True
    max_logged_diagnostics: int = 500


@dataclass(frozen=True)
class ExportSettings:
    """
    Runtime settings for the zipped CSV export.
    """

    archive_entry_name: str = "data.csv"
    download_filename: str = "prices.zip"


@lru_cache(maxsize=1)
def get_ingestion_settings() -> IngestionSettings:
    """
    Return cached ingestion settings from environment variables.
    """

    archive_type = env_str("PRICES_DEFAULT_ARCHIVE_TYPE", "zip").lower()
    if archive_type not in {"zip", "tar"}:
        archive_type = "zip"

    return IngestionSettings(
        max_payload_bytes=max(1, env_int("PRICES_MAX_PAYLOAD_BYTES", _DEFAULT_MAX_PAYLOAD_BYTES)),
        default_archive_type=archive_type,
        log_row_diagnostics=env_bool("PRICES_LOG_ROW_DIAGNOSTICS", True),
        max_logged_diagnostics=max(0, env_int("PRICES_MAX_LOGGED_DIAGNOSTICS", 500)),
    )


@lru_cache(maxsize=1)
def get_export_settings() -> ExportSettings:
    """
    Return cached export settings from environment variables.
    """

    return ExportSettings(
        archive_entry_name=env_str("PRICES_EXPORT_ENTRY_NAME", "data.csv"),
        download_filename=env_str("PRICES_EXPORT_FILENAME", "prices.zip"),
    )
