"""
app/codecs/archive.py

Archive helpers for price payloads.

Inbound, ``extract_csv`` pulls the first ``.csv`` entry out of a zip or a
(gzip-compressed or plain) tar archive held in memory. Outbound,
``build_zip`` wraps CSV bytes as a single-entry zip archive.

Extraction failures are reported as ``ArchiveExtractionError`` subclasses so
callers can fall back to treating the payload as raw CSV.
"""

from __future__ import annotations

import io
import tarfile
import zipfile
import zlib

from app.codecs.errors import InvalidArchive, NoCSVEntry, UnsupportedFormat

ARCHIVE_ZIP = "zip"
ARCHIVE_TAR = "tar"
SUPPORTED_ARCHIVE_TYPES: frozenset[str] = frozenset({ARCHIVE_ZIP, ARCHIVE_TAR})

_ZIP_SIGNATURE = b"PK"
_GZIP_SIGNATURE = b"\x1f\x8b"
_CSV_SUFFIX = ".csv"


def extract_csv(payload: bytes, archive_type: str) -> bytes:
    """
    Return the raw bytes of the first ``.csv`` entry in *payload*.

    Raises
    ------
    UnsupportedFormat: *archive_type* is not ``"zip"`` or ``"tar"``.
    InvalidArchive:    signature mismatch or corrupt archive data.
    NoCSVEntry:        the archive is readable but holds no CSV entry.
    """
    kind = (archive_type or "").strip().lower()
    if kind == ARCHIVE_ZIP:
        return _extract_from_zip(payload)
    if kind == ARCHIVE_TAR:
        return _extract_from_tar(payload)
    raise UnsupportedFormat(
        f"Unsupported archive type {archive_type!r}. Use one of: {sorted(SUPPORTED_ARCHIVE_TYPES)}."
    )


def build_zip(csv_bytes: bytes, entry_name: str = "data.csv") -> bytes:
    """Wrap *csv_bytes* as the only entry of a deflate-compressed zip archive."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, mode="w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(entry_name, csv_bytes)
    return buffer.getvalue()


def _is_csv_name(name: str) -> bool:
    return name.lower().endswith(_CSV_SUFFIX)


def _extract_from_zip(payload: bytes) -> bytes:
    if len(payload) < 4 or not payload.startswith(_ZIP_SIGNATURE):
        raise InvalidArchive("Payload is not a zip archive (bad signature).")

    try:
        with zipfile.ZipFile(io.BytesIO(payload)) as archive:
            for info in archive.infolist():
                if info.is_dir() or not _is_csv_name(info.filename):
                    continue
                return archive.read(info)
    except (zipfile.BadZipFile, zlib.error, EOFError, NotImplementedError, RuntimeError) as exc:
        # RuntimeError covers encrypted entries, NotImplementedError unknown compression.
        raise InvalidArchive(f"Corrupt zip archive: {exc}") from exc

    raise NoCSVEntry("No CSV file found in zip archive.")


def _extract_from_tar(payload: bytes) -> bytes:
    mode = "r:gz" if payload.startswith(_GZIP_SIGNATURE) else "r:"

    try:
        with tarfile.open(fileobj=io.BytesIO(payload), mode=mode) as archive:
            for member in archive:
                if not member.isfile() or not _is_csv_name(member.name):
                    continue
                stream = archive.extractfile(member)
                if stream is None:
                    continue
                return stream.read()
    except (tarfile.TarError, zlib.error, EOFError, OSError) as exc:
        # gzip stream corruption surfaces as OSError (BadGzipFile) or EOFError.
        raise InvalidArchive(f"Corrupt tar archive: {exc}") from exc

    raise NoCSVEntry("No CSV file found in tar archive.")
