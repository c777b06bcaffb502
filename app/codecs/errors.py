"""
app/codecs/errors.py

Errors raised while unpacking archives and decoding price CSV payloads.
"""

from __future__ import annotations


class ArchiveExtractionError(Exception):
    """Base exception for archive extraction failures. Never fatal to ingestion."""


class UnsupportedFormat(ArchiveExtractionError):
    """Raised when the archive tag is neither ``zip`` nor ``tar``."""


class InvalidArchive(ArchiveExtractionError):
    """Raised on a signature mismatch or a structurally corrupt archive."""


class NoCSVEntry(ArchiveExtractionError):
    """Raised when a readable archive holds no ``.csv`` entry."""


class CSVDecodeError(ValueError):
    """Base exception for fatal price CSV decoding failures."""


class EmptyInput(CSVDecodeError):
    """Raised when the payload has no rows at all, not even a header."""


class SchemaMismatch(CSVDecodeError):
    """Raised when the header is not exactly ``id,name,category,price,create_date``."""


class InvalidEncoding(CSVDecodeError):
    """Raised when the payload is not UTF-8 text."""
