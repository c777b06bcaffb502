"""
app/codecs package marker.
"""

from app.codecs.archive import SUPPORTED_ARCHIVE_TYPES, build_zip, extract_csv
from app.codecs.errors import (
    ArchiveExtractionError,
    CSVDecodeError,
    EmptyInput,
    InvalidArchive,
    InvalidEncoding,
    NoCSVEntry,
    SchemaMismatch,
    UnsupportedFormat,
)
from app.codecs.price_csv import decode_price_csv, encode_price_csv

__all__ = [
    "ArchiveExtractionError",
    "CSVDecodeError",
    "EmptyInput",
    "InvalidArchive",
    "InvalidEncoding",
    "NoCSVEntry",
    "SUPPORTED_ARCHIVE_TYPES",
    "SchemaMismatch",
    "UnsupportedFormat",
    "build_zip",
    "decode_price_csv",
    "encode_price_csv",
    "extract_csv",
]
