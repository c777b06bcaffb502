"""
app/codecs/price_csv.py

Price CSV decoding and encoding.

The wire format is a fixed five-column table::

    id,name,category,price,create_date
    1,Widget,Tools,9.99,2024-03-01

``decode_price_csv`` is a pure function: rejected rows are reported as
``RowDiagnostic`` values on the result instead of being logged, and only a
structural problem (no rows, wrong header, undecodable bytes) is fatal.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol

from app.codecs.errors import CSVDecodeError, EmptyInput, InvalidEncoding, SchemaMismatch
from app.domain.prices import DecodeResult, PriceRecord, RowDiagnostic
from app.validators.price_row_validator import PRICE_COLUMNS, PriceRowValidator

_CENTS = Decimal("0.01")


class PriceRow(Protocol):
    """Anything exposing the five price columns as attributes."""

    id: int
    name: str
    category: str
    price: Decimal
    create_date: date


def decode_price_csv(
    csv_bytes: bytes,
    *,
    validator: PriceRowValidator | None = None,
) -> DecodeResult:
    """
    Parse *csv_bytes* into validated price records.

    Blank lines are ignored; the first non-blank row must be the header.
    Data rows that fail validation are skipped with one diagnostic each,
    and accepted records keep their input order.

    Raises
    ------
    InvalidEncoding: the payload is not UTF-8 text.
    EmptyInput:      there is no row at all, not even a header.
    SchemaMismatch:  the header is not exactly the five expected columns.
    CSVDecodeError:  the CSV tokenizer rejected the text.
    """
    row_validator = validator or PriceRowValidator()

    try:
        text = csv_bytes.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise InvalidEncoding("CSV must be UTF-8 encoded.") from exc

    reader = csv.reader(io.StringIO(text, newline=""))
    header_seen = False
    records: list[PriceRecord] = []
    diagnostics: list[RowDiagnostic] = []

    try:
        for row in reader:
            if not row:
                continue

            if not header_seen:
                _validate_header(row)
                header_seen = True
                continue

            record, diagnostic = row_validator.validate_row(row=row, row_number=reader.line_num)
            if diagnostic is not None:
                diagnostics.append(diagnostic)
                continue
            if record is not None:
                records.append(record)
    except csv.Error as exc:
        raise CSVDecodeError(f"Invalid CSV format: {exc}") from exc

    if not header_seen:
        raise EmptyInput("CSV payload is empty.")

    return DecodeResult(records=records, diagnostics=diagnostics)


def encode_price_csv(rows: Iterable[PriceRow]) -> bytes:
    """
    Serialise *rows* as UTF-8 CSV with the standard header.

    Prices are written with exactly two decimals, dates as ``YYYY-MM-DD``.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(PRICE_COLUMNS)
    for row in rows:
        writer.writerow(
            (
                row.id,
                row.name,
                row.category,
                format_price(row.price),
                row.create_date.isoformat(),
            )
        )
    return buffer.getvalue().encode("utf-8")


def format_price(value: Decimal | float | int) -> str:
    """Render *value* rounded half-up to cents, e.g. ``9.5`` -> ``"9.50"``."""
    return f"{Decimal(str(value)).quantize(_CENTS, rounding=ROUND_HALF_UP):f}"


def _validate_header(row: list[str]) -> None:
    normalized = tuple(column.strip().lower() for column in row)
    if normalized != PRICE_COLUMNS:
        raise SchemaMismatch(
            f"Invalid CSV header: expected {','.join(PRICE_COLUMNS)}, got {','.join(row)}."
        )
