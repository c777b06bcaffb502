"""
app/validators/price_row_validator.py

Row-level validation and type parsing for price CSV rows.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Sequence

from app.domain.prices import PriceRecord, RowDiagnostic

PRICE_COLUMNS: tuple[str, ...] = ("id", "name", "category", "price", "create_date")
DATE_FORMAT = "%Y-%m-%d"

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

# Store column bounds: BIGINT ids, NUMERIC(10, 2) prices.
ID_MIN = -(2**63)
ID_MAX = 2**63 - 1
PRICE_LIMIT = Decimal("100000000")
_CENTS = Decimal("0.01")


class PriceRowValidator:
    """
    Validates and coerces one positional price row.

    Checks run in column order and stop at the first failure, so every
    rejected row carries exactly one diagnostic.
    """

    def validate_row(
        self,
        *,
        row: Sequence[str],
        row_number: int,
    ) -> tuple[PriceRecord | None, RowDiagnostic | None]:
        if len(row) < len(PRICE_COLUMNS):
            return None, RowDiagnostic(
                row_number=row_number,
                message=f"Row has {len(row)} columns, expected {len(PRICE_COLUMNS)}.",
                value=",".join(row),
            )

        raw_id, raw_name, raw_category, raw_price, raw_date = row[: len(PRICE_COLUMNS)]

        record_id = self._parse_int(raw_id)
        if record_id is None:
            return None, self._diagnostic(row_number, "id", "id must be a 64-bit integer.", raw_id)

        name = raw_name.strip()
        if not name:
            return None, self._diagnostic(row_number, "name", "Required value is missing.", raw_name)

        category = raw_category.strip()
        if not category:
            return None, self._diagnostic(
                row_number, "category", "Required value is missing.", raw_category
            )

        price = self._parse_price(raw_price)
        if price is None:
            return None, self._diagnostic(
                row_number, "price", "price must be a non-negative number below 100000000.", raw_price
            )

        create_date = self._parse_date(raw_date)
        if create_date is None:
            return None, self._diagnostic(
                row_number, "create_date", "create_date must be formatted YYYY-MM-DD.", raw_date
            )

        return (
            PriceRecord(
                id=record_id,
                name=name,
                category=category,
                price=price,
                create_date=create_date,
            ),
            None,
        )

    @staticmethod
    def _parse_int(value: str) -> int | None:
        raw = value.strip()
        # int() also accepts "1_000" and non-ASCII digits.
        if not _INTEGER_PATTERN.fullmatch(raw):
            return None
        parsed = int(raw)
        if not ID_MIN <= parsed <= ID_MAX:
            return None
        return parsed

    @staticmethod
    def _parse_price(value: str) -> Decimal | None:
        try:
            price = Decimal(value.strip())
        except (InvalidOperation, ValueError):
            return None
        if not price.is_finite() or price < 0 or price >= PRICE_LIMIT:
            return None
        # 99999999.995 rounds up to 100000000.00, which no longer fits.
        if price.quantize(_CENTS, rounding=ROUND_HALF_UP) >= PRICE_LIMIT:
            return None
        return price

    @staticmethod
    def _parse_date(value: str) -> date | None:
        raw = value.strip()
        if not _DATE_PATTERN.fullmatch(raw):
            return None
        try:
            return datetime.strptime(raw, DATE_FORMAT).date()
        except ValueError:
            return None

    @staticmethod
    def _diagnostic(row_number: int, column: str, message: str, value: Any) -> RowDiagnostic:
        return RowDiagnostic(
            row_number=row_number,
            column=column,
            message=message,
            value=None if value is None else str(value),
        )
