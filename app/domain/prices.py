"""
app/domain/prices.py

Domain models used by the price ingestion and export flows.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class PriceRecord:
    """
    One validated CSV row, prepared for persistence.
    """

    id: int
    name: str
    category: str
    price: Decimal
    create_date: date

    @property
    def key(self) -> tuple[int, date]:
        """Natural identity of the entry: ``(id, create_date)``."""
        return (self.id, self.create_date)


@dataclass(frozen=True)
class RowDiagnostic:
    """
    Why one CSV row was skipped.
    """

    row_number: int
    message: str
    column: str | None = None
    value: str | None = None


@dataclass(frozen=True)
class DecodeResult:
    """
    Accepted rows in input order plus the diagnostics for rejected ones.
    """

    records: list[PriceRecord] = field(default_factory=list)
    diagnostics: list[RowDiagnostic] = field(default_factory=list)

    @property
    def skipped(self) -> int:
        return len(self.diagnostics)


@dataclass(frozen=True)
class IngestionStats:
    """
    Store-wide snapshot taken inside the ingestion transaction.

    ``duplicates_count`` and ``total_items`` are scoped to the batch;
    the remaining fields describe the whole store after the batch applied.
    """

    total_count: int
    duplicates_count: int
    total_items: int
    total_categories: int
    total_price: Decimal
    skipped_rows: int = 0


@dataclass(frozen=True)
class PriceExportFilters:
    """
    Optional, AND-combined export bounds. ``None`` means unbounded.
    """

    start_date: date | None = None
    end_date: date | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None

    def normalized(self) -> PriceExportFilters:
        """Drop price bounds that are zero or negative; they impose no constraint."""
        return PriceExportFilters(
            start_date=self.start_date,
            end_date=self.end_date,
            min_price=_positive_or_none(self.min_price),
            max_price=_positive_or_none(self.max_price),
        )


def _positive_or_none(value: Decimal | None) -> Decimal | None:
    if value is None or value <= 0:
        return None
    return value
