"""
app/services/price_export_service.py

Zipped CSV export of stored prices.

Filters are optional and AND-combined:
    start_date / end_date: inclusive bounds on create_date
    min_price / max_price: inclusive bounds on price; zero or negative
                           values are treated as "no bound"

Rows are always exported ordered by (create_date, id) so repeated exports
of the same data produce byte-identical CSV.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from sqlalchemy.orm import Session

from app.codecs.archive import build_zip
from app.codecs.price_csv import encode_price_csv
from app.config import get_export_settings
from app.domain.prices import PriceExportFilters
from app.repositories.price_repository import PriceRepository
from db.models.price import Price

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PriceExport:
    """
    One ready-to-send export archive.
    """

    archive: bytes
    row_count: int
    filename: str


class PriceExportService:
    """
    Query stored prices and package them as a single-entry zip archive.

    Read-only; no session commits are issued. The caller owns the session lifecycle.
    """

    def __init__(
        self,
        *,
        archive_entry_name: str = "data.csv",
        download_filename: str = "prices.zip",
    ) -> None:
        self._archive_entry_name = archive_entry_name
        self._download_filename = download_filename

    def query(self, db: Session, filters: PriceExportFilters) -> list[Price]:
        """
        Return the prices matching *filters* in export order.

        Raises
        ------
        QueryError: when the store query fails.
        """
        return PriceRepository(db).list_filtered(filters)

    def export(self, db: Session, filters: PriceExportFilters) -> PriceExport:
        rows = self.query(db, filters)
        archive = build_zip(encode_price_csv(rows), entry_name=self._archive_entry_name)

        logger.info(
            "Price export start=%s end=%s min=%s max=%s rows=%d bytes=%d",
            filters.start_date,
            filters.end_date,
            filters.min_price,
            filters.max_price,
            len(rows),
            len(archive),
        )
        return PriceExport(
            archive=archive,
            row_count=len(rows),
            filename=self._download_filename,
        )


@lru_cache(maxsize=1)
def get_price_export_service() -> PriceExportService:
    settings = get_export_settings()
    return PriceExportService(
        archive_entry_name=settings.archive_entry_name,
        download_filename=settings.download_filename,
    )
