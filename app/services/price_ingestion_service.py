"""
app/services/price_ingestion_service.py

Service layer for price payload ingestion.

Flow for one request:

    1. Unpack the payload with the requested archive type. When unpacking
       fails for any reason the payload itself is decoded as raw CSV, so
       clients may upload a bare CSV file.
    2. Decode and validate rows. Bad rows are skipped and logged; only a
       structural CSV problem aborts the request.
    3. Inside one transaction: drop keys already seen in this batch, drop
       keys already stored, insert the rest, then read store-wide totals.
       Any failure rolls the whole batch back.
"""

from __future__ import annotations

import logging
from datetime import date
from functools import lru_cache

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.codecs.archive import extract_csv
from app.codecs.errors import ArchiveExtractionError
from app.codecs.price_csv import decode_price_csv
from app.config import get_ingestion_settings
from app.domain.prices import DecodeResult, IngestionStats, RowDiagnostic
from app.repositories.errors import TransactionError
from app.repositories.price_repository import PriceRepository
from app.validators.price_row_validator import PriceRowValidator

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class PriceIngestionService:
    """
    Coordinates archive extraction, CSV decoding, deduplication and persistence.
    """

    def __init__(
        self,
        *,
        log_row_diagnostics: bool = True,
        max_logged_diagnostics: int = 500,
        validator: PriceRowValidator | None = None,
    ) -> None:
        self._log_row_diagnostics = log_row_diagnostics
        self._max_logged_diagnostics = max(0, max_logged_diagnostics)
        self._validator = validator or PriceRowValidator()

    def ingest(
        self,
        *,
        payload: bytes,
        archive_type: str,
        db: Session,
    ) -> IngestionStats:
        """
        Ingest one uploaded payload and return post-write store statistics.

        Args:
            payload:      Raw request bytes: a zip/tar archive or a bare CSV file.
            archive_type: ``"zip"`` or ``"tar"``; a hint, not a requirement.
            db:           SQLAlchemy session. Should not be mid-transaction so the
                          batch commits on its own.

        Raises:
            CSVDecodeError:   the CSV itself is unusable (empty, wrong header, not UTF-8).
            TransactionError: the store rejected the batch; nothing was written.
        """
        decoded = self.decode_payload(payload=payload, archive_type=archive_type)
        self._log_diagnostics(decoded.diagnostics)

        repository = PriceRepository(db)
        try:
            with repository.transaction():
                stats = self._apply_batch(repository=repository, decoded=decoded)
        except (SQLAlchemyError, ArithmeticError) as exc:
            # ArithmeticError covers driver overflow and decimal rounding failures.
            raise TransactionError("Failed to persist price batch; no rows were written.") from exc

        logger.info(
            "Price batch ingested decoded=%d inserted=%d duplicates=%d skipped=%d "
            "total_count=%d total_categories=%d total_price=%s",
            len(decoded.records),
            stats.total_items,
            stats.duplicates_count,
            stats.skipped_rows,
            stats.total_count,
            stats.total_categories,
            stats.total_price,
        )
        return stats

    def decode_payload(self, *, payload: bytes, archive_type: str) -> DecodeResult:
        """
        Extract the CSV entry from *payload*, falling back to the payload itself.
        """
        try:
            csv_bytes = extract_csv(payload, archive_type)
        except ArchiveExtractionError as exc:
            logger.info(
                "Archive extraction failed type=%r reason=%s; decoding payload as raw CSV",
                archive_type,
                exc,
            )
            csv_bytes = payload

        return decode_price_csv(csv_bytes, validator=self._validator)

    # ------------------------------------------------------------------
    # Ingestion internals
    # ------------------------------------------------------------------

    def _apply_batch(
        self,
        *,
        repository: PriceRepository,
        decoded: DecodeResult,
    ) -> IngestionStats:
        seen_keys: set[tuple[int, date]] = set()
        inserted = 0
        duplicates = 0

        for record in decoded.records:
            if record.key in seen_keys:
                duplicates += 1
                continue
            seen_keys.add(record.key)

            if repository.exists(record):
                duplicates += 1
                continue

            repository.insert(record)
            inserted += 1

        return IngestionStats(
            total_count=repository.count_all(),
            duplicates_count=duplicates,
            total_items=inserted,
            total_categories=repository.count_categories(),
            total_price=repository.sum_prices(),
            skipped_rows=decoded.skipped,
        )

    def _log_diagnostics(self, diagnostics: list[RowDiagnostic]) -> None:
        if not self._log_row_diagnostics or not diagnostics:
            return

        for diagnostic in diagnostics[: self._max_logged_diagnostics]:
            logger.warning(
                "Price CSV row skipped row=%s column=%s message=%s value=%r",
                diagnostic.row_number,
                diagnostic.column,
                diagnostic.message,
                diagnostic.value,
            )

        suppressed = len(diagnostics) - self._max_logged_diagnostics
        if suppressed > 0:
            logger.warning("Price CSV row diagnostics suppressed count=%d", suppressed)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_price_ingestion_service() -> PriceIngestionService:
    """
    Build and cache the ingestion service with env-driven settings.
    """
    settings = get_ingestion_settings()
    return PriceIngestionService(
        log_row_diagnostics=settings.log_row_diagnostics,
        max_logged_diagnostics=settings.max_logged_diagnostics,
    )
