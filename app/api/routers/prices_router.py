"""
app/api/routers/prices_router.py

Price upload and export endpoints.

POST /api/v0/prices?type=zip|tar
    Body: archive (or bare CSV) as raw bytes or a multipart ``file`` field.
    Response: JSON ingestion statistics.

GET /api/v0/prices?start=&end=&min=&max=
    Response: zip archive holding ``data.csv`` with the matching rows.

All data work lives in the services; the router only handles HTTP plumbing
(parameter validation, error mapping, content-type).
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_price_payload
from app.codecs.archive import SUPPORTED_ARCHIVE_TYPES
from app.codecs.errors import CSVDecodeError
from app.config import IngestionSettings, get_ingestion_settings
from app.domain.prices import PriceExportFilters
from app.repositories.errors import PriceStoreError
from app.schemas.prices import IngestionStatsResponse
from app.services.price_export_service import PriceExportService, get_price_export_service
from app.services.price_ingestion_service import (
    PriceIngestionService,
    get_price_ingestion_service,
)
from db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v0", tags=["prices"])


@router.post("/prices", response_model=IngestionStatsResponse)
def upload_prices(
    archive_type: str | None = Query(
        default=None,
        alias="type",
        description='Archive type: "zip" (default) or "tar" (optionally gzip-compressed).',
    ),
    payload: bytes = Depends(get_price_payload),
    db: Session = Depends(get_db),
    settings: IngestionSettings = Depends(get_ingestion_settings),
    ingestion_service: PriceIngestionService = Depends(get_price_ingestion_service),
) -> IngestionStatsResponse:
    """
    Ingest one price archive and report store-wide statistics after the write.
    """

    kind = (archive_type or settings.default_archive_type).strip().lower()
    if kind not in SUPPORTED_ARCHIVE_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported archive type {archive_type!r}. Use 'zip' or 'tar'.",
        )

    try:
        stats = ingestion_service.ingest(payload=payload, archive_type=kind, db=db)
    except CSVDecodeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Failed to process data: {exc}",
        ) from exc
    except PriceStoreError as exc:
        logger.exception("Price ingestion failed type=%r bytes=%d", kind, len(payload))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to insert data; see server logs for details.",
        ) from exc

    return IngestionStatsResponse.from_stats(stats)


@router.get("/prices", summary="Download stored prices as a zipped CSV")
def download_prices(
    start: date | None = Query(default=None, description="Inclusive start date (YYYY-MM-DD)."),
    end: date | None = Query(default=None, description="Inclusive end date (YYYY-MM-DD)."),
    min_price: Decimal | None = Query(
        default=None,
        alias="min",
        ge=0,
        description="Inclusive minimum price; 0 means no bound.",
    ),
    max_price: Decimal | None = Query(
        default=None,
        alias="max",
        ge=0,
        description="Inclusive maximum price; 0 means no bound.",
    ),
    db: Session = Depends(get_db),
    export_service: PriceExportService = Depends(get_price_export_service),
) -> Response:
    """
    Export the stored prices matching every supplied filter, ordered by date then id.
    """

    filters = PriceExportFilters(
        start_date=start,
        end_date=end,
        min_price=min_price,
        max_price=max_price,
    )
    try:
        export = export_service.export(db, filters)
    except PriceStoreError as exc:
        logger.exception("Price export failed filters=%r", filters)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get data; see server logs for details.",
        ) from exc

    return Response(
        content=export.archive,
        media_type="application/zip",
        headers={
            "Content-Disposition": f"attachment; filename={export.filename}",
            "X-Row-Count": str(export.row_count),
        },
    )
