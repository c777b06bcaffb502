"""
app/services package marker.
"""

from app.services.price_export_service import (
    PriceExport,
    PriceExportService,
    get_price_export_service,
)
from app.services.price_ingestion_service import (
    PriceIngestionService,
    get_price_ingestion_service,
)

__all__ = [
    "PriceExport",
    "PriceExportService",
    "get_price_export_service",
    "PriceIngestionService",
    "get_price_ingestion_service",
]
