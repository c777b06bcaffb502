"""
app/domain package marker.
"""

from app.domain.prices import (
    DecodeResult,
    IngestionStats,
    PriceExportFilters,
    PriceRecord,
    RowDiagnostic,
)

__all__ = [
    "DecodeResult",
    "IngestionStats",
    "PriceExportFilters",
    "PriceRecord",
    "RowDiagnostic",
]
