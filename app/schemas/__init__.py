"""
app/schemas package marker.
"""

from app.schemas.prices import IngestionStatsResponse

__all__ = [
    "IngestionStatsResponse",
]
