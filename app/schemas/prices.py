"""
app/schemas/prices.py

Response schemas for price endpoints.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field, field_serializer

from app.domain.prices import IngestionStats


class IngestionStatsResponse(BaseModel):
    """
    API response model for one ingested batch.

    ``total_price`` keeps the exact cent-rounded Decimal and is written to
    JSON as a number. JSON numbers are IEEE doubles for most clients, so
    cents stay exact for totals below 10**13.
    """

    total_count: int = Field(..., ge=0, description="Rows stored after the batch")
    duplicates_count: int = Field(..., ge=0, description="Batch rows already seen or stored")
    total_items: int = Field(..., ge=0, description="Rows inserted by this batch")
    total_categories: int = Field(..., ge=0, description="Distinct categories stored")
    total_price: Decimal = Field(..., ge=0, description="Sum of all stored prices")

    @field_serializer("total_price")
    def serialize_total_price(self, value: Decimal) -> float:
        return float(value)

    @classmethod
    def from_stats(cls, stats: IngestionStats) -> IngestionStatsResponse:
        return cls(
            total_count=stats.total_count,
            duplicates_count=stats.duplicates_count,
            total_items=stats.total_items,
            total_categories=stats.total_categories,
            total_price=stats.total_price,
        )
