"""
app/validators package marker.
"""

from app.validators.price_row_validator import PRICE_COLUMNS, PriceRowValidator

__all__ = [
    "PRICE_COLUMNS",
    "PriceRowValidator",
]
