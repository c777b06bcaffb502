"""
app/api/routers package marker.
"""

from app.api.routers.prices_router import router as prices_router

__all__ = [
    "prices_router",
]
