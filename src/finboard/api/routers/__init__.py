"""API routers package."""

from finboard.api.routers.categories import router as categories_router
from finboard.api.routers.entries import router as entries_router
from finboard.api.routers.cashflow import router as cashflow_router
from finboard.api.routers.assets import router as assets_router
from finboard.api.routers.prices import router as prices_router
from finboard.api.routers.snapshots import router as snapshots_router
from finboard.api.routers.history import router as history_router
from finboard.api.routers.allocation import router as allocation_router

__all__ = [
    "categories_router",
    "entries_router",
    "cashflow_router",
    "assets_router",
    "prices_router",
    "snapshots_router",
    "history_router",
    "allocation_router",
]
