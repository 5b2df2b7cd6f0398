"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from finboard import __version__
from finboard.config.settings import get_settings
from finboard.config.logging_config import setup_logging
from finboard.repositories.sqlalchemy.database import init_db
from finboard.api.routers import (
    categories_router,
    entries_router,
    cashflow_router,
    assets_router,
    prices_router,
    snapshots_router,
    history_router,
    allocation_router,
)
from finboard.core.exceptions import AppError, CategoryInUseError, NotFoundError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    logger.info("%s %s started", get_settings().app_name, __version__)
    yield
    # Shutdown (nothing to clean up)


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Personal finance tracking: cashflow ledger, assets and price history",
    version=__version__,
    lifespan=lifespan,
)

# Include routers
app.include_router(categories_router)
app.include_router(entries_router)
app.include_router(cashflow_router)
app.include_router(assets_router)
app.include_router(prices_router)
app.include_router(snapshots_router)
app.include_router(history_router)
app.include_router(allocation_router)


def _status_for(exc: AppError) -> int:
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, CategoryInUseError):
        return 409
    return 400


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    status_code = _status_for(exc)
    if status_code != 404:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": __version__,
        "docs": "/docs",
    }
