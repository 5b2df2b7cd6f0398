"""Dependency injection for FastAPI."""

from typing import Optional

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from finboard.config.settings import get_settings
from finboard.core.exceptions import ValidationError
from finboard.providers import MarketDataProvider, StubMarketDataProvider, YFinanceProvider
from finboard.repositories.sqlalchemy.database import get_db
from finboard.repositories.sqlalchemy import (
    SqlAlchemyEntryRepository,
    SqlAlchemyCategoryRepository,
    SqlAlchemyAssetRepository,
    SqlAlchemySnapshotRepository,
    SqlAlchemyAllocationRepository,
)
from finboard.services import (
    LedgerService,
    AssetService,
    MarketDataService,
    SnapshotService,
    ReportingService,
    AllocationService,
)
from finboard.services.expense_aggregator import EntryFilter, TimeWindow

# Shared across requests so the quote cache survives between calls
_market_data_service: Optional[MarketDataService] = None


def get_entry_repo(db: Session = Depends(get_db)) -> SqlAlchemyEntryRepository:
    """Provide EntryRepository instance."""
    return SqlAlchemyEntryRepository(db)


def get_category_repo(db: Session = Depends(get_db)) -> SqlAlchemyCategoryRepository:
    """Provide CategoryRepository instance."""
    return SqlAlchemyCategoryRepository(db)


def get_asset_repo(db: Session = Depends(get_db)) -> SqlAlchemyAssetRepository:
    """Provide AssetRepository instance."""
    return SqlAlchemyAssetRepository(db)


def get_snapshot_repo(db: Session = Depends(get_db)) -> SqlAlchemySnapshotRepository:
    """Provide SnapshotRepository instance."""
    return SqlAlchemySnapshotRepository(db)


def get_allocation_repo(db: Session = Depends(get_db)) -> SqlAlchemyAllocationRepository:
    """Provide AllocationRepository instance."""
    return SqlAlchemyAllocationRepository(db)

def build_market_provider() -> MarketDataProvider:
    """Create the provider selected by `market_data_provider`."""
    settings = get_settings()
    if settings.market_data_provider == "stub":
        return StubMarketDataProvider(default_currency=settings.default_currency)
    return YFinanceProvider(default_currency=settings.default_currency)


def get_market_data_service() -> MarketDataService:
    """Provide the process-wide MarketDataService instance."""
    global _market_data_service
    if _market_data_service is None:
        settings = get_settings()
        _market_data_service = MarketDataService(
            provider=build_market_provider(),
            cache_ttl_seconds=settings.market_data_cache_ttl_seconds,
            default_currency=settings.default_currency,
        )
    return _market_data_service


def reset_market_data_service() -> None:
    """Drop the shared service (e.g. after changing settings)."""
    global _market_data_service
    _market_data_service = None


def get_ledger_service(
    entry_repo: SqlAlchemyEntryRepository = Depends(get_entry_repo),
    category_repo: SqlAlchemyCategoryRepository = Depends(get_category_repo),
) -> LedgerService:
    """Provide LedgerService instance."""
    return LedgerService(entry_repo=entry_repo, category_repo=category_repo)


def get_asset_service(
    asset_repo: SqlAlchemyAssetRepository = Depends(get_asset_repo),
    market_data_service: MarketDataService = Depends(get_market_data_service),
) -> AssetService:
    """Provide AssetService instance."""
    return AssetService(asset_repo=asset_repo, market_data_service=market_data_service)


def get_snapshot_service(
    asset_repo: SqlAlchemyAssetRepository = Depends(get_asset_repo),
    snapshot_repo: SqlAlchemySnapshotRepository = Depends(get_snapshot_repo),
) -> SnapshotService:
    """Provide SnapshotService instance."""
    return SnapshotService(asset_repo=asset_repo, snapshot_repo=snapshot_repo)


def get_reporting_service(
    ledger_service: LedgerService = Depends(get_ledger_service),
    asset_repo: SqlAlchemyAssetRepository = Depends(get_asset_repo),
    snapshot_repo: SqlAlchemySnapshotRepository = Depends(get_snapshot_repo),
) -> ReportingService:
    """Provide ReportingService instance."""
    return ReportingService(
        ledger_service=ledger_service,
        asset_repo=asset_repo,
        snapshot_repo=snapshot_repo,
    )


def get_allocation_service(
    asset_repo: SqlAlchemyAssetRepository = Depends(get_asset_repo),
    allocation_repo: SqlAlchemyAllocationRepository = Depends(get_allocation_repo),
) -> AllocationService:
    """Provide AllocationService instance."""
    return AllocationService(asset_repo=asset_repo, allocation_repo=allocation_repo)

def get_time_window(
    year: Optional[int] = Query(None, ge=1900, le=2200, description="Year (all history if empty)"),
    month: Optional[int] = Query(None, description="Month 1-12; requires a year"),
) -> TimeWindow:
    """Provide the reporting window from query parameters."""
    return TimeWindow(year=year, month=month)


def get_entry_filter(
    entry_type: Optional[str] = Query(None, description='Entry type or "all"'),
    category_id: Optional[str] = Query(None, description='Category ID or "all"'),
    subcategory_id: Optional[str] = Query(None, description='Subcategory ID or "all"'),
) -> EntryFilter:
    """Provide the cascading type/category/subcategory filter from query parameters."""
    try:
        return EntryFilter.from_params(entry_type, category_id, subcategory_id)
    except ValueError:
        raise ValidationError(f"Invalid entry type: {entry_type}")
