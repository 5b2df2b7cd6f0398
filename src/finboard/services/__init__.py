"""Service layer - business logic orchestration."""

from finboard.services.ledger_service import (
    LedgerService,
    EntryCreate,
    EntryUpdate,
    CategoryUpdate,
    SubCategoryInput,
)
from finboard.services.asset_service import AssetService, AssetCreate, AssetUpdate
from finboard.services.market_data_service import MarketDataService
from finboard.services.snapshot_service import SnapshotService
from finboard.services.allocation_service import AllocationService
from finboard.services.reporting_service import ReportingService

__all__ = [
    "LedgerService",
    "EntryCreate",
    "EntryUpdate",
    "CategoryUpdate",
    "SubCategoryInput",
    "AssetService",
    "AssetCreate",
    "AssetUpdate",
    "MarketDataService",
    "SnapshotService",
    "ReportingService",
    "AllocationService",
]
