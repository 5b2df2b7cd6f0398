"""Domain models package."""

from finboard.domain.models.enums import (
    EntryType,
    EXPENSE_TYPES,
    ENTRY_TYPE_LABELS,
    AssetType,
    AssetClass,
    DeleteScope,
    InstallmentMode,
    DisplayMode,
    CellColor,
    RebalanceAction,
)
from finboard.domain.models.ledger_entry import LedgerEntry
from finboard.domain.models.category import ExpenseCategory, SubCategory
from finboard.domain.models.asset import Asset, AssetComposition
from finboard.domain.models.snapshot import AssetSnapshot, MonthlySnapshot, make_snapshot_id
from finboard.domain.models.allocation import AllocationTarget

__all__ = [
    "EntryType",
    "EXPENSE_TYPES",
    "ENTRY_TYPE_LABELS",
    "AssetType",
    "AssetClass",
    "DeleteScope",
    "InstallmentMode",
    "DisplayMode",
    "CellColor",
    "RebalanceAction",
    "LedgerEntry",
    "ExpenseCategory",
    "SubCategory",
    "Asset",
    "AssetComposition",
    "AssetSnapshot",
    "MonthlySnapshot",
    "make_snapshot_id",
    "AllocationTarget",
]
