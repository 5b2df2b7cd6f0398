"""Domain layer - pure business models with no external dependencies."""

from finboard.domain.models import (
    EntryType,
    AssetType,
    AssetClass,
    LedgerEntry,
    ExpenseCategory,
    SubCategory,
    Asset,
    AssetComposition,
    AssetSnapshot,
    MonthlySnapshot,
)

__all__ = [
    "EntryType",
    "AssetType",
    "AssetClass",
    "LedgerEntry",
    "ExpenseCategory",
    "SubCategory",
    "Asset",
    "AssetComposition",
    "AssetSnapshot",
    "MonthlySnapshot",
]
