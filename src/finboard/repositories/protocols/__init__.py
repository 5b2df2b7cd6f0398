"""Repository protocol definitions (interfaces)."""

from finboard.repositories.protocols.entry_repo import EntryRepository
from finboard.repositories.protocols.category_repo import CategoryRepository
from finboard.repositories.protocols.asset_repo import AssetRepository
from finboard.repositories.protocols.snapshot_repo import SnapshotRepository
from finboard.repositories.protocols.allocation_repo import AllocationRepository

__all__ = [
    "EntryRepository",
    "CategoryRepository",
    "AssetRepository",
    "SnapshotRepository",
    "AllocationRepository",
]
