"""Repository layer - data access abstractions and implementations."""

from finboard.repositories.protocols import (
    EntryRepository,
    CategoryRepository,
    AssetRepository,
    SnapshotRepository,
)

__all__ = [
    "EntryRepository",
    "CategoryRepository",
    "AssetRepository",
    "SnapshotRepository",
]
