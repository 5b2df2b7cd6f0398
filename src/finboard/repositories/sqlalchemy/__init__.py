"""SQLAlchemy repository implementations."""

from finboard.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    init_db,
    reset_database,
    Base,
)
from finboard.repositories.sqlalchemy.entry_repo import SqlAlchemyEntryRepository
from finboard.repositories.sqlalchemy.category_repo import SqlAlchemyCategoryRepository
from finboard.repositories.sqlalchemy.asset_repo import SqlAlchemyAssetRepository
from finboard.repositories.sqlalchemy.snapshot_repo import SqlAlchemySnapshotRepository
from finboard.repositories.sqlalchemy.allocation_repo import SqlAlchemyAllocationRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyEntryRepository",
    "SqlAlchemyCategoryRepository",
    "SqlAlchemyAssetRepository",
    "SqlAlchemySnapshotRepository",
    "SqlAlchemyAllocationRepository",
]
