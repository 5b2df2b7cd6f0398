"""Monthly snapshot repository protocol."""

from typing import Protocol, Optional

from finboard.domain.models import MonthlySnapshot


class SnapshotRepository(Protocol):
    """Interface for monthly snapshot data access."""

    def upsert(self, snapshot: MonthlySnapshot) -> MonthlySnapshot:
        """Insert a snapshot or replace the existing one for the same month."""
        ...

    def get(self, user_id: str, year: int, month: int) -> Optional[MonthlySnapshot]:
        ...

    def list_by_user(self, user_id: str) -> list[MonthlySnapshot]:
        """List a user's snapshots in chronological order."""
        ...

    def delete(self, user_id: str, year: int, month: int) -> None:
        ...
