"""Ledger entry repository protocol."""

from datetime import date
from typing import Protocol, Optional

from finboard.domain.models import EntryType, LedgerEntry


class EntryRepository(Protocol):
    """Interface for ledger entry data access."""

    def create(self, entry: LedgerEntry) -> LedgerEntry:
        """Persist a new entry."""
        ...

    def create_many(self, entries: list[LedgerEntry]) -> list[LedgerEntry]:
        """Persist a batch of entries in one commit."""
        ...

    def get_by_id(self, entry_id: str) -> Optional[LedgerEntry]:
        """Retrieve entry by ID."""
        ...

    def update(self, entry: LedgerEntry) -> LedgerEntry:
        """Update an existing entry."""
        ...

    def delete(self, entry_id: str) -> None:
        """Delete a single entry (hard delete)."""
        ...

    def list_by_user(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[LedgerEntry]:
        """List a user's entries, ordered by date."""
        ...

    def list_by_recurring_parent(self, recurring_parent_id: str) -> list[LedgerEntry]:
        """List every entry of a recurring series."""
        ...

    def list_by_installment_parent(self, installment_parent_id: str) -> list[LedgerEntry]:
        """List every installment of a purchase, in installment order."""
        ...

    def count_by_category(self, category_id: str) -> int:
        """Count entries assigned to a category."""
        ...

    def rename_category(self, category_id: str, name: str) -> int:
        """Refresh the denormalized category name; returns updated rows."""
        ...

    def rename_subcategory(self, category_id: str, subcategory_id: str, name: str) -> int:
        """Refresh the denormalized subcategory name; returns updated rows."""
        ...

    def reassign_entries(
        self,
        category_id: str,
        target_category_id: str,
        target_category_name: str,
        target_entry_type: EntryType,
        subcategory_id: Optional[str] = None,
        target_subcategory_id: Optional[str] = None,
        target_subcategory_name: Optional[str] = None,
    ) -> int:
        """
        Move a category's entries to another category and subcategory.

        With `subcategory_id` only that subcategory's entries move. Returns
        the number of updated rows.
        """
        ...
