"""Expense category repository protocol."""

from typing import Protocol, Optional

from finboard.domain.models import EntryType, ExpenseCategory


class CategoryRepository(Protocol):
    """Interface for expense category data access."""

    def create(self, category: ExpenseCategory) -> ExpenseCategory:
        ...

    def get_by_id(self, category_id: str) -> Optional[ExpenseCategory]:
        ...

    def list_by_user(
        self,
        user_id: str,
        entry_type: Optional[EntryType] = None,
    ) -> list[ExpenseCategory]:
        """List a user's categories, optionally restricted to one entry type."""
        ...

    def update(self, category: ExpenseCategory) -> ExpenseCategory:
        """Update a category, replacing its subcategory list."""
        ...

    def delete(self, category_id: str) -> None:
        ...
