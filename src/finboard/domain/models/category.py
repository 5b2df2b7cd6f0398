"""Expense category domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from finboard.domain.models.enums import EntryType


@dataclass
class SubCategory:
    """Named subdivision of a category."""

    subcategory_id: str
    name: str


@dataclass
class ExpenseCategory:
    """User-defined category bound to a single entry type."""

    category_id: str
    user_id: str
    name: str
    entry_type: EntryType
    color: Optional[str] = None
    subcategories: list[SubCategory] = field(default_factory=list)
    created_at: Optional[datetime] = field(default=None)
    updated_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.entry_type, str):
            self.entry_type = EntryType(self.entry_type)

    def find_subcategory(self, subcategory_id: str) -> Optional[SubCategory]:
        for sub in self.subcategories:
            if sub.subcategory_id == subcategory_id:
                return sub
        return None
