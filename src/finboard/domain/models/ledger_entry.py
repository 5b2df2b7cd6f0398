"""LedgerEntry domain model."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from finboard.domain.models.enums import EntryType


@dataclass
class LedgerEntry:
    """
    One income or expense record.

    Sign convention: amount is positive for income and negative for
    fixed/variable/debt expenses. Category and subcategory names are
    denormalized copies of the owning ExpenseCategory.

    Recurring series share `recurring_parent_id`; installment series share
    `installment_parent_id` and are numbered 1..installment_total.
    """

    entry_id: str
    user_id: str
    entry_type: EntryType
    category_id: str
    category_name: str
    amount: Decimal
    entry_date: date
    currency: str = "EUR"
    subcategory_id: Optional[str] = None
    subcategory_name: Optional[str] = None
    notes: Optional[str] = None
    link: Optional[str] = None
    is_recurring: bool = False
    recurring_day: Optional[int] = None
    recurring_parent_id: Optional[str] = None
    is_installment: bool = False
    installment_parent_id: Optional[str] = None
    installment_number: Optional[int] = None
    installment_total: Optional[int] = None
    installment_total_amount: Optional[Decimal] = None
    created_at: Optional[datetime] = field(default=None)
    updated_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.entry_type, str):
            self.entry_type = EntryType(self.entry_type)

    @property
    def is_income(self) -> bool:
        return self.entry_type == EntryType.INCOME

    @property
    def absolute_amount(self) -> Decimal:
        return abs(self.amount)

    @property
    def year(self) -> int:
        return self.entry_date.year

    @property
    def month(self) -> int:
        return self.entry_date.month
