"""Expense aggregation over ledger entries.

All functions are pure: they take the full entry list for a period and return
freshly computed results. Expense amounts are stored negative, so expense
totals are accumulated from absolute values.
"""

from collections import defaultdict
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional, Union

from finboard.core.exceptions import ValidationError
from finboard.core.timezone import previous_month
from finboard.domain.models import EntryType, ENTRY_TYPE_LABELS, LedgerEntry
from finboard.domain.views import (
    CashflowSummary,
    ExpenseStats,
    GroupTotal,
    MonthlySummary,
    PeriodTotals,
    TypeTotal,
)

ZERO = Decimal("0")
CENT = Decimal("0.01")
ALL = "all"
OTHER_KEY = "other"
OTHER_LABEL = "Other"


class FilterLevel(str, Enum):
    """Levels of the cascading entry filter, outermost first."""

    TYPE = "type"
    CATEGORY = "category"
    SUBCATEGORY = "subcategory"


class GroupBy(str, Enum):
    """Grouping keys supported by group_entries."""

    TYPE = "type"
    CATEGORY = "category"
    SUBCATEGORY = "subcategory"
    MONTH = "month"
    YEAR = "year"


@dataclass(frozen=True)
class TimeWindow:
    """Reporting period: a year, optionally narrowed to one month. No year means all history."""

    year: Optional[int] = None
    month: Optional[int] = None

    def __post_init__(self) -> None:
        if self.month is not None:
            if self.year is None:
                raise ValidationError("A month filter requires a year")
            if not 1 <= self.month <= 12:
                raise ValidationError(f"Invalid month: {self.month}")

    def contains(self, value: date) -> bool:
        if self.year is not None and value.year != self.year:
            return False
        if self.month is not None and value.month != self.month:
            return False
        return True


@dataclass(frozen=True)
class EntryFilter:
    """
    Cascading type -> category -> subcategory filter. None at a level means "all".

    Only `set_level` should be used to change a level: it clears every level
    below the one being set, so a category from another type can never stay
    selected after the type changes.
    """

    entry_type: Optional[EntryType] = None
    category_id: Optional[str] = None
    subcategory_id: Optional[str] = None

    def set_level(
        self,
        level: Union[FilterLevel, str],
        value: Optional[Union[EntryType, str]],
    ) -> "EntryFilter":
        """Return a copy with `level` set to `value` and all dependent levels cleared."""
        level = FilterLevel(level)
        if value == ALL or value == "":
            value = None

        if level == FilterLevel.TYPE:
            return EntryFilter(entry_type=EntryType(value) if value is not None else None)
        if level == FilterLevel.CATEGORY:
            return EntryFilter(entry_type=self.entry_type, category_id=value)
        if value is not None and self.category_id is None:
            raise ValidationError("Select a category before selecting a subcategory")
        return replace(self, subcategory_id=value)

    def matches(self, entry: LedgerEntry) -> bool:
        if self.entry_type is not None and entry.entry_type != self.entry_type:
            return False
        if self.category_id is not None and entry.category_id != self.category_id:
            return False
        if self.subcategory_id is not None and entry.subcategory_id != self.subcategory_id:
            return False
        return True

    @classmethod
    def from_params(
        cls,
        entry_type: Optional[str] = None,
        category_id: Optional[str] = None,
        subcategory_id: Optional[str] = None,
    ) -> "EntryFilter":
        """Build a filter by applying the levels outermost first."""
        entry_filter = cls().set_level(FilterLevel.TYPE, entry_type)
        entry_filter = entry_filter.set_level(FilterLevel.CATEGORY, category_id)
        return entry_filter.set_level(FilterLevel.SUBCATEGORY, subcategory_id)


def filter_entries(
    entries: Iterable[LedgerEntry],
    window: Optional[TimeWindow] = None,
    entry_filter: Optional[EntryFilter] = None,
) -> list[LedgerEntry]:
    """Return entries inside the window that match every filter level."""
    window = window or TimeWindow()
    entry_filter = entry_filter or EntryFilter()
    return [e for e in entries if window.contains(e.entry_date) and entry_filter.matches(e)]


def total_income(entries: Iterable[LedgerEntry]) -> Decimal:
    return sum((e.amount for e in entries if e.is_income), ZERO)


def total_expenses(entries: Iterable[LedgerEntry]) -> Decimal:
    return sum((e.absolute_amount for e in entries if not e.is_income), ZERO)


def net_balance(entries: Iterable[LedgerEntry]) -> Decimal:
    entries = list(entries)
    return total_income(entries) - total_expenses(entries)


def income_expense_ratio(entries: Iterable[LedgerEntry]) -> Optional[Decimal]:
    """Income divided by expenses, or None when there are no expenses."""
    entries = list(entries)
    expenses = total_expenses(entries)
    if expenses == ZERO:
        return None
    return (total_income(entries) / expenses).quantize(CENT)


def summarize(
    entries: Iterable[LedgerEntry],
    window: Optional[TimeWindow] = None,
    entry_filter: Optional[EntryFilter] = None,
) -> CashflowSummary:
    """Filter entries and compute the headline totals."""
    filtered = filter_entries(entries, window, entry_filter)
    income = total_income(filtered)
    expenses = total_expenses(filtered)
    return CashflowSummary(
        entries=filtered,
        total_income=income,
        total_expenses=expenses,
        net_balance=income - expenses,
        income_expense_ratio=income_expense_ratio(filtered),
    )


def _group_key(entry: LedgerEntry, by: GroupBy) -> tuple[str, str]:
    if by == GroupBy.TYPE:
        return entry.entry_type.value, ENTRY_TYPE_LABELS[entry.entry_type]
    if by == GroupBy.CATEGORY:
        return entry.category_id, entry.category_name
    if by == GroupBy.SUBCATEGORY:
        if entry.subcategory_id is None:
            return f"{entry.category_id}/{OTHER_KEY}", OTHER_LABEL
        return (
            f"{entry.category_id}/{entry.subcategory_id}",
            entry.subcategory_name or OTHER_LABEL,
        )
    if by == GroupBy.MONTH:
        return f"{entry.year}-{entry.month:02d}", f"{entry.month:02d}/{entry.year % 100:02d}"
    return str(entry.year), str(entry.year)


def group_entries(
    entries: Iterable[LedgerEntry],
    by: Union[GroupBy, str],
) -> list[GroupTotal]:
    """
    Group entries and sum their absolute amounts.

    Type, category and subcategory groups are sorted by total descending;
    month and year groups chronologically. Entries without a subcategory
    land in a per-category "Other" bucket, so subcategory totals of a
    category always add up to the category total.
    """
    by = GroupBy(by)
    totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
    counts: dict[str, int] = defaultdict(int)
    labels: dict[str, str] = {}

    for entry in entries:
        key, label = _group_key(entry, by)
        totals[key] += entry.absolute_amount
        counts[key] += 1
        labels.setdefault(key, label)

    grand_total = sum(totals.values(), ZERO)
    groups = [
        GroupTotal(
            key=key,
            label=labels[key],
            total=total,
            count=counts[key],
            share=(total / grand_total * 100).quantize(CENT) if grand_total != ZERO else None,
        )
        for key, total in totals.items()
    ]

    if by in (GroupBy.MONTH, GroupBy.YEAR):
        groups.sort(key=lambda g: g.key)
    else:
        groups.sort(key=lambda g: (-g.total, g.label))
    return groups


def monthly_summary(entries: Iterable[LedgerEntry], year: int, month: int) -> MonthlySummary:
    """
    Totals of one month with by-type and by-category breakdowns.

    The category breakdown covers expenses only, so its shares describe
    where the month's spending went.
    """
    month_entries = filter_entries(entries, TimeWindow(year=year, month=month))

    by_type = {entry_type.value: TypeTotal() for entry_type in EntryType}
    for entry in month_entries:
        bucket = by_type[entry.entry_type.value]
        bucket.total += entry.absolute_amount
        bucket.count += 1

    income = total_income(month_entries)
    expenses = total_expenses(month_entries)
    return MonthlySummary(
        year=year,
        month=month,
        total_income=income,
        total_expenses=expenses,
        net_balance=income - expenses,
        by_type=by_type,
        by_category=group_entries(
            [e for e in month_entries if not e.is_income], GroupBy.CATEGORY
        ),
    )


def _percent_delta(current: Decimal, previous: Decimal, absolute_base: bool = False) -> Decimal:
    base = abs(previous) if absolute_base else previous
    if (absolute_base and base == ZERO) or (not absolute_base and base <= ZERO):
        return ZERO
    return ((current - previous) / base * 100).quantize(CENT)


def expense_stats(entries: Iterable[LedgerEntry], today: date) -> ExpenseStats:
    """
    Compare the month containing `today` with the month before.

    Income and expense deltas are 0 when the previous value is not positive;
    the net delta is relative to the absolute previous net and 0 when it is 0.
    """
    entries = list(entries)
    current = monthly_summary(entries, today.year, today.month)
    prev_year, prev_month = previous_month(today.year, today.month)
    previous = monthly_summary(entries, prev_year, prev_month)

    return ExpenseStats(
        current_month=PeriodTotals(
            income=current.total_income,
            expenses=current.total_expenses,
            net=current.net_balance,
        ),
        previous_month=PeriodTotals(
            income=previous.total_income,
            expenses=previous.total_expenses,
            net=previous.net_balance,
        ),
        delta=PeriodTotals(
            income=_percent_delta(current.total_income, previous.total_income),
            expenses=_percent_delta(current.total_expenses, previous.total_expenses),
            net=_percent_delta(current.net_balance, previous.net_balance, absolute_base=True),
        ),
    )
