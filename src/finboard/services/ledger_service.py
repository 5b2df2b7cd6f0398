"""Ledger service for income/expense entries and their categories."""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, ROUND_DOWN
from typing import Optional

from finboard.config.settings import get_settings
from finboard.core.exceptions import CategoryInUseError, NotFoundError, ValidationError
from finboard.core.timezone import add_months, now_local
from finboard.domain.models import (
    DeleteScope,
    EntryType,
    ExpenseCategory,
    InstallmentMode,
    LedgerEntry,
    SubCategory,
)
from finboard.repositories.protocols import CategoryRepository, EntryRepository
from finboard.services.expense_aggregator import EntryFilter, TimeWindow, filter_entries

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
ZERO = Decimal("0")


@dataclass
class EntryCreate:
    """Input data for creating an entry (or a recurring/installment series)."""

    user_id: str
    entry_type: EntryType
    category_id: str
    amount: Decimal
    entry_date: date
    subcategory_id: Optional[str] = None
    currency: Optional[str] = None
    notes: Optional[str] = None
    link: Optional[str] = None
    # Recurring series: one entry per month on recurring_day
    is_recurring: bool = False
    recurring_day: Optional[int] = None
    recurring_months: Optional[int] = None
    # Installment series: takes priority over recurring
    is_installment: bool = False
    installment_count: Optional[int] = None
    installment_mode: InstallmentMode = InstallmentMode.AUTO
    installment_total_amount: Optional[Decimal] = None
    installment_amounts: Optional[list[Decimal]] = None
    installment_start_date: Optional[date] = None

    def __post_init__(self) -> None:
        self.entry_type = EntryType(self.entry_type)
        self.installment_mode = InstallmentMode(self.installment_mode)


@dataclass
class EntryUpdate:
    """Partial update data for editing a single entry."""

    entry_type: Optional[EntryType] = None
    category_id: Optional[str] = None
    # "" removes the subcategory
    subcategory_id: Optional[str] = None
    amount: Optional[Decimal] = None
    entry_date: Optional[date] = None
    currency: Optional[str] = None
    notes: Optional[str] = None
    link: Optional[str] = None


@dataclass
class SubCategoryInput:
    """Subcategory in a category write; no id means a new subcategory."""

    name: str
    subcategory_id: Optional[str] = None


@dataclass
class CategoryUpdate:
    """Partial update data for a category. `subcategories` replaces the list."""

    name: Optional[str] = None
    color: Optional[str] = None
    subcategories: Optional[list[SubCategoryInput]] = field(default=None)


def signed_amount(entry_type: EntryType, amount: Decimal) -> Decimal:
    """Income is stored positive, every expense type negative."""
    return abs(amount) if EntryType(entry_type).is_income else -abs(amount)


def split_installments(total: Decimal, count: int) -> list[Decimal]:
    """
    Split a total into `count` installments.

    Each installment is the per-installment share rounded down to the cent;
    the last one also carries the rounding remainder, so the parts always
    add up to the total. Every installment must be at least one cent.
    """
    if abs(total) < CENT * count:
        raise ValidationError(
            f"Total {abs(total)} is too small for {count} installments"
        )
    base = (abs(total) / count).quantize(CENT, rounding=ROUND_DOWN)
    amounts = [base] * (count - 1)
    amounts.append(abs(total) - base * (count - 1))
    return amounts


def window_bounds(window: TimeWindow) -> tuple[Optional[date], Optional[date]]:
    """First and last date covered by a time window (None for all history)."""
    if window.year is None:
        return None, None
    if window.month is None:
        return date(window.year, 1, 1), date(window.year, 12, 31)
    first = date(window.year, window.month, 1)
    return first, add_months(first, 0, day=31)


class LedgerService:
    """
    Service for managing the income/expense ledger.

    Handles category CRUD, entry creation including recurring and
    installment series, edits, and scoped deletion. Entries carry
    denormalized category/subcategory names that are refreshed here
    whenever a category is renamed.
    """

    def __init__(
        self,
        entry_repo: EntryRepository,
        category_repo: CategoryRepository,
    ):
        self._entry_repo = entry_repo
        self._category_repo = category_repo

    # Categories

    def create_category(
        self,
        user_id: str,
        name: str,
        entry_type: EntryType,
        color: Optional[str] = None,
        subcategories: Optional[list[str]] = None,
    ) -> ExpenseCategory:
        """Create a category with optional subcategory names."""
        name = (name or "").strip()
        if not name:
            raise ValidationError("Category name is required")
        entry_type = EntryType(entry_type)
        self._ensure_unique_name(user_id, entry_type, name)

        category = ExpenseCategory(
            category_id=str(uuid.uuid4()),
            user_id=user_id,
            name=name,
            entry_type=entry_type,
            color=color,
            subcategories=[
                SubCategory(subcategory_id=str(uuid.uuid4()), name=sub_name.strip())
                for sub_name in (subcategories or [])
                if sub_name and sub_name.strip()
            ],
            created_at=now_local(),
        )
        return self._category_repo.create(category)

    def get_category(self, category_id: str) -> ExpenseCategory:
        category = self._category_repo.get_by_id(category_id)
        if not category:
            raise NotFoundError("Category", category_id)
        return category

    def list_categories(
        self,
        user_id: str,
        entry_type: Optional[EntryType] = None,
    ) -> list[ExpenseCategory]:
        return self._category_repo.list_by_user(user_id, entry_type)

    def update_category(self, category_id: str, patch: CategoryUpdate) -> ExpenseCategory:
        """
        Update a category.

        A new category name, and any renamed subcategory, is propagated to
        the denormalized names stored on the category's entries.
        """
        category = self.get_category(category_id)
        old_name = category.name
        old_subcategories = {s.subcategory_id: s.name for s in category.subcategories}

        if patch.name is not None:
            name = patch.name.strip()
            if not name:
                raise ValidationError("Category name is required")
            if name != old_name:
                self._ensure_unique_name(
                    category.user_id, category.entry_type, name, exclude_id=category_id
                )
            category.name = name
        if patch.color is not None:
            category.color = patch.color or None
        if patch.subcategories is not None:
            category.subcategories = [
                SubCategory(
                    subcategory_id=sub.subcategory_id or str(uuid.uuid4()),
                    name=sub.name.strip(),
                )
                for sub in patch.subcategories
                if sub.name and sub.name.strip()
            ]

        updated = self._category_repo.update(category)

        if updated.name != old_name:
            count = self._entry_repo.rename_category(category_id, updated.name)
            logger.info("Renamed category %s on %d entries", category_id, count)
        for sub in updated.subcategories:
            previous = old_subcategories.get(sub.subcategory_id)
            if previous is not None and previous != sub.name:
                self._entry_repo.rename_subcategory(category_id, sub.subcategory_id, sub.name)

        return updated

    def reassign_entries(
        self,
        category_id: str,
        target_category_id: str,
        subcategory_id: Optional[str] = None,
        target_subcategory_id: Optional[str] = None,
    ) -> int:
        """
        Move the entries of a category, or of one of its subcategories, to
        another category and optional subcategory.

        Moves between expense types retype the entries; moves between income
        and expense categories are refused since amounts would change sign.
        Without a target subcategory the moved entries have none. Returns the
        number of moved entries.
        """
        source = self.get_category(category_id)
        target = self.get_category(target_category_id)
        if target.user_id != source.user_id:
            raise NotFoundError("Category", target_category_id)
        if target.entry_type.is_income != source.entry_type.is_income:
            raise ValidationError("Entries cannot move between income and expense categories")
        if subcategory_id is not None and source.find_subcategory(subcategory_id) is None:
            raise ValidationError(
                f"Subcategory {subcategory_id} does not belong to category '{source.name}'"
            )

        target_subcategory = self._resolve_subcategory(target, target_subcategory_id)
        same_bucket = target.category_id == source.category_id and (
            subcategory_id is None or subcategory_id == target_subcategory_id
        )
        if same_bucket:
            raise ValidationError("Choose a different destination for the entries")

        moved = self._entry_repo.reassign_entries(
            category_id,
            target.category_id,
            target.name,
            target.entry_type,
            subcategory_id=subcategory_id,
            target_subcategory_id=target_subcategory.subcategory_id if target_subcategory else None,
            target_subcategory_name=target_subcategory.name if target_subcategory else None,
        )
        logger.info("Moved %d entries from category %s to %s", moved, category_id, target.category_id)
        return moved

    def delete_category(
        self,
        category_id: str,
        reassign_to: Optional[str] = None,
        reassign_subcategory_id: Optional[str] = None,
    ) -> int:
        """
        Delete a category.

        With `reassign_to` its entries are first moved to that category (and
        optional subcategory); otherwise deletion is refused while entries
        still reference it. Returns the number of moved entries.
        """
        self.get_category(category_id)
        moved = 0
        if reassign_to:
            moved = self.reassign_entries(
                category_id, reassign_to, target_subcategory_id=reassign_subcategory_id
            )
        count = self._entry_repo.count_by_category(category_id)
        if count:
            raise CategoryInUseError(category_id, count)
        self._category_repo.delete(category_id)
        return moved

    # Entries

    def create_entry(self, data: EntryCreate) -> list[LedgerEntry]:
        """
        Create an entry, or the whole series for recurring/installment input.

        Returns every created entry in date order.
        """
        category = self.get_category(data.category_id)
        self._validate_category(category, data.user_id, data.entry_type)
        subcategory = self._resolve_subcategory(category, data.subcategory_id)

        template = LedgerEntry(
            entry_id="",
            user_id=data.user_id,
            entry_type=data.entry_type,
            category_id=category.category_id,
            category_name=category.name,
            subcategory_id=subcategory.subcategory_id if subcategory else None,
            subcategory_name=subcategory.name if subcategory else None,
            amount=ZERO,
            entry_date=data.entry_date,
            currency=data.currency or get_settings().default_currency,
            notes=data.notes,
            link=data.link,
        )

        if data.is_installment:
            entries = self._build_installments(template, data)
        elif data.is_recurring:
            entries = self._build_recurring(template, data)
        else:
            entries = [self._build_single(template, data)]

        created = self._entry_repo.create_many(entries)
        logger.info("Created %d ledger entries for user %s", len(created), data.user_id)
        return created

    def get_entry(self, entry_id: str) -> LedgerEntry:
        entry = self._entry_repo.get_by_id(entry_id)
        if not entry:
            raise NotFoundError("Entry", entry_id)
        return entry

    def list_entries(
        self,
        user_id: str,
        window: Optional[TimeWindow] = None,
        entry_filter: Optional[EntryFilter] = None,
    ) -> list[LedgerEntry]:
        """List a user's entries inside the window that match the filter."""
        window = window or TimeWindow()
        start_date, end_date = window_bounds(window)
        entries = self._entry_repo.list_by_user(user_id, start_date, end_date)
        return filter_entries(entries, window, entry_filter)

    def update_entry(self, entry_id: str, patch: EntryUpdate) -> LedgerEntry:
        """Edit one entry; the sign is re-normalized for the (new) entry type."""
        entry = self.get_entry(entry_id)

        if patch.entry_type is not None:
            entry.entry_type = EntryType(patch.entry_type)
        if patch.category_id is not None and patch.category_id != entry.category_id:
            entry.category_id = patch.category_id
            entry.subcategory_id = None
            entry.subcategory_name = None
        if patch.subcategory_id is not None:
            entry.subcategory_id = patch.subcategory_id or None

        category = self.get_category(entry.category_id)
        self._validate_category(category, entry.user_id, entry.entry_type)
        subcategory = self._resolve_subcategory(category, entry.subcategory_id)
        entry.category_name = category.name
        entry.subcategory_name = subcategory.name if subcategory else None

        if patch.amount is not None:
            self._validate_amount(patch.amount)
            entry.amount = patch.amount
        entry.amount = signed_amount(entry.entry_type, entry.amount)

        if patch.entry_date is not None:
            entry.entry_date = patch.entry_date
        if patch.currency is not None:
            entry.currency = patch.currency
        if patch.notes is not None:
            entry.notes = patch.notes or None
        if patch.link is not None:
            entry.link = patch.link or None

        return self._entry_repo.update(entry)

    def delete_entry(
        self,
        entry_id: str,
        scope: DeleteScope = DeleteScope.SINGLE,
    ) -> int:
        """
        Delete an entry, its recurring series or its installment plan.

        Series deletes are issued one entry at a time; a failure part-way
        leaves the entries deleted so far removed. Returns the number of
        deleted entries.
        """
        entry = self.get_entry(entry_id)
        scope = DeleteScope(scope)

        if scope == DeleteScope.SINGLE:
            targets = [entry]
        elif scope == DeleteScope.SERIES:
            if not entry.recurring_parent_id:
                raise ValidationError("Entry is not part of a recurring series")
            targets = self._entry_repo.list_by_recurring_parent(entry.recurring_parent_id)
        else:
            if not entry.installment_parent_id:
                raise ValidationError("Entry is not part of an installment plan")
            targets = self._entry_repo.list_by_installment_parent(entry.installment_parent_id)

        for target in targets:
            self._entry_repo.delete(target.entry_id)
        logger.info("Deleted %d entries (scope=%s) starting from %s", len(targets), scope.value, entry_id)
        return len(targets)

    # Series builders

    def _build_single(self, template: LedgerEntry, data: EntryCreate) -> LedgerEntry:
        self._validate_amount(data.amount)
        return self._clone(template, amount=signed_amount(data.entry_type, data.amount))

    def _build_recurring(self, template: LedgerEntry, data: EntryCreate) -> list[LedgerEntry]:
        self._validate_amount(data.amount)
        months = data.recurring_months or 0
        if months < 1:
            raise ValidationError("Recurring entries require at least one month")
        day = data.recurring_day or data.entry_date.day
        if not 1 <= day <= 31:
            raise ValidationError(f"Invalid recurring day: {day}")

        parent_id = f"recurring-{uuid.uuid4()}"
        amount = signed_amount(data.entry_type, data.amount)
        return [
            self._clone(
                template,
                amount=amount,
                entry_date=add_months(data.entry_date, i, day=day),
                is_recurring=True,
                recurring_day=day,
                recurring_parent_id=parent_id,
            )
            for i in range(months)
        ]

    def _build_installments(self, template: LedgerEntry, data: EntryCreate) -> list[LedgerEntry]:
        count = data.installment_count or 0
        if count < 2:
            raise ValidationError("An installment plan requires at least 2 installments")

        if data.installment_mode == InstallmentMode.AUTO:
            if data.installment_total_amount is None:
                raise ValidationError("Automatic installments require a total amount")
            self._validate_amount(data.installment_total_amount)
            amounts = split_installments(data.installment_total_amount, count)
        else:
            amounts = list(data.installment_amounts or [])
            if len(amounts) != count:
                raise ValidationError(
                    f"Expected {count} installment amounts, got {len(amounts)}"
                )
            for amount in amounts:
                self._validate_amount(amount)

        signed = [signed_amount(data.entry_type, a) for a in amounts]
        total = signed_amount(data.entry_type, sum((abs(a) for a in amounts), ZERO))
        start = data.installment_start_date or data.entry_date
        parent_id = f"installment-{uuid.uuid4()}"

        entries = []
        for index, amount in enumerate(signed):
            label = f"Installment {index + 1}/{count}"
            entries.append(
                self._clone(
                    template,
                    amount=amount,
                    entry_date=add_months(start, index),
                    notes=f"{data.notes} ({label})" if data.notes else label,
                    is_installment=True,
                    installment_parent_id=parent_id,
                    installment_number=index + 1,
                    installment_total=count,
                    installment_total_amount=total,
                )
            )
        return entries

    # Helpers

    @staticmethod
    def _clone(template: LedgerEntry, **changes) -> LedgerEntry:
        values = dict(template.__dict__)
        values.update(changes)
        values["entry_id"] = str(uuid.uuid4())
        values["created_at"] = now_local()
        return LedgerEntry(**values)

    @staticmethod
    def _validate_amount(amount: Decimal) -> None:
        if amount is None or amount == ZERO:
            raise ValidationError("Amount must be non-zero")

    @staticmethod
    def _validate_category(category: ExpenseCategory, user_id: str, entry_type: EntryType) -> None:
        if category.user_id != user_id:
            raise NotFoundError("Category", category.category_id)
        if category.entry_type != entry_type:
            raise ValidationError(
                f"Category '{category.name}' belongs to {category.entry_type.value} entries, "
                f"not {EntryType(entry_type).value}"
            )

    @staticmethod
    def _resolve_subcategory(
        category: ExpenseCategory,
        subcategory_id: Optional[str],
    ) -> Optional[SubCategory]:
        if not subcategory_id:
            return None
        subcategory = category.find_subcategory(subcategory_id)
        if subcategory is None:
            raise ValidationError(
                f"Subcategory {subcategory_id} does not belong to category '{category.name}'"
            )
        return subcategory

    def _ensure_unique_name(
        self,
        user_id: str,
        entry_type: EntryType,
        name: str,
        exclude_id: Optional[str] = None,
    ) -> None:
        for existing in self._category_repo.list_by_user(user_id, entry_type):
            if existing.category_id == exclude_id:
                continue
            if existing.name.casefold() == name.casefold():
                raise ValidationError(f"Category '{name}' already exists")
