"""SQLAlchemy implementation of EntryRepository."""

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import and_
from sqlalchemy.orm import Session

from finboard.domain.models import EntryType, LedgerEntry
from finboard.repositories.sqlalchemy.orm_models import LedgerEntryORM

_COPIED_FIELDS = (
    "user_id",
    "entry_type",
    "category_id",
    "category_name",
    "subcategory_id",
    "subcategory_name",
    "amount",
    "currency",
    "entry_date",
    "notes",
    "link",
    "is_recurring",
    "recurring_day",
    "recurring_parent_id",
    "is_installment",
    "installment_parent_id",
    "installment_number",
    "installment_total",
    "installment_total_amount",
)


class SqlAlchemyEntryRepository:
    """SQLAlchemy-backed ledger entry repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, entry: LedgerEntry) -> LedgerEntry:
        """Persist a new entry."""
        orm_entry = self._to_orm(entry)
        self._db.add(orm_entry)
        self._db.commit()
        self._db.refresh(orm_entry)
        return self._to_domain(orm_entry)

    def create_many(self, entries: list[LedgerEntry]) -> list[LedgerEntry]:
        """Persist a batch of entries in one commit."""
        orm_entries = [self._to_orm(e) for e in entries]
        self._db.add_all(orm_entries)
        self._db.commit()
        for orm_entry in orm_entries:
            self._db.refresh(orm_entry)
        return [self._to_domain(e) for e in orm_entries]

    def get_by_id(self, entry_id: str) -> Optional[LedgerEntry]:
        """Retrieve entry by ID."""
        orm_entry = self._db.query(LedgerEntryORM).filter(
            LedgerEntryORM.entry_id == entry_id
        ).first()
        return self._to_domain(orm_entry) if orm_entry else None

    def update(self, entry: LedgerEntry) -> LedgerEntry:
        """Update an existing entry."""
        orm_entry = self._db.query(LedgerEntryORM).filter(
            LedgerEntryORM.entry_id == entry.entry_id
        ).first()
        if not orm_entry:
            raise ValueError(f"Entry not found: {entry.entry_id}")

        for name in _COPIED_FIELDS:
            setattr(orm_entry, name, getattr(entry, name))

        self._db.commit()
        self._db.refresh(orm_entry)
        return self._to_domain(orm_entry)

    def delete(self, entry_id: str) -> None:
        """Delete a single entry."""
        self._db.query(LedgerEntryORM).filter(
            LedgerEntryORM.entry_id == entry_id
        ).delete()
        self._db.commit()

    def list_by_user(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[LedgerEntry]:
        """List a user's entries, ordered by date."""
        conditions = [LedgerEntryORM.user_id == user_id]
        if start_date:
            conditions.append(LedgerEntryORM.entry_date >= start_date)
        if end_date:
            conditions.append(LedgerEntryORM.entry_date <= end_date)

        query = (
            self._db.query(LedgerEntryORM)
            .filter(and_(*conditions))
            .order_by(LedgerEntryORM.entry_date, LedgerEntryORM.created_at)
        )
        return [self._to_domain(e) for e in query.all()]

    def list_by_recurring_parent(self, recurring_parent_id: str) -> list[LedgerEntry]:
        """List every entry of a recurring series."""
        query = (
            self._db.query(LedgerEntryORM)
            .filter(LedgerEntryORM.recurring_parent_id == recurring_parent_id)
            .order_by(LedgerEntryORM.entry_date)
        )
        return [self._to_domain(e) for e in query.all()]

    def list_by_installment_parent(self, installment_parent_id: str) -> list[LedgerEntry]:
        """List every installment of a purchase, in installment order."""
        query = (
            self._db.query(LedgerEntryORM)
            .filter(LedgerEntryORM.installment_parent_id == installment_parent_id)
            .order_by(LedgerEntryORM.installment_number)
        )
        return [self._to_domain(e) for e in query.all()]

    def count_by_category(self, category_id: str) -> int:
        """Count entries assigned to a category."""
        return self._db.query(LedgerEntryORM).filter(
            LedgerEntryORM.category_id == category_id
        ).count()

    def rename_category(self, category_id: str, name: str) -> int:
        """Refresh the denormalized category name; returns updated rows."""
        updated = self._db.query(LedgerEntryORM).filter(
            LedgerEntryORM.category_id == category_id
        ).update({LedgerEntryORM.category_name: name}, synchronize_session=False)
        self._db.commit()
        return updated

    def rename_subcategory(self, category_id: str, subcategory_id: str, name: str) -> int:
        """Refresh the denormalized subcategory name; returns updated rows."""
        updated = self._db.query(LedgerEntryORM).filter(
            LedgerEntryORM.category_id == category_id,
            LedgerEntryORM.subcategory_id == subcategory_id,
        ).update({LedgerEntryORM.subcategory_name: name}, synchronize_session=False)
        self._db.commit()
        return updated

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
        """Move a category's entries, or one subcategory's, elsewhere; returns updated rows."""
        conditions = [LedgerEntryORM.category_id == category_id]
        if subcategory_id is not None:
            conditions.append(LedgerEntryORM.subcategory_id == subcategory_id)
        updated = self._db.query(LedgerEntryORM).filter(and_(*conditions)).update(
            {
                LedgerEntryORM.category_id: target_category_id,
                LedgerEntryORM.category_name: target_category_name,
                LedgerEntryORM.entry_type: EntryType(target_entry_type),
                LedgerEntryORM.subcategory_id: target_subcategory_id,
                LedgerEntryORM.subcategory_name: target_subcategory_name,
            },
            synchronize_session=False,
        )
        self._db.commit()
        return updated

    @staticmethod
    def _to_orm(entry: LedgerEntry) -> LedgerEntryORM:
        """Convert domain model to ORM model."""
        orm_entry = LedgerEntryORM(entry_id=entry.entry_id)
        if entry.created_at is not None:
            orm_entry.created_at = entry.created_at
        for name in _COPIED_FIELDS:
            setattr(orm_entry, name, getattr(entry, name))
        return orm_entry

    @staticmethod
    def _to_domain(orm: LedgerEntryORM) -> LedgerEntry:
        """Convert ORM model to domain model."""
        return LedgerEntry(
            entry_id=orm.entry_id,
            user_id=orm.user_id,
            entry_type=orm.entry_type,
            category_id=orm.category_id,
            category_name=orm.category_name,
            subcategory_id=orm.subcategory_id,
            subcategory_name=orm.subcategory_name,
            amount=Decimal(str(orm.amount)),
            currency=orm.currency,
            entry_date=orm.entry_date,
            notes=orm.notes,
            link=orm.link,
            is_recurring=bool(orm.is_recurring),
            recurring_day=orm.recurring_day,
            recurring_parent_id=orm.recurring_parent_id,
            is_installment=bool(orm.is_installment),
            installment_parent_id=orm.installment_parent_id,
            installment_number=orm.installment_number,
            installment_total=orm.installment_total,
            installment_total_amount=(
                Decimal(str(orm.installment_total_amount))
                if orm.installment_total_amount is not None
                else None
            ),
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )
