"""SQLAlchemy ORM model definitions."""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Enum as SqlEnum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from finboard.repositories.sqlalchemy.database import Base
from finboard.domain.models.enums import AssetClass, AssetType, EntryType


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CategoryORM(Base):
    """SQLAlchemy model for ExpenseCategory."""

    __tablename__ = "expense_categories"

    category_id = Column(String(36), primary_key=True)
    user_id = Column(String(128), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    entry_type = Column(SqlEnum(EntryType), nullable=False)
    color = Column(String(16), nullable=True)
    created_at = Column(DateTime, nullable=False, default=_utcnow)
    updated_at = Column(DateTime, nullable=True, onupdate=_utcnow)

    subcategories = relationship(
        "SubCategoryORM",
        back_populates="category",
        cascade="all, delete-orphan",
        order_by="SubCategoryORM.position",
    )


class SubCategoryORM(Base):
    """SQLAlchemy model for SubCategory."""

    __tablename__ = "expense_subcategories"

    subcategory_id = Column(String(36), primary_key=True)
    category_id = Column(
        String(36), ForeignKey("expense_categories.category_id"), nullable=False
    )
    name = Column(String(255), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    category = relationship("CategoryORM", back_populates="subcategories")


class LedgerEntryORM(Base):
    """SQLAlchemy model for LedgerEntry."""

    __tablename__ = "ledger_entries"

    entry_id = Column(String(36), primary_key=True)
    user_id = Column(String(128), nullable=False, index=True)
    entry_type = Column(SqlEnum(EntryType), nullable=False)
    category_id = Column(String(36), nullable=False, index=True)
    category_name = Column(String(255), nullable=False)
    subcategory_id = Column(String(36), nullable=True)
    subcategory_name = Column(String(255), nullable=True)
    amount = Column(Numeric(precision=18, scale=2), nullable=False)
    currency = Column(String(3), nullable=False, default="EUR")
    entry_date = Column(Date, nullable=False, index=True)
    notes = Column(Text, nullable=True)
    link = Column(Text, nullable=True)
    is_recurring = Column(Boolean, default=False)
    recurring_day = Column(Integer, nullable=True)
    recurring_parent_id = Column(String(64), nullable=True, index=True)
    is_installment = Column(Boolean, default=False)
    installment_parent_id = Column(String(64), nullable=True, index=True)
    installment_number = Column(Integer, nullable=True)
    installment_total = Column(Integer, nullable=True)
    installment_total_amount = Column(Numeric(precision=18, scale=2), nullable=True)
    created_at = Column(DateTime, nullable=False, default=_utcnow)
    updated_at = Column(DateTime, nullable=True, onupdate=_utcnow)


class AssetORM(Base):
    """SQLAlchemy model for Asset."""

    __tablename__ = "assets"

    asset_id = Column(String(36), primary_key=True)
    user_id = Column(String(128), nullable=False, index=True)
    ticker = Column(String(32), nullable=False)
    name = Column(String(255), nullable=False)
    asset_type = Column(SqlEnum(AssetType), nullable=False)
    asset_class = Column(SqlEnum(AssetClass), nullable=False)
    sub_category = Column(String(255), nullable=True)
    currency = Column(String(3), nullable=False, default="EUR")
    quantity = Column(Numeric(precision=18, scale=8), nullable=False)
    average_cost = Column(Numeric(precision=18, scale=6), nullable=True)
    tax_rate = Column(Numeric(precision=6, scale=3), nullable=True)
    current_price = Column(Numeric(precision=18, scale=6), default=Decimal("0"))
    auto_update_price = Column(Boolean, default=True)
    last_price_update = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=_utcnow)
    updated_at = Column(DateTime, nullable=True, onupdate=_utcnow)

    composition = relationship(
        "AssetCompositionORM",
        back_populates="asset",
        cascade="all, delete-orphan",
        order_by="AssetCompositionORM.id",
    )


class AssetCompositionORM(Base):
    """SQLAlchemy model for AssetComposition."""

    __tablename__ = "asset_compositions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    asset_id = Column(String(36), ForeignKey("assets.asset_id"), nullable=False)
    asset_class = Column(SqlEnum(AssetClass), nullable=False)
    percentage = Column(Numeric(precision=6, scale=3), nullable=False)
    sub_category = Column(String(255), nullable=True)

    asset = relationship("AssetORM", back_populates="composition")


class SnapshotORM(Base):
    """SQLAlchemy model for MonthlySnapshot."""

    __tablename__ = "monthly_snapshots"

    snapshot_id = Column(String(160), primary_key=True)
    user_id = Column(String(128), nullable=False, index=True)
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    total_net_worth = Column(Numeric(precision=18, scale=2), default=Decimal("0"))
    note = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=_utcnow)

    holdings = relationship(
        "SnapshotAssetORM",
        back_populates="snapshot",
        cascade="all, delete-orphan",
        order_by="SnapshotAssetORM.id",
    )


class SnapshotAssetORM(Base):
    """SQLAlchemy model for AssetSnapshot."""

    __tablename__ = "snapshot_assets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    snapshot_id = Column(
        String(160), ForeignKey("monthly_snapshots.snapshot_id"), nullable=False
    )
    asset_id = Column(String(36), nullable=False)
    ticker = Column(String(32), nullable=False)
    name = Column(String(255), nullable=False)
    quantity = Column(Numeric(precision=18, scale=8), nullable=False)
    price = Column(Numeric(precision=18, scale=6), nullable=True)
    total_value = Column(Numeric(precision=18, scale=2), default=Decimal("0"))
    is_cash_equivalent = Column(Boolean, nullable=True)

    snapshot = relationship("SnapshotORM", back_populates="holdings")


class AllocationTargetORM(Base):
    """SQLAlchemy model for AllocationTarget."""

    __tablename__ = "allocation_targets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(128), nullable=False, index=True)
    asset_class = Column(SqlEnum(AssetClass), nullable=False)
    target_percentage = Column(Numeric(precision=6, scale=3), nullable=False)
    updated_at = Column(DateTime, nullable=False, default=_utcnow)

    sub_targets = relationship(
        "AllocationSubTargetORM",
        back_populates="target",
        cascade="all, delete-orphan",
        order_by="AllocationSubTargetORM.id",
    )


class AllocationSubTargetORM(Base):
    """Sub-category share within an allocation target's asset class."""

    __tablename__ = "allocation_sub_targets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    target_id = Column(Integer, ForeignKey("allocation_targets.id"), nullable=False)
    sub_category = Column(String(255), nullable=False)
    percentage = Column(Numeric(precision=6, scale=3), nullable=False)

    target = relationship("AllocationTargetORM", back_populates="sub_targets")
