"""Pydantic schemas for ledger entry endpoints."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from finboard.domain.models.enums import DeleteScope, EntryType, InstallmentMode


class EntryCreateRequest(BaseModel):
    """Request schema for creating an entry or a recurring/installment series."""

    user_id: str = Field(..., min_length=1)
    entry_type: EntryType
    category_id: str
    subcategory_id: Optional[str] = None
    amount: Decimal = Field(
        default=Decimal("0"),
        description="Amount; the sign is normalized from the entry type",
    )
    entry_date: date
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    notes: Optional[str] = Field(default=None, max_length=1000)
    link: Optional[str] = Field(default=None, max_length=2000)

    is_recurring: bool = False
    recurring_day: Optional[int] = Field(default=None, ge=1, le=31)
    recurring_months: Optional[int] = Field(default=None, ge=1, le=600)

    is_installment: bool = False
    installment_count: Optional[int] = Field(default=None, ge=2, le=360)
    installment_mode: InstallmentMode = InstallmentMode.AUTO
    installment_total_amount: Optional[Decimal] = None
    installment_amounts: Optional[list[Decimal]] = None
    installment_start_date: Optional[date] = None


class EntryUpdateRequest(BaseModel):
    """Request schema for updating an entry (partial update)."""

    entry_type: Optional[EntryType] = None
    category_id: Optional[str] = None
    subcategory_id: Optional[str] = Field(
        default=None,
        description='Empty string removes the subcategory',
    )
    amount: Optional[Decimal] = None
    entry_date: Optional[date] = None
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    notes: Optional[str] = Field(default=None, max_length=1000)
    link: Optional[str] = Field(default=None, max_length=2000)


class EntryResponse(BaseModel):
    """Response schema for a single entry."""

    model_config = {"from_attributes": True}

    entry_id: str
    user_id: str
    entry_type: EntryType
    category_id: str
    category_name: str
    subcategory_id: Optional[str] = None
    subcategory_name: Optional[str] = None
    amount: Decimal
    currency: str
    entry_date: date
    notes: Optional[str] = None
    link: Optional[str] = None
    is_recurring: bool
    recurring_day: Optional[int] = None
    recurring_parent_id: Optional[str] = None
    is_installment: bool
    installment_parent_id: Optional[str] = None
    installment_number: Optional[int] = None
    installment_total: Optional[int] = None
    installment_total_amount: Optional[Decimal] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EntryListResponse(BaseModel):
    """Response schema for listing entries."""

    entries: list[EntryResponse]
    count: int


class EntryDeleteResponse(BaseModel):
    """Response schema for a (possibly series-wide) delete."""

    scope: DeleteScope
    deleted: int
