"""Pydantic schemas for monthly snapshot endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class SnapshotCreateRequest(BaseModel):
    """Snapshot the user's current assets; year/month default to today."""

    user_id: str = Field(..., min_length=1)
    year: Optional[int] = Field(default=None, ge=1900, le=2200)
    month: Optional[int] = Field(default=None, ge=1, le=12)
    note: Optional[str] = Field(default=None, max_length=1000)
    refresh_prices: bool = Field(
        default=False,
        description="Refresh quoted asset prices before taking the snapshot",
    )


class AssetSnapshotResponse(BaseModel):
    model_config = {"from_attributes": True}

    asset_id: str
    ticker: str
    name: str
    quantity: Decimal
    price: Optional[Decimal] = None
    total_value: Decimal
    is_cash_equivalent: Optional[bool] = None


class NetWorthChangeResponse(BaseModel):
    """Net worth change against the previous snapshot."""

    model_config = {"from_attributes": True}

    value: Decimal
    percentage: Decimal


class SnapshotResponse(BaseModel):
    """Response schema for a single snapshot."""

    model_config = {"from_attributes": True}

    snapshot_id: str
    user_id: str
    year: int
    month: int
    total_net_worth: Decimal
    by_asset: list[AssetSnapshotResponse]
    note: Optional[str] = None
    created_at: Optional[datetime] = None
    monthly_change: Optional[NetWorthChangeResponse] = None


class SnapshotListResponse(BaseModel):
    """Response schema for listing snapshots."""

    snapshots: list[SnapshotResponse]
    count: int
