"""Pydantic schemas for asset endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from finboard.domain.models.enums import AssetClass, AssetType


class AssetCompositionSchema(BaseModel):
    """Share of a composite asset in one asset class."""

    model_config = {"from_attributes": True}

    asset_class: AssetClass
    percentage: Decimal = Field(..., ge=0, le=100)
    sub_category: Optional[str] = None


class AssetCreateRequest(BaseModel):
    """Request schema for creating an asset."""

    user_id: str = Field(..., min_length=1)
    ticker: str = Field(..., min_length=1, max_length=32)
    name: str = Field(..., min_length=1, max_length=255)
    asset_type: AssetType
    asset_class: AssetClass
    quantity: Decimal = Field(..., ge=0)
    current_price: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Omit to fetch the price from the market data provider",
    )
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    sub_category: Optional[str] = None
    average_cost: Optional[Decimal] = Field(default=None, ge=0)
    tax_rate: Optional[Decimal] = Field(default=None, ge=0, le=100)
    auto_update_price: bool = True
    composition: list[AssetCompositionSchema] = Field(default_factory=list)

    @field_validator("ticker")
    @classmethod
    def uppercase_ticker(cls, v: str) -> str:
        return v.strip().upper()


class AssetUpdateRequest(BaseModel):
    """Request schema for updating an asset (partial update)."""

    ticker: Optional[str] = Field(default=None, min_length=1, max_length=32)
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    asset_type: Optional[AssetType] = None
    asset_class: Optional[AssetClass] = None
    quantity: Optional[Decimal] = Field(default=None, ge=0)
    current_price: Optional[Decimal] = Field(default=None, ge=0)
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    sub_category: Optional[str] = None
    average_cost: Optional[Decimal] = Field(default=None, ge=0)
    tax_rate: Optional[Decimal] = Field(default=None, ge=0, le=100)
    auto_update_price: Optional[bool] = None
    composition: Optional[list[AssetCompositionSchema]] = None


class AssetResponse(BaseModel):
    """Response schema for a single asset."""

    model_config = {"from_attributes": True}

    asset_id: str
    user_id: str
    ticker: str
    name: str
    asset_type: AssetType
    asset_class: AssetClass
    sub_category: Optional[str] = None
    currency: str
    quantity: Decimal
    current_price: Decimal
    total_value: Decimal
    average_cost: Optional[Decimal] = None
    tax_rate: Optional[Decimal] = None
    auto_update_price: bool
    composition: list[AssetCompositionSchema]
    last_price_update: Optional[datetime] = None
    created_at: Optional[datetime] = None


class AssetCreateResponse(BaseModel):
    """Created asset plus an optional pricing warning."""

    asset: AssetResponse
    warning: Optional[str] = None


class AssetListResponse(BaseModel):
    """Response schema for listing assets."""

    assets: list[AssetResponse]
    count: int
    total_value: Decimal


class TaxSimulationResponse(BaseModel):
    """Result of a simulated (partial) sale."""

    model_config = {"from_attributes": True}

    quantity: Decimal
    requested_quantity: Decimal
    exceeds_owned: bool
    current_price: Decimal
    average_cost: Decimal
    tax_rate: Decimal
    sale_value: Decimal
    cost_basis: Decimal
    gain_loss: Decimal
    gain_loss_pct: Decimal
    tax: Decimal
    net_proceeds: Decimal
