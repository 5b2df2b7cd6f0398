"""Pydantic schemas for asset allocation endpoints."""

from decimal import Decimal

from pydantic import BaseModel, Field

from finboard.domain.models import AssetClass, RebalanceAction


class AllocationTargetSchema(BaseModel):
    """Target share of one asset class; sub-targets are relative to the class."""

    model_config = {"from_attributes": True}

    asset_class: AssetClass
    target_percentage: Decimal = Field(..., ge=0, le=100)
    sub_targets: dict[str, Decimal] = Field(default_factory=dict)


class AllocationTargetsRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    targets: list[AllocationTargetSchema]


class AllocationTargetsResponse(BaseModel):
    targets: list[AllocationTargetSchema]


class AllocationLineResponse(BaseModel):
    model_config = {"from_attributes": True}

    current_value: Decimal
    current_percentage: Decimal
    target_percentage: Decimal
    target_value: Decimal
    difference: Decimal
    difference_value: Decimal
    action: RebalanceAction


class CurrentAllocationResponse(BaseModel):
    model_config = {"from_attributes": True}

    total_value: Decimal
    by_asset_class: dict[str, Decimal]
    by_sub_category: dict[str, Decimal]


class AllocationComparisonResponse(BaseModel):
    """Current allocation against targets, with a suggested action per line."""

    model_config = {"from_attributes": True}

    total_value: Decimal
    by_asset_class: dict[str, AllocationLineResponse]
    by_sub_category: dict[str, AllocationLineResponse]
