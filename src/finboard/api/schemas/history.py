"""Pydantic schemas for the asset price-history table."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from finboard.domain.models.enums import CellColor


class MonthColumnResponse(BaseModel):
    model_config = {"from_attributes": True}

    key: str
    label: str
    year: int
    month: int


class MonthPriceCellResponse(BaseModel):
    """One month of one row; `price` null renders as "no data"."""

    model_config = {"from_attributes": True}

    price: Optional[Decimal] = None
    total_value: Optional[Decimal] = None
    value: Optional[Decimal] = None
    color: CellColor
    change: Optional[Decimal] = None


class AssetPriceHistoryRowResponse(BaseModel):
    model_config = {"from_attributes": True}

    asset_id: str
    ticker: str
    name: str
    is_deleted: bool
    months: dict[str, MonthPriceCellResponse]
    ytd_change: Optional[Decimal] = None
    from_start_change: Optional[Decimal] = None


class TotalRowResponse(BaseModel):
    model_config = {"from_attributes": True}

    months: dict[str, MonthPriceCellResponse]
    ytd_change: Optional[Decimal] = None
    from_start_change: Optional[Decimal] = None


class PriceHistoryResponse(BaseModel):
    """Price-history table: columns, asset rows and optional totals row."""

    model_config = {"from_attributes": True}

    month_columns: list[MonthColumnResponse]
    assets: list[AssetPriceHistoryRowResponse]
    total_row: Optional[TotalRowResponse] = None
