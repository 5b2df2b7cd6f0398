"""View models for the asset price-history table."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from finboard.domain.models import CellColor


@dataclass
class MonthColumn:
    """Reporting-period column of the table."""

    key: str  # "2025-1"
    label: str  # "01/25"
    year: int
    month: int


@dataclass
class MonthPriceCell:
    """One asset's value in one month; price None means no data."""

    price: Optional[Decimal] = None
    total_value: Optional[Decimal] = None
    value: Optional[Decimal] = None  # displayed value
    color: CellColor = CellColor.NEUTRAL
    change: Optional[Decimal] = None  # percentage vs comparison month

    @property
    def has_data(self) -> bool:
        return self.price is not None


@dataclass
class AssetPriceHistoryRow:
    """Price history of a single asset across month columns."""

    asset_id: str
    ticker: str
    name: str
    is_deleted: bool
    months: dict[str, MonthPriceCell] = field(default_factory=dict)
    ytd_change: Optional[Decimal] = None
    from_start_change: Optional[Decimal] = None


@dataclass
class TotalRow:
    """Per-month sum of all asset totals."""

    months: dict[str, MonthPriceCell] = field(default_factory=dict)
    ytd_change: Optional[Decimal] = None
    from_start_change: Optional[Decimal] = None


@dataclass
class PriceHistoryTable:
    """Rows, columns and optional totals row of the price-history table."""

    assets: list[AssetPriceHistoryRow] = field(default_factory=list)
    month_columns: list[MonthColumn] = field(default_factory=list)
    total_row: Optional[TotalRow] = None
