"""Asset domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from finboard.domain.models.enums import AssetClass, AssetType

# Asset types and subcategories whose value is not quoted on a market
NON_QUOTED_TYPES: tuple[AssetType, ...] = (AssetType.CASH, AssetType.REALESTATE)
NON_QUOTED_SUBCATEGORIES: tuple[str, ...] = ("Private Equity",)


@dataclass
class AssetComposition:
    """Share of a composite asset (e.g. a pension fund) in one asset class."""

    asset_class: AssetClass
    percentage: Decimal
    sub_category: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.asset_class, str):
            self.asset_class = AssetClass(self.asset_class)


@dataclass
class Asset:
    """
    A single portfolio holding.

    Prices are refreshed from the market data provider unless the asset type
    has no market quote or the user disabled `auto_update_price`.
    """

    asset_id: str
    user_id: str
    ticker: str
    name: str
    asset_type: AssetType
    asset_class: AssetClass
    quantity: Decimal
    current_price: Decimal = field(default_factory=lambda: Decimal("0"))
    currency: str = "EUR"
    sub_category: Optional[str] = None
    average_cost: Optional[Decimal] = None
    tax_rate: Optional[Decimal] = None
    auto_update_price: bool = True
    composition: list[AssetComposition] = field(default_factory=list)
    last_price_update: Optional[datetime] = field(default=None)
    created_at: Optional[datetime] = field(default=None)
    updated_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.asset_type, str):
            self.asset_type = AssetType(self.asset_type)
        if isinstance(self.asset_class, str):
            self.asset_class = AssetClass(self.asset_class)

    @property
    def total_value(self) -> Decimal:
        return self.quantity * self.current_price

    @property
    def is_cash_equivalent(self) -> bool:
        return self.asset_type == AssetType.CASH or self.asset_class == AssetClass.CASH

    @property
    def supports_price_update(self) -> bool:
        """True if the asset has a market quote and the user wants it refreshed."""
        if self.asset_type in NON_QUOTED_TYPES:
            return False
        if self.sub_category in NON_QUOTED_SUBCATEGORIES:
            return False
        return self.auto_update_price
