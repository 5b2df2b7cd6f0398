"""Monthly portfolio snapshot models."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class AssetSnapshot:
    """
    One holding's state at a month boundary.

    `is_cash_equivalent` is None for rows recorded before the flag existed;
    readers fall back to the unit-price-of-one convention for those.
    """

    asset_id: str
    ticker: str
    name: str
    quantity: Decimal
    price: Optional[Decimal]
    total_value: Decimal = field(default_factory=lambda: Decimal("0"))
    is_cash_equivalent: Optional[bool] = None

    @property
    def shows_total_value(self) -> bool:
        if self.is_cash_equivalent is not None:
            return self.is_cash_equivalent
        return self.price == Decimal("1")


@dataclass
class MonthlySnapshot:
    """All holdings of a user recorded at a month boundary."""

    user_id: str
    year: int
    month: int
    total_net_worth: Decimal = field(default_factory=lambda: Decimal("0"))
    by_asset: list[AssetSnapshot] = field(default_factory=list)
    note: Optional[str] = None
    created_at: Optional[datetime] = field(default=None)

    @property
    def snapshot_id(self) -> str:
        return make_snapshot_id(self.user_id, self.year, self.month)

    @property
    def period_key(self) -> tuple[int, int]:
        return (self.year, self.month)


def make_snapshot_id(user_id: str, year: int, month: int) -> str:
    """Build the document id of a user's snapshot for a month."""
    return f"{user_id}-{year}-{month}"
