"""View models for market quotes and price refreshes."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Quote:
    """Market quote for a ticker; price None means unavailable."""

    ticker: str
    price: Optional[Decimal]
    currency: str
    as_of: Optional[datetime] = None
    error: Optional[str] = None

    @property
    def is_available(self) -> bool:
        return self.price is not None and self.price > 0


@dataclass
class PriceUpdateResult:
    """Summary of a batch price refresh."""

    updated: int = 0
    failed: list[str] = field(default_factory=list)
    message: str = ""
