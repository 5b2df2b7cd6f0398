"""Market data provider protocol."""

from typing import Protocol

from finboard.domain.views import Quote


class MarketDataProvider(Protocol):
    """
    Protocol for market data providers.

    Implementations fetch the latest price and quote currency per ticker.
    Tickers that cannot be priced are either omitted or returned with
    price None; providers may raise on transport failures.
    """

    def get_quotes(self, tickers: list[str]) -> dict[str, Quote]:
        """Fetch quotes for multiple tickers, keyed by upper-cased ticker."""
        ...
