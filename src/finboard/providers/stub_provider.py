"""Stub market data provider for offline/testing use."""

import random
from decimal import Decimal

from finboard.core.timezone import now_local
from finboard.domain.views import Quote


# Deterministic fake prices for common tickers
_STUB_PRICES: dict[str, tuple[Decimal, str]] = {
    "AAPL": (Decimal("185.50"), "USD"),
    "MSFT": (Decimal("378.25"), "USD"),
    "VWCE.DE": (Decimal("112.40"), "EUR"),
    "SWDA.MI": (Decimal("98.15"), "EUR"),
    "EIMI.MI": (Decimal("31.20"), "EUR"),
    "BTC-EUR": (Decimal("58250.00"), "EUR"),
}


class StubMarketDataProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Uses predefined prices for common tickers; generates seeded random prices for unknown ones.
    """

    def __init__(self, seed: int = 42, default_currency: str = "EUR"):
        self._rng = random.Random(seed)
        self._default_currency = default_currency

    def get_quotes(self, tickers: list[str]) -> dict[str, Quote]:
        as_of = now_local()
        result: dict[str, Quote] = {}

        for ticker in tickers:
            upper_ticker = ticker.upper()
            if upper_ticker in _STUB_PRICES:
                price, currency = _STUB_PRICES[upper_ticker]
            else:
                price = Decimal(str(50 + self._rng.random() * 200)).quantize(Decimal("0.01"))
                currency = self._default_currency

            result[upper_ticker] = Quote(
                ticker=upper_ticker,
                price=price,
                currency=currency,
                as_of=as_of,
            )

        return result
