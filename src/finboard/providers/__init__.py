"""Market data providers module."""

from finboard.providers.market_data_provider import MarketDataProvider
from finboard.providers.stub_provider import StubMarketDataProvider
from finboard.providers.yfinance_provider import YFinanceProvider

__all__ = [
    "MarketDataProvider",
    "StubMarketDataProvider",
    "YFinanceProvider",
]
