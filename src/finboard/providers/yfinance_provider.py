"""Yahoo Finance market data provider (via yfinance)."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from finboard.core.timezone import now_local
from finboard.domain.views import Quote

logger = logging.getLogger(__name__)


# Lazy import so tests can patch before import
def _get_yf():
    import yfinance as yf
    return yf


def _to_decimal(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


class YFinanceProvider:
    """Fetches quotes for a batch of tickers with a single yfinance Tickers call."""

    def __init__(self, default_currency: str = "EUR"):
        self._default_currency = default_currency

    def get_quotes(self, tickers: list[str]) -> dict[str, Quote]:
        if not tickers:
            return {}
        yf = _get_yf()
        tickers_obj = yf.Tickers(" ".join(tickers))
        as_of = now_local()
        return {ticker: self._quote_for(ticker, tickers_obj, as_of) for ticker in tickers}

    def _quote_for(self, ticker: str, tickers_obj, as_of) -> Quote:
        """Read one ticker's info; any per-ticker failure becomes an unavailable quote."""
        try:
            yf_ticker = tickers_obj.tickers.get(ticker)
            if yf_ticker is None:
                return Quote(ticker=ticker, price=None, currency=self._default_currency,
                             as_of=as_of, error="Unknown ticker")
            info = yf_ticker.info
            if not isinstance(info, dict):
                return Quote(ticker=ticker, price=None, currency=self._default_currency,
                             as_of=as_of, error="Price not available")
            # currentPrice preferred, then regularMarketPrice
            price = _to_decimal(info.get("currentPrice"))
            if price is None:
                price = _to_decimal(info.get("regularMarketPrice"))
            currency = info.get("currency") or self._default_currency
            if price is None or price <= 0:
                return Quote(ticker=ticker, price=None, currency=currency,
                             as_of=as_of, error="Price not available")
            return Quote(ticker=ticker, price=price, currency=currency, as_of=as_of)
        except Exception as exc:
            logger.warning("Quote lookup failed for %s: %s", ticker, exc)
            return Quote(ticker=ticker, price=None, currency=self._default_currency,
                         as_of=as_of, error=str(exc))
