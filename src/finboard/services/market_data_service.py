"""Market data service for price quotes."""

import logging
from datetime import datetime
from typing import Optional

from finboard.core.timezone import now_local
from finboard.domain.views import Quote
from finboard.providers.market_data_provider import MarketDataProvider

logger = logging.getLogger(__name__)


class MarketDataService:
    """
    Service for fetching market quotes.

    Wraps the provider with a TTL cache and graceful degradation: an
    unreachable provider or a non-positive price yields an "unavailable"
    quote (price None) instead of an exception.
    """

    def __init__(
        self,
        provider: MarketDataProvider,
        cache_ttl_seconds: int = 120,
        default_currency: str = "EUR",
    ):
        self._provider = provider
        self._cache_ttl = cache_ttl_seconds
        self._default_currency = default_currency
        self._quote_cache: dict[str, tuple[Quote, datetime]] = {}

    def get_quote(self, ticker: str) -> Quote:
        """Fetch a single quote; never raises."""
        key = ticker.strip().upper()
        return self.get_quotes([key]).get(key) or self._unavailable(key, "Price not available")

    def get_quotes(self, tickers: list[str]) -> dict[str, Quote]:
        """
        Fetch quotes for tickers with caching.

        Returns a quote for every non-empty requested ticker. Only available
        quotes are cached; unavailable ones are retried on the next call, and
        an expired cached quote is served when the refetch fails.
        """
        keys = list(dict.fromkeys(t.strip().upper() for t in tickers if t and t.strip()))
        if not keys:
            return {}

        result: dict[str, Quote] = {}
        missing: list[str] = []
        now = now_local()
        for key in keys:
            cached = self._quote_cache.get(key)
            if cached and (now - cached[1]).total_seconds() < self._cache_ttl:
                result[key] = cached[0]
            else:
                missing.append(key)

        if missing:
            try:
                fetched = self._provider.get_quotes(missing)
            except Exception as exc:
                logger.warning("Market data provider failed for %s: %s", ", ".join(missing), exc)
                fetched = {}

            fetched_at = now_local()
            for key in missing:
                quote = fetched.get(key)
                stale = self._quote_cache.get(key)
                if (quote is None or not quote.is_available) and stale:
                    # Serve the expired quote
                    quote = stale[0]
                elif quote is None:
                    quote = self._unavailable(key, "Price not available")
                elif not quote.is_available:
                    # Non-positive prices are treated as unavailable
                    quote = self._unavailable(key, quote.error or "Price not available", quote.currency)
                else:
                    self._quote_cache[key] = (quote, fetched_at)
                result[key] = quote

        return result

    def clear_cache(self) -> None:
        self._quote_cache.clear()

    def _unavailable(self, ticker: str, error: str, currency: Optional[str] = None) -> Quote:
        return Quote(
            ticker=ticker,
            price=None,
            currency=currency or self._default_currency,
            as_of=now_local(),
            error=error,
        )
