"""
In-memory quote and fee sources.

Market data adapters push the latest top of book into InMemoryQuoteSource;
InMemoryFeeSource caches fee fractions and falls back to a fetcher callable
or to configured defaults on a cache miss.
"""

import threading
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

import structlog

from ..config.defaults import FeeParams, QuoteParams
from ..data.models import Quote
from ..utils.time import is_fresh
from .base import FeeSource, QuoteSource

logger = structlog.get_logger(__name__)

FeeFetcher = Callable[[str, str, bool], Optional[Decimal]]


class InMemoryQuoteSource(QuoteSource):
    """Latest quote per (exchange, instrument), with freshness checks."""

    def __init__(self, params: Optional[QuoteParams] = None,
                 clock: Optional[Callable[[], datetime]] = None) -> None:
        self.params = params or QuoteParams()
        self._clock = clock
        self._lock = threading.Lock()
        self._quotes: dict[tuple[str, str], Quote] = {}

    def update_quote(self, exchange: str, instrument: str, quote: Quote) -> None:
        """Replace the latest quote for an exchange and instrument."""
        with self._lock:
            self._quotes[(exchange, instrument)] = quote

    def get_quote(self, exchange: str, instrument: str) -> Optional[Quote]:
        with self._lock:
            return self._quotes.get((exchange, instrument))

    def is_invalid(self, quote: Optional[Quote]) -> bool:
        if quote is None:
            return True

        if quote.bid is None or quote.ask is None:
            return True

        # Quotes without a market timestamp are taken as current
        if quote.ts is not None:
            now = self._clock() if self._clock else None
            if not is_fresh(quote.ts, self.params.max_age_seconds,
                            self.params.max_future_skew_seconds, now=now):
                logger.debug(
                    "Stale quote rejected",
                    quote_ts=quote.ts.isoformat(),
                    max_age_seconds=self.params.max_age_seconds
                )
                return True

        return False


class InMemoryFeeSource(FeeSource):
    """
    Fee cache with a fallback fetch.

    get_cached_fee only answers from the cache. get_fee asks the fetcher when
    one is configured, otherwise the per-exchange override or default fee,
    and caches whatever it returns.
    """

    def __init__(self, params: Optional[FeeParams] = None,
                 fetcher: Optional[FeeFetcher] = None) -> None:
        self.params = params or FeeParams()
        self.fetcher = fetcher
        self._lock = threading.Lock()
        self._cache: dict[tuple[str, str], Decimal] = {}

    def set_cached_fee(self, exchange: str, instrument: str, fee: Decimal) -> None:
        with self._lock:
            self._cache[(exchange, instrument)] = Decimal(str(fee))

    def get_cached_fee(self, exchange: str, instrument: str) -> Optional[Decimal]:
        with self._lock:
            return self._cache.get((exchange, instrument))

    def get_fee(self, exchange: str, instrument: str, is_buy: bool) -> Optional[Decimal]:
        if self.fetcher is not None:
            fee = self.fetcher(exchange, instrument, is_buy)
        else:
            fee = self.params.fee_overrides.get(exchange, self.params.default_fee)

        if fee is not None:
            # Floats from exchange adapters are taken at their printed value
            fee = Decimal(str(fee))
            self.set_cached_fee(exchange, instrument, fee)
            logger.debug(
                "Fee fetched and cached",
                exchange=exchange,
                instrument=instrument,
                is_buy=is_buy,
                fee=str(fee)
            )
        return fee

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
