"""Pytest configuration and shared fixtures."""

import pytest
from datetime import datetime, timezone
from decimal import Decimal

from spread_app.data.models import ExchangePairKey, Quote, SpreadResult
from spread_app.sources.memory import InMemoryFeeSource, InMemoryQuoteSource


NOW = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_result(
    entry: str,
    exit_: str = "0",
    long_exchange: str = "coinbase",
    short_exchange: str = "kraken",
    instrument: str = "BTC/USD",
) -> SpreadResult:
    """Spread result with placeholder quotes."""
    quote = Quote(ask=Decimal("1000"), bid=Decimal("999"), ts=NOW)
    return SpreadResult(
        instrument=instrument,
        long_exchange=long_exchange,
        short_exchange=short_exchange,
        long_quote=quote,
        short_quote=quote,
        entry_spread=Decimal(entry),
        exit_spread=Decimal(exit_),
    )


@pytest.fixture
def btc_pair() -> ExchangePairKey:
    """Long coinbase, short kraken, BTC/USD."""
    return ExchangePairKey("coinbase", "kraken", "BTC/USD")


@pytest.fixture
def quote_source() -> InMemoryQuoteSource:
    """Quote source with a fixed clock."""
    return InMemoryQuoteSource(clock=lambda: NOW)


@pytest.fixture
def fee_source() -> InMemoryFeeSource:
    """Fee source with cached fees for both exchanges."""
    source = InMemoryFeeSource()
    source.set_cached_fee("coinbase", "BTC/USD", Decimal("0.005"))
    source.set_cached_fee("kraken", "BTC/USD", Decimal("0.0026"))
    return source


@pytest.fixture
def canonical_quotes(quote_source: InMemoryQuoteSource) -> InMemoryQuoteSource:
    """Long ask/bid 1000, short bid/ask 1010."""
    quote_source.update_quote(
        "coinbase", "BTC/USD", Quote(ask=Decimal("1000"), bid=Decimal("1000"), ts=NOW)
    )
    quote_source.update_quote(
        "kraken", "BTC/USD", Quote(ask=Decimal("1010"), bid=Decimal("1010"), ts=NOW)
    )
    return quote_source


@pytest.fixture
def result_factory():
    """Build spread results from entry/exit strings."""
    return make_result


@pytest.fixture
def now() -> datetime:
    """Fixed wall-clock time used by the quote source fixture."""
    return NOW
