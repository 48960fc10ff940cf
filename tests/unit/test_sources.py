"""Tests for the in-memory quote and fee sources."""

from datetime import timedelta
from decimal import Decimal
from unittest.mock import Mock

from spread_app.config.defaults import FeeParams, QuoteParams
from spread_app.data.models import Quote
from spread_app.sources.memory import InMemoryFeeSource, InMemoryQuoteSource

D = Decimal


class TestInMemoryQuoteSource:
    """Test quote storage and validity"""

    def test_latest_quote_wins(self, quote_source, now):
        quote_source.update_quote("kraken", "BTC/USD", Quote(ask=D("1"), bid=D("1"), ts=now))
        quote_source.update_quote("kraken", "BTC/USD", Quote(ask=D("2"), bid=D("2"), ts=now))
        assert quote_source.get_quote("kraken", "BTC/USD").ask == D("2")

    def test_unknown_quote_is_none(self, quote_source):
        assert quote_source.get_quote("kraken", "BTC/USD") is None

    def test_missing_quote_is_invalid(self, quote_source):
        assert quote_source.is_invalid(None)

    def test_missing_side_is_invalid(self, quote_source, now):
        assert quote_source.is_invalid(Quote(ask=None, bid=D("1"), ts=now))
        assert quote_source.is_invalid(Quote(ask=D("1"), bid=None, ts=now))

    def test_fresh_quote_is_valid(self, quote_source, now):
        assert not quote_source.is_invalid(Quote(ask=D("1"), bid=D("1"), ts=now - timedelta(seconds=59)))

    def test_untimestamped_quote_is_valid(self, quote_source):
        assert not quote_source.is_invalid(Quote(ask=D("1"), bid=D("1")))

    def test_stale_quote_is_invalid(self, quote_source, now):
        assert quote_source.is_invalid(Quote(ask=D("1"), bid=D("1"), ts=now - timedelta(seconds=61)))

    def test_future_quote_beyond_skew_is_invalid(self, quote_source, now):
        assert quote_source.is_invalid(Quote(ask=D("1"), bid=D("1"), ts=now + timedelta(seconds=31)))

    def test_naive_timestamp_checked_as_utc(self, quote_source, now):
        naive_now = now.replace(tzinfo=None)
        assert not quote_source.is_invalid(Quote(ask=D("1"), bid=D("1"), ts=naive_now))
        assert quote_source.is_invalid(
            Quote(ask=D("1"), bid=D("1"), ts=naive_now - timedelta(minutes=5))
        )

    def test_max_age_is_configurable(self, now):
        source = InMemoryQuoteSource(QuoteParams(max_age_seconds=5), clock=lambda: now)
        assert source.is_invalid(Quote(ask=D("1"), bid=D("1"), ts=now - timedelta(seconds=6)))


class TestInMemoryFeeSource:
    """Test fee caching and fallback fetch"""

    def test_cache_only_answers_cached(self, fee_source):
        assert fee_source.get_cached_fee("coinbase", "BTC/USD") == D("0.005")
        assert fee_source.get_cached_fee("coinbase", "ETH/USD") is None

    def test_get_fee_uses_configured_fees(self):
        source = InMemoryFeeSource(FeeParams(default_fee="0.001", fee_overrides={"kraken": "0.0026"}))

        assert source.get_fee("kraken", "BTC/USD", True) == D("0.0026")
        assert source.get_fee("bitstamp", "BTC/USD", False) == D("0.001")
        assert source.get_cached_fee("kraken", "BTC/USD") == D("0.0026")

    def test_get_fee_uses_fetcher(self):
        fetcher = Mock(return_value=D("0.0015"))
        source = InMemoryFeeSource(fetcher=fetcher)

        assert source.get_fee("binance", "ETH/USD", False) == D("0.0015")
        fetcher.assert_called_once_with("binance", "ETH/USD", False)
        assert source.get_cached_fee("binance", "ETH/USD") == D("0.0015")

    def test_float_fee_normalized_to_decimal(self):
        source = InMemoryFeeSource(fetcher=lambda exchange, instrument, is_buy: 0.005)

        fee = source.get_fee("coinbase", "BTC/USD", True)

        assert isinstance(fee, Decimal)
        assert fee == D("0.005")
        assert source.get_cached_fee("coinbase", "BTC/USD") == D("0.005")

    def test_float_cached_fee_normalized_to_decimal(self):
        source = InMemoryFeeSource()
        source.set_cached_fee("kraken", "BTC/USD", 0.0026)
        assert source.get_cached_fee("kraken", "BTC/USD") == D("0.0026")

    def test_none_from_fetcher_not_cached(self):
        source = InMemoryFeeSource(fetcher=Mock(return_value=None))

        assert source.get_fee("binance", "ETH/USD", True) is None
        assert source.get_cached_fee("binance", "ETH/USD") is None

    def test_clear(self, fee_source):
        fee_source.clear()
        assert fee_source.get_cached_fee("coinbase", "BTC/USD") is None
