"""
Error classification tests for the spread engine.

Covers the exception hierarchy and the context carried by each error type.
"""

import pytest
from decimal import Decimal

from spread_app.errors import (
    ConfigurationError,
    DeliveryError,
    FeeOutOfRangeError,
    FeeUnavailableError,
    NonPositivePriceError,
    PreconditionViolationError,
    QuoteFetchError,
    SpreadEngineError,
    ZeroPriceError,
)


class TestErrorClassification:
    """Test error classification system."""

    def test_base_error_defaults(self):
        error = SpreadEngineError("base error")
        assert error.recoverable is False
        assert error.context == {}
        assert str(error) == "base error"

    def test_context_is_kept(self):
        error = SpreadEngineError("with context", context={"pair": "coinbase/kraken BTC/USD"})
        assert error.context["pair"] == "coinbase/kraken BTC/USD"

    def test_precondition_errors_carry_field_and_value(self):
        price_error = NonPositivePriceError("bad price", field="long_ask", value=Decimal("0"))
        assert isinstance(price_error, PreconditionViolationError)
        assert isinstance(price_error, SpreadEngineError)
        assert price_error.field == "long_ask"
        assert price_error.value == Decimal("0")

        fee_error = FeeOutOfRangeError("bad fee", field="short_fee", value=Decimal("1"))
        assert isinstance(fee_error, PreconditionViolationError)
        assert fee_error.field == "short_fee"

    def test_zero_price_error_is_zero_division(self):
        error = ZeroPriceError("division by zero", field="long_price", value=Decimal("0"))
        assert isinstance(error, ZeroDivisionError)
        assert isinstance(error, PreconditionViolationError)

        with pytest.raises(ZeroDivisionError):
            raise error

    def test_source_failures(self):
        fee_error = FeeUnavailableError(
            "no fee", exchange="kraken", instrument="BTC/USD", is_buy=False
        )
        assert fee_error.exchange == "kraken"
        assert fee_error.instrument == "BTC/USD"
        assert fee_error.is_buy is False
        assert not isinstance(fee_error, PreconditionViolationError)

        quote_error = QuoteFetchError("no quote", exchange="coinbase", instrument="ETH/USD")
        assert quote_error.exchange == "coinbase"
        assert isinstance(quote_error, SpreadEngineError)

    def test_delivery_and_configuration_errors(self):
        delivery_error = DeliveryError("sink down", delivery_method="file_output",
                                       pair="coinbase/kraken BTC/USD")
        assert delivery_error.delivery_method == "file_output"
        assert delivery_error.pair == "coinbase/kraken BTC/USD"

        config_error = ConfigurationError("invalid", errors=["fees.default_fee"])
        assert config_error.errors == ["fees.default_fee"]
        assert ConfigurationError("invalid").errors == []
