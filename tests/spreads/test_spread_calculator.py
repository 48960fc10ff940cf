"""Tests for SpreadCalculator fixed-point spread math"""

import pytest
from decimal import Decimal, localcontext

from spread_app.errors import (
    FeeOutOfRangeError,
    NonPositivePriceError,
    PreconditionViolationError,
    ZeroPriceError,
)
from spread_app.spreads.calculator import (
    SPREAD_SCALE,
    WORKING_CONTEXT,
    SpreadCalculator,
    effective_entry_prices,
    effective_exit_prices,
    to_fixed,
)

D = Decimal


@pytest.fixture
def calc() -> SpreadCalculator:
    return SpreadCalculator()


class TestBaseSpread:
    """Test (short - long) / long at the fixed scale"""

    def test_positive_spread(self, calc):
        assert calc.base_spread(D("1000"), D("1010")) == D("0.01")

    def test_negative_spread(self, calc):
        assert calc.base_spread(D("1010"), D("1000")) == D("-0.00990099")

    def test_equal_prices_give_zero(self, calc):
        for price in (D("1"), D("0.00012345"), D("64123.5"), D("1000000")):
            assert calc.base_spread(price, price) == 0

    def test_result_has_fixed_scale(self, calc):
        result = calc.base_spread(D("3"), D("4"))
        assert result == D("0.33333333")
        assert result.as_tuple().exponent == -SPREAD_SCALE

    def test_quotient_rounds_half_to_even(self, calc):
        # 0.00000001 / 2 = 0.000000005, ties to the even digit 0
        assert calc.base_spread(D("2"), D("2.00000001")) == D("0")
        # 0.00000003 / 2 = 0.000000015, ties to the even digit 2
        assert calc.base_spread(D("2"), D("2.00000003")) == D("0.00000002")

    def test_operands_scaled_before_division(self, calc):
        # 1.000000005 scales to 1.00000000, 1.000000015 scales to 1.00000002
        assert calc.base_spread(D("1"), D("1.000000005")) == D("0")
        assert calc.base_spread(D("1"), D("1.000000015")) == D("0.00000002")

    def test_zero_long_price_raises(self, calc):
        with pytest.raises(ZeroPriceError):
            calc.base_spread(D("0"), D("1"))

    def test_long_price_scaling_to_zero_raises(self, calc):
        with pytest.raises(ZeroDivisionError):
            calc.base_spread(D("0.000000004"), D("1"))

    def test_zero_price_error_is_precondition_violation(self, calc):
        with pytest.raises(PreconditionViolationError) as exc_info:
            calc.base_spread(D("0"), D("0"))
        assert exc_info.value.field == "long_price"

    def test_matches_definition_for_several_prices(self, calc):
        vectors = [
            (D("100"), D("101")),
            (D("27000.12"), D("26950.55")),
            (D("0.0561"), D("0.0563")),
            (D("1.23456789"), D("1.23456788")),
        ]
        for long_price, short_price in vectors:
            expected = to_fixed((to_fixed(short_price) - to_fixed(long_price)) / to_fixed(long_price))
            assert calc.base_spread(long_price, short_price) == expected


class TestEntrySpread:
    """Test fee-adjusted entry spread"""

    def test_canonical_regression_vector(self, calc):
        spread = calc.entry_spread(D("1000"), D("0.005"), D("1010"), D("0.0026"))
        assert spread == D("0.00236219")
        assert str(spread) == "0.00236219"

    def test_zero_fees_reduce_to_base_spread(self, calc):
        base = calc.base_spread(D("1000"), D("1010"))
        assert calc.entry_spread(D("1000"), D("0"), D("1010"), D("0")) == base

    def test_reduces_to_base_spread_on_effective_prices(self, calc):
        vectors = [
            (D("1000"), D("0.005"), D("1010"), D("0.0026")),
            (D("64000.5"), D("0.001"), D("64100.25"), D("0.0015")),
            (D("0.5"), D("0.002"), D("0.49"), D("0.0075")),
        ]
        for long_ask, long_fee, short_bid, short_fee in vectors:
            expected = calc.base_spread(long_ask * (1 + long_fee), short_bid * (1 - short_fee))
            assert calc.entry_spread(long_ask, long_fee, short_bid, short_fee) == expected

    def test_increasing_short_fee_decreases_spread(self, calc):
        spreads = [
            calc.entry_spread(D("1000"), D("0.001"), D("1010"), fee)
            for fee in (D("0.001"), D("0.002"), D("0.003"), D("0.01"))
        ]
        assert spreads == sorted(spreads, reverse=True)
        assert len(set(spreads)) == len(spreads)

    def test_increasing_long_fee_decreases_spread(self, calc):
        spreads = [
            calc.entry_spread(D("1000"), fee, D("1010"), D("0.001"))
            for fee in (D("0.001"), D("0.002"), D("0.003"), D("0.01"))
        ]
        assert spreads == sorted(spreads, reverse=True)
        assert len(set(spreads)) == len(spreads)

    def test_fees_can_make_positive_spread_negative(self, calc):
        assert calc.base_spread(D("1000"), D("1002")) > 0
        assert calc.entry_spread(D("1000"), D("0.002"), D("1002"), D("0.002")) < 0

    @pytest.mark.parametrize("long_ask,short_bid", [
        (D("0"), D("1010")),
        (D("-1000"), D("1010")),
        (D("1000"), D("0")),
        (D("1000"), D("-5")),
    ])
    def test_non_positive_prices_rejected(self, calc, long_ask, short_bid):
        with pytest.raises(NonPositivePriceError):
            calc.entry_spread(long_ask, D("0.001"), short_bid, D("0.001"))

    @pytest.mark.parametrize("long_fee,short_fee", [
        (D("1"), D("0.001")),
        (D("0.001"), D("1.5")),
        (D("-0.001"), D("0.001")),
        (D("0.001"), D("-0.0001")),
    ])
    def test_out_of_range_fees_rejected(self, calc, long_fee, short_fee):
        with pytest.raises(FeeOutOfRangeError):
            calc.entry_spread(D("1000"), long_fee, D("1010"), short_fee)


class TestExitSpread:
    """Test fee-adjusted exit spread"""

    def test_canonical_vector(self, calc):
        spread = calc.exit_spread(D("1000"), D("0.005"), D("1010"), D("0.0026"))
        assert spread == D("0.01771457")

    def test_zero_fees_reduce_to_base_spread(self, calc):
        base = calc.base_spread(D("1000"), D("1010"))
        assert calc.exit_spread(D("1000"), D("0"), D("1010"), D("0")) == base
        assert calc.entry_spread(D("1000"), D("0"), D("1010"), D("0")) == base

    def test_reduces_to_base_spread_on_effective_prices(self, calc):
        long_bid, long_fee, short_ask, short_fee = D("2500.75"), D("0.001"), D("2490.1"), D("0.002")
        expected = calc.base_spread(long_bid * (1 - long_fee), short_ask * (1 + short_fee))
        assert calc.exit_spread(long_bid, long_fee, short_ask, short_fee) == expected

    def test_non_positive_price_rejected(self, calc):
        with pytest.raises(NonPositivePriceError) as exc_info:
            calc.exit_spread(D("0"), D("0.001"), D("1010"), D("0.001"))
        assert exc_info.value.field == "long_bid"

    def test_out_of_range_fee_rejected(self, calc):
        with pytest.raises(FeeOutOfRangeError) as exc_info:
            calc.exit_spread(D("1000"), D("0.001"), D("1010"), D("1"))
        assert exc_info.value.field == "short_fee"


class TestEffectivePrices:
    """Test fee adjustment of quoted prices"""

    def test_entry_prices(self):
        effective_long, effective_short = effective_entry_prices(
            D("1000"), D("0.005"), D("1010"), D("0.0026")
        )
        assert effective_long == D("1005")
        assert effective_short == D("1007.374")

    def test_exit_prices(self):
        effective_long, effective_short = effective_exit_prices(
            D("1000"), D("0.005"), D("1010"), D("0.0026")
        )
        assert effective_long == D("995")
        assert effective_short == D("1012.626")

    def test_products_are_exact(self):
        effective_long, _ = effective_entry_prices(
            D("12345678.12345678"), D("0.00123456"), D("1"), D("0")
        )
        with localcontext(WORKING_CONTEXT):
            expected = D("12345678.12345678") + D("12345678.12345678") * D("0.00123456")
        assert effective_long == expected


class TestToFixed:
    """Test scaling to satoshi precision"""

    def test_rounds_half_to_even(self):
        assert to_fixed(D("0.000000005")) == D("0")
        assert to_fixed(D("0.000000015")) == D("0.00000002")
        assert to_fixed(D("-0.000000025")) == D("-0.00000002")

    def test_pads_to_scale(self):
        assert str(to_fixed(D("1.5"))) == "1.50000000"
