"""
Fee-aware spread calculator.

A spread is the fractional difference between the short-side and long-side
price: (short - long) / long. For example:

    0.008   the short price is 0.8% higher than the long price
    -0.003  the long price is 0.3% higher than the short price
    0       the prices are equal

Entry and exit spreads first turn quoted prices into effective execution
prices (fees added to what we pay, subtracted from what we receive) and then
apply the same base spread formula, so both go through identical rounding.

All values use 8 fractional digits and ROUND_HALF_EVEN.
"""

from decimal import ROUND_HALF_EVEN, Context, Decimal, localcontext
from typing import Final

from ..errors import FeeOutOfRangeError, NonPositivePriceError, ZeroPriceError

# Satoshi precision
SPREAD_SCALE: Final[int] = 8
SPREAD_QUANTUM: Final[Decimal] = Decimal(1).scaleb(-SPREAD_SCALE)
SPREAD_ROUNDING: Final[str] = ROUND_HALF_EVEN

# Intermediate products and quotients are carried at this precision so the
# rounding to SPREAD_SCALE is the only one that is observable
WORKING_CONTEXT: Final[Context] = Context(prec=60, rounding=SPREAD_ROUNDING)

ONE: Final[Decimal] = Decimal(1)


def to_fixed(value: Decimal) -> Decimal:
    """Scale a value to 8 fractional digits, rounding half to even."""
    with localcontext(WORKING_CONTEXT):
        return Decimal(value).quantize(SPREAD_QUANTUM, rounding=SPREAD_ROUNDING)


def _validate_price(name: str, price: Decimal) -> None:
    if price is None or price <= 0:
        raise NonPositivePriceError(
            f"{name} must be positive, got {price}", field=name, value=price
        )


def _validate_fee(name: str, fee: Decimal) -> None:
    if fee is None or fee < 0 or fee >= 1:
        raise FeeOutOfRangeError(
            f"{name} must be in [0, 1), got {fee}", field=name, value=fee
        )


def effective_entry_prices(
    long_ask: Decimal,
    long_fee: Decimal,
    short_bid: Decimal,
    short_fee: Decimal,
) -> tuple[Decimal, Decimal]:
    """
    Effective prices for opening a position.

    Buying on the long exchange costs the fee on top of the ask; selling on
    the short exchange loses the fee from the bid proceeds.

    Returns:
        (effective_long, effective_short)
    """
    with localcontext(WORKING_CONTEXT):
        return long_ask * (ONE + long_fee), short_bid * (ONE - short_fee)


def effective_exit_prices(
    long_bid: Decimal,
    long_fee: Decimal,
    short_ask: Decimal,
    short_fee: Decimal,
) -> tuple[Decimal, Decimal]:
    """
    Effective prices for closing a position.

    Selling on the long exchange loses the fee from the bid proceeds; buying
    back on the short exchange costs the fee on top of the ask.

    Returns:
        (effective_long, effective_short)
    """
    with localcontext(WORKING_CONTEXT):
        return long_bid * (ONE - long_fee), short_ask * (ONE + short_fee)


class SpreadCalculator:
    """
    Pure spread math. Holds no state, safe to share between threads.
    """

    def base_spread(self, long_price: Decimal, short_price: Decimal) -> Decimal:
        """
        Compute (short - long) / long at the fixed scale.

        Both operands are scaled to 8 digits before subtracting, and the
        quotient is rounded to 8 digits.

        Raises:
            ZeroPriceError: If the long price scales to zero
        """
        scaled_long = to_fixed(long_price)
        scaled_short = to_fixed(short_price)

        if scaled_long == 0:
            raise ZeroPriceError(
                f"Long price {long_price} scales to zero", field="long_price", value=long_price
            )

        with localcontext(WORKING_CONTEXT):
            quotient = (scaled_short - scaled_long) / scaled_long

        return to_fixed(quotient)

    def entry_spread(
        self,
        long_ask: Decimal,
        long_fee: Decimal,
        short_bid: Decimal,
        short_fee: Decimal,
    ) -> Decimal:
        """
        Spread for opening a position: buy at the long ask, sell at the short bid.

        A positive value means entering is profitable before slippage; it is
        compared against the configured entry threshold elsewhere.
        """
        _validate_price("long_ask", long_ask)
        _validate_price("short_bid", short_bid)
        _validate_fee("long_fee", long_fee)
        _validate_fee("short_fee", short_fee)

        effective_long, effective_short = effective_entry_prices(
            long_ask, long_fee, short_bid, short_fee
        )
        return self.base_spread(effective_long, effective_short)

    def exit_spread(
        self,
        long_bid: Decimal,
        long_fee: Decimal,
        short_ask: Decimal,
        short_fee: Decimal,
    ) -> Decimal:
        """Spread for closing a position: sell at the long bid, buy back at the short ask."""
        _validate_price("long_bid", long_bid)
        _validate_price("short_ask", short_ask)
        _validate_fee("long_fee", long_fee)
        _validate_fee("short_fee", short_fee)

        effective_long, effective_short = effective_exit_prices(
            long_bid, long_fee, short_ask, short_fee
        )
        return self.base_spread(effective_long, effective_short)
