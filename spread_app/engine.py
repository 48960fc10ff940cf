"""
Spread evaluation engine.

Orchestrates one evaluation cycle per trade combination:
Quotes → Validity check → Fee lookup → Spread calculation → Water marks → Sinks
"""

from decimal import Decimal
from pathlib import Path
from typing import Any, Iterable, Optional, Union

import structlog

from .config.loader import ConfigLoader
from .data.models import (
    EvaluationOutcome,
    ExchangePairKey,
    FeeLookup,
    NoSignal,
    Quote,
    SpreadResult,
)
from .delivery import BaseSpreadDelivery, create_deliveries
from .errors import (
    FeeUnavailableError,
    PreconditionViolationError,
    QuoteFetchError,
    SpreadEngineError,
)
from .logging.config import get_spread_logger, log_spread_result
from .sources.base import FeeSource, QuoteSource
from .spreads.calculator import SpreadCalculator
from .spreads.watermarks import WaterMarkTracker

logger = structlog.get_logger(__name__)
spread_logger = get_spread_logger(__name__)


def lookup_cached_fee(fee_source: FeeSource, exchange: str, instrument: str) -> FeeLookup:
    """First step of a fee lookup: ask the cache only."""
    fee = fee_source.get_cached_fee(exchange, instrument)
    if fee is None:
        return FeeLookup.miss(exchange, instrument)
    return FeeLookup.hit(exchange, instrument, fee)


class SpreadEvaluationEngine:
    """
    Computes entry and exit spreads for configured exchange pairs.

    The water-mark tracker and event sinks are injected so several engines
    can share one store, and tests can observe it directly.
    """

    def __init__(
        self,
        quote_source: QuoteSource,
        fee_source: FeeSource,
        tracker: Optional[WaterMarkTracker] = None,
        calculator: Optional[SpreadCalculator] = None,
        deliveries: Optional[list[BaseSpreadDelivery]] = None,
        trade_combinations: Optional[list[ExchangePairKey]] = None,
    ) -> None:
        """Initialize the spread evaluation engine."""
        self.logger = logger
        self.spread_logger = spread_logger

        self.quote_source = quote_source
        self.fee_source = fee_source
        self.tracker = tracker if tracker is not None else WaterMarkTracker()
        self.calculator = calculator or SpreadCalculator()
        self.deliveries = deliveries or []
        self.trade_combinations = list(trade_combinations or [])

        self._evaluations = 0
        self._results = 0
        self._no_signals = 0
        self._failures = 0

        self.logger.info(
            "Spread evaluation engine initialized",
            trade_combinations=len(self.trade_combinations),
            deliveries=len(self.deliveries)
        )

    @classmethod
    def from_config(
        cls,
        quote_source: QuoteSource,
        fee_source: FeeSource,
        config_dir: Optional[Union[str, Path]] = None,
        overrides: Optional[dict[str, Any]] = None,
        tracker: Optional[WaterMarkTracker] = None,
    ) -> "SpreadEvaluationEngine":
        """Build an engine with trade combinations and sinks from spread.yaml."""
        loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
        return cls(
            quote_source=quote_source,
            fee_source=fee_source,
            tracker=tracker,
            deliveries=create_deliveries(loader.load_delivery_config(overrides)),
            trade_combinations=loader.load_trade_combinations(overrides),
        )

    def evaluate(self, pair: ExchangePairKey) -> EvaluationOutcome:
        """
        Run one evaluation cycle for a trade combination.

        Returns:
            SpreadResult, or NoSignal when either quote is invalid

        Raises:
            PreconditionViolationError: Prices or fees outside their domain
            FeeUnavailableError: Fee cache miss and the fetch failed
            QuoteFetchError: The quote source raised
        """
        self._evaluations += 1
        try:
            return self._evaluate(pair)
        except SpreadEngineError:
            self._failures += 1
            raise

    def _evaluate(self, pair: ExchangePairKey) -> EvaluationOutcome:
        long_quote = self._fetch_quote(pair.long_exchange, pair.instrument)
        short_quote = self._fetch_quote(pair.short_exchange, pair.instrument)

        long_invalid = self.quote_source.is_invalid(long_quote)
        short_invalid = self.quote_source.is_invalid(short_quote)
        if long_invalid or short_invalid:
            self._no_signals += 1
            self.logger.debug(
                "Invalid quote, no signal",
                pair=str(pair),
                long_invalid=long_invalid,
                short_invalid=short_invalid
            )
            return NoSignal(pair=pair, reason="invalid_quote")

        # Entry buys on the long exchange and sells on the short exchange
        long_fee = self._resolve_fee(pair.long_exchange, pair.instrument, is_buy=True)
        short_fee = self._resolve_fee(pair.short_exchange, pair.instrument, is_buy=False)

        try:
            entry_spread = self.calculator.entry_spread(
                long_quote.ask, long_fee, short_quote.bid, short_fee
            )
            exit_spread = self.calculator.exit_spread(
                long_quote.bid, long_fee, short_quote.ask, short_fee
            )
        except PreconditionViolationError as e:
            self.spread_logger.error(
                "Spread precondition violated",
                pair=str(pair),
                field=e.field,
                value=str(e.value),
                error=str(e)
            )
            raise

        result = SpreadResult(
            instrument=pair.instrument,
            long_exchange=pair.long_exchange,
            short_exchange=pair.short_exchange,
            long_quote=long_quote,
            short_quote=short_quote,
            entry_spread=entry_spread,
            exit_spread=exit_spread,
        )

        # Track high and low water marks
        self.tracker.record(result)
        self._results += 1
        log_spread_result(self.spread_logger, result)

        for delivery in self.deliveries:
            delivery.publish(result)

        return result

    def evaluate_all(self, pairs: Optional[Iterable[ExchangePairKey]] = None) -> list[SpreadResult]:
        """
        Evaluate every trade combination, skipping pairs without a signal.

        A pair that fails is logged and skipped so the remaining pairs are
        still evaluated; it never contributes a result.
        """
        results = []
        for pair in (self.trade_combinations if pairs is None else pairs):
            try:
                outcome = self.evaluate(pair)
            except SpreadEngineError as e:
                self.logger.error(
                    "Spread evaluation failed",
                    pair=str(pair),
                    error=str(e),
                    error_type=type(e).__name__,
                    context=e.context
                )
                continue

            if isinstance(outcome, SpreadResult):
                results.append(outcome)

        return results

    def _fetch_quote(self, exchange: str, instrument: str) -> Optional[Quote]:
        try:
            return self.quote_source.get_quote(exchange, instrument)
        except SpreadEngineError:
            raise
        except Exception as e:
            raise QuoteFetchError(
                f"Quote fetch failed for {exchange} {instrument}: {e}",
                exchange=exchange,
                instrument=instrument
            ) from e

    def _resolve_fee(self, exchange: str, instrument: str, is_buy: bool) -> Decimal:
        """Cache-first fee lookup with an explicit fallback fetch on a miss."""
        lookup = lookup_cached_fee(self.fee_source, exchange, instrument)
        if lookup.is_hit:
            return lookup.fee

        self.logger.debug(
            "Fee cache miss, fetching",
            exchange=exchange,
            instrument=instrument,
            is_buy=is_buy
        )

        try:
            fee = self.fee_source.get_fee(exchange, instrument, is_buy)
        except SpreadEngineError:
            raise
        except Exception as e:
            raise FeeUnavailableError(
                f"Fee fetch failed for {exchange} {instrument}: {e}",
                exchange=exchange,
                instrument=instrument,
                is_buy=is_buy
            ) from e

        if fee is None:
            raise FeeUnavailableError(
                f"No fee available for {exchange} {instrument}",
                exchange=exchange,
                instrument=instrument,
                is_buy=is_buy
            )
        return fee

    def summary(self) -> str:
        """Current water-mark summary."""
        return self.tracker.summary()

    def get_runtime_stats(self) -> dict[str, Any]:
        """Get runtime statistics."""
        return {
            'evaluations': self._evaluations,
            'results': self._results,
            'no_signals': self._no_signals,
            'failures': self._failures,
            'tracked_pairs': len(self.tracker),
            'trade_combinations': len(self.trade_combinations),
        }
