"""
Canonical data models for spread evaluation.

Quotes and results are immutable; all prices, fees and spreads are Decimal.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union


@dataclass(frozen=True)
class Quote:
    """Top of book for one exchange and instrument at one instant."""
    ask: Optional[Decimal]                  # Best ask, None if the side is empty
    bid: Optional[Decimal]                  # Best bid, None if the side is empty
    ts: Optional[datetime] = None           # UTC market timestamp

    def to_dict(self) -> dict[str, Any]:
        return {
            "ask": str(self.ask) if self.ask is not None else None,
            "bid": str(self.bid) if self.bid is not None else None,
            "ts": self.ts.isoformat() if self.ts else None,
        }


@dataclass(frozen=True, order=True)
class ExchangePairKey:
    """Long exchange, short exchange and instrument of one trade combination."""
    long_exchange: str
    short_exchange: str
    instrument: str

    def __str__(self) -> str:
        return f"{self.long_exchange}/{self.short_exchange} {self.instrument}"


@dataclass(frozen=True)
class SpreadResult:
    """Entry and exit spreads computed for one trade combination."""
    instrument: str
    long_exchange: str
    short_exchange: str
    long_quote: Quote
    short_quote: Quote
    entry_spread: Decimal
    exit_spread: Decimal

    @property
    def key(self) -> ExchangePairKey:
        return ExchangePairKey(self.long_exchange, self.short_exchange, self.instrument)

    def to_dict(self) -> dict[str, Any]:
        """Event payload with decimals rendered as strings."""
        return {
            "instrument": self.instrument,
            "long_exchange": self.long_exchange,
            "short_exchange": self.short_exchange,
            "long_quote": self.long_quote.to_dict(),
            "short_quote": self.short_quote.to_dict(),
            "entry_spread": str(self.entry_spread),
            "exit_spread": str(self.exit_spread),
        }


@dataclass(frozen=True)
class NoSignal:
    """Evaluation produced no result, e.g. because a quote was stale."""
    pair: ExchangePairKey
    reason: str = "invalid_quote"


EvaluationOutcome = Union[SpreadResult, NoSignal]


class FeeLookupStatus(Enum):
    """Outcome of a cache-first fee lookup."""
    CACHED = "cached"
    MISS = "miss"


@dataclass(frozen=True)
class FeeLookup:
    """Tagged result of a fee cache lookup."""
    exchange: str
    instrument: str
    status: FeeLookupStatus
    fee: Optional[Decimal] = None

    @property
    def is_hit(self) -> bool:
        return self.status == FeeLookupStatus.CACHED

    @classmethod
    def hit(cls, exchange: str, instrument: str, fee: Decimal) -> "FeeLookup":
        return cls(exchange=exchange, instrument=instrument,
                   status=FeeLookupStatus.CACHED, fee=fee)

    @classmethod
    def miss(cls, exchange: str, instrument: str) -> "FeeLookup":
        return cls(exchange=exchange, instrument=instrument, status=FeeLookupStatus.MISS)
