"""
High and low water marks for entry and exit spreads.

Keeping track of the highest and lowest spreads seen for every exchange pair
over time is useful for choosing entry and exit thresholds.
"""

import threading
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping

from ..data.models import ExchangePairKey, SpreadResult

# Starting points for the running minimum and maximum of a new key
MIN_SENTINEL = Decimal(1)
MAX_SENTINEL = Decimal(-1)

MIN_ENTRY_TITLE = "Minimum entry spreads"
MAX_ENTRY_TITLE = "Maximum entry spreads"
MIN_EXIT_TITLE = "Minimum exit spreads"
MAX_EXIT_TITLE = "Maximum exit spreads"


@dataclass(frozen=True)
class WaterMarks:
    """Immutable copy of the four water-mark mappings."""
    min_entry: Mapping[ExchangePairKey, Decimal] = field(default_factory=dict)
    max_entry: Mapping[ExchangePairKey, Decimal] = field(default_factory=dict)
    min_exit: Mapping[ExchangePairKey, Decimal] = field(default_factory=dict)
    max_exit: Mapping[ExchangePairKey, Decimal] = field(default_factory=dict)

    def blocks(self) -> dict[str, Mapping[ExchangePairKey, Decimal]]:
        """Mappings by title, in reporting order."""
        return {
            MIN_ENTRY_TITLE: self.min_entry,
            MAX_ENTRY_TITLE: self.max_entry,
            MIN_EXIT_TITLE: self.min_exit,
            MAX_EXIT_TITLE: self.max_exit,
        }


def format_water_mark_block(marks: Mapping[ExchangePairKey, Decimal]) -> str:
    """One 'long/short instrument: value' line per key, sorted by key."""
    return "\n".join(f"{key}: {marks[key]}" for key in sorted(marks))


class WaterMarkTracker:
    """
    Running minimum and maximum of entry and exit spreads per exchange pair.

    A single lock guards all four mappings: every record() updates them in
    one critical section and snapshot() copies them in one critical section.
    Values are not range checked. A new key starts from a minimum of 1 and a
    maximum of -1, so a recorded minimum is never above 1 and a recorded
    maximum is never below -1.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._min_entry: dict[ExchangePairKey, Decimal] = {}
        self._max_entry: dict[ExchangePairKey, Decimal] = {}
        self._min_exit: dict[ExchangePairKey, Decimal] = {}
        self._max_exit: dict[ExchangePairKey, Decimal] = {}

    def record(self, result: SpreadResult) -> None:
        """Fold a new spread result into the water marks."""
        key = ExchangePairKey(result.long_exchange, result.short_exchange, result.instrument)
        entry = result.entry_spread
        exit_ = result.exit_spread

        with self._lock:
            self._min_entry[key] = min(self._min_entry.get(key, MIN_SENTINEL), entry)
            self._max_entry[key] = max(self._max_entry.get(key, MAX_SENTINEL), entry)
            self._min_exit[key] = min(self._min_exit.get(key, MIN_SENTINEL), exit_)
            self._max_exit[key] = max(self._max_exit.get(key, MAX_SENTINEL), exit_)

    def snapshot(self) -> WaterMarks:
        """Consistent copy of all water marks."""
        with self._lock:
            return WaterMarks(
                min_entry=MappingProxyType(dict(self._min_entry)),
                max_entry=MappingProxyType(dict(self._max_entry)),
                min_exit=MappingProxyType(dict(self._min_exit)),
                max_exit=MappingProxyType(dict(self._max_exit)),
            )

    def summary_blocks(self) -> dict[str, str]:
        """Rendered block per mapping, keyed by title, in reporting order."""
        return {
            title: format_water_mark_block(marks)
            for title, marks in self.snapshot().blocks().items()
        }

    def summary(self) -> str:
        """
        Render all four mappings as text.

        Blocks come in the order minimum entry, maximum entry, minimum exit,
        maximum exit. Each block is a title line followed by one
        'long/short instrument: value' line per tracked key.
        """
        sections = []
        for title, block in self.summary_blocks().items():
            sections.append(f"{title}:\n{block}" if block else f"{title}:")
        return "\n".join(sections)

    def tracked_keys(self) -> list[ExchangePairKey]:
        with self._lock:
            return sorted(self._min_entry)

    def reset(self) -> None:
        with self._lock:
            self._min_entry.clear()
            self._max_entry.clear()
            self._min_exit.clear()
            self._max_exit.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._min_entry)
