"""Spread calculation and water-mark tracking"""

from .calculator import (
    SPREAD_SCALE,
    SpreadCalculator,
    effective_entry_prices,
    effective_exit_prices,
    to_fixed,
)
from .watermarks import WaterMarks, WaterMarkTracker, format_water_mark_block

__all__ = [
    "SPREAD_SCALE",
    "SpreadCalculator",
    "effective_entry_prices",
    "effective_exit_prices",
    "to_fixed",
    "WaterMarks",
    "WaterMarkTracker",
    "format_water_mark_block",
]
