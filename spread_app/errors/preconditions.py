"""
Precondition violations for the spread calculator.

Callers must never pass non-positive prices or fee fractions outside [0, 1).
These errors abort the single calculation and propagate to the caller of the
engine; they are never coerced into a default spread.
"""

from decimal import Decimal
from typing import Optional

from .system_failures import SpreadEngineError


class PreconditionViolationError(SpreadEngineError):
    """Calculator input outside its documented domain."""

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Optional[Decimal] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value


class NonPositivePriceError(PreconditionViolationError):
    """A price was zero or negative."""


class FeeOutOfRangeError(PreconditionViolationError):
    """A fee fraction was outside [0, 1)."""


class ZeroPriceError(PreconditionViolationError, ZeroDivisionError):
    """The long price scaled to zero and cannot be used as a divisor."""
