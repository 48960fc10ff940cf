"""
Error classification for spread evaluation.

Precondition violations are fatal to a single calculation; source failures
are fatal to a single evaluation cycle. An invalid quote is not an error at
all: the engine reports it as a NoSignal outcome.
"""

from .preconditions import (
    PreconditionViolationError,
    NonPositivePriceError,
    FeeOutOfRangeError,
    ZeroPriceError,
)
from .system_failures import (
    SpreadEngineError,
    FeeUnavailableError,
    QuoteFetchError,
    DeliveryError,
    ConfigurationError,
)

__all__ = [
    # Base
    "SpreadEngineError",
    # Precondition violations
    "PreconditionViolationError",
    "NonPositivePriceError",
    "FeeOutOfRangeError",
    "ZeroPriceError",
    # Source and system failures
    "FeeUnavailableError",
    "QuoteFetchError",
    "DeliveryError",
    "ConfigurationError",
]
