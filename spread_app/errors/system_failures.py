"""
System failure error classifications.

These exceptions represent failures of the collaborators around the spread
calculation (fee source, quote source, event sinks, configuration).
"""

from typing import Optional, Dict, Any


class SpreadEngineError(Exception):
    """Base class for every error raised by the spread engine."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class FeeUnavailableError(SpreadEngineError):
    """Fee cache miss that could not be satisfied by a direct fetch."""

    def __init__(self, message: str, exchange: Optional[str] = None,
                 instrument: Optional[str] = None, is_buy: Optional[bool] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.exchange = exchange
        self.instrument = instrument
        self.is_buy = is_buy


class QuoteFetchError(SpreadEngineError):
    """Quote source raised while fetching a quote."""

    def __init__(self, message: str, exchange: Optional[str] = None,
                 instrument: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.exchange = exchange
        self.instrument = instrument


class DeliveryError(SpreadEngineError):
    """Event sink failed to accept a spread result."""

    def __init__(self, message: str, delivery_method: Optional[str] = None,
                 pair: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.delivery_method = delivery_method
        self.pair = pair


class ConfigurationError(SpreadEngineError):
    """Configuration file could not be loaded or failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
