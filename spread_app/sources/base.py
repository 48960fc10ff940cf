"""Interfaces of the market data and fee collaborators."""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

from ..data.models import Quote


class QuoteSource(ABC):
    """Provides the current quote for an exchange and instrument."""

    @abstractmethod
    def get_quote(self, exchange: str, instrument: str) -> Optional[Quote]:
        """
        Fetch the latest quote.

        Returns:
            Latest quote, or None if the exchange has none for the instrument
        """

    @abstractmethod
    def is_invalid(self, quote: Optional[Quote]) -> bool:
        """True if the quote is missing, incomplete or stale."""


class FeeSource(ABC):
    """Provides trading fee fractions for an exchange and instrument."""

    @abstractmethod
    def get_cached_fee(self, exchange: str, instrument: str) -> Optional[Decimal]:
        """Cached fee fraction, or None on a cache miss."""

    @abstractmethod
    def get_fee(self, exchange: str, instrument: str, is_buy: bool) -> Optional[Decimal]:
        """Fetch the fee fraction directly, bypassing the cache."""
