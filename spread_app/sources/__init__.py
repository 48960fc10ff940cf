"""Quote and fee collaborators"""

from .base import FeeSource, QuoteSource
from .memory import InMemoryFeeSource, InMemoryQuoteSource

__all__ = [
    "FeeSource",
    "QuoteSource",
    "InMemoryFeeSource",
    "InMemoryQuoteSource",
]
