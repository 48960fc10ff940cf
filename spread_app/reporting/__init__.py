"""Periodic reporting of spread water marks."""

from .scheduler import SummaryScheduler

__all__ = ["SummaryScheduler"]
