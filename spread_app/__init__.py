"""
Spread App - Fee-Aware Cross-Exchange Spread Evaluation Engine

Computes fee-adjusted entry and exit spreads between a long and a short
exchange for the same instrument, and tracks running high/low water marks
per exchange pair so entry and exit thresholds can be tuned.
"""

__version__ = "0.1.0"
__author__ = "Spread App Team"
