"""
Data models module.

Quotes, exchange pair keys, spread results and fee lookups shared by the
calculator, the water-mark tracker and the evaluation engine.
"""
