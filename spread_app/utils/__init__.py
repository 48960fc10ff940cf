"""
Utility functions module.

Time Semantics:
- Quote timestamps from exchanges are authoritative for freshness checks
- Wall-clock time decides staleness cut-offs and when reports are due
"""
