"""
Logging configuration and utilities for the spread engine.
"""
from .config import configure_logging, configure_logging_from_params, get_logger, get_spread_logger

__all__ = ["configure_logging", "configure_logging_from_params", "get_logger", "get_spread_logger"]
