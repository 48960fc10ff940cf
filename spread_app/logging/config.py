"""
Centralized logging configuration for the spread engine.

This module provides standardized logging configuration using structlog
for all components. All logging throughout the system should use this
configuration to ensure consistent formatting and structured logging.
"""
import logging
import sys
from typing import TYPE_CHECKING, Optional

import structlog
from structlog.types import FilteringBoundLogger

if TYPE_CHECKING:
    from ..config.defaults import LoggingParams
    from ..data.models import SpreadResult


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging_from_params(params: "LoggingParams") -> None:
    """
    Configure logging from the logging section of spread.yaml.

    Args:
        params: Validated logging parameters
    """
    configure_logging(
        level=params.level,
        format_json=params.format_json,
        include_timestamp=params.include_timestamp,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_spread_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound with spread engine context.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for spread evaluation
    """
    return get_logger(name).bind(subsystem="spread_engine")


def log_spread_result(logger: FilteringBoundLogger, result: "SpreadResult") -> None:
    """
    Log a computed spread with standardized fields.

    Args:
        logger: Structlog logger instance
        result: Computed spread result
    """
    logger.debug(
        "Spread computed",
        pair=str(result.key),
        entry_spread=str(result.entry_spread),
        exit_spread=str(result.exit_spread),
        long_ask=str(result.long_quote.ask),
        long_bid=str(result.long_quote.bid),
        short_ask=str(result.short_quote.ask),
        short_bid=str(result.short_quote.bid),
    )


def log_water_mark_summary(logger: FilteringBoundLogger, blocks: dict[str, str]) -> None:
    """
    Log each water-mark block as its own record.

    Args:
        logger: Structlog logger instance
        blocks: Rendered blocks keyed by title
    """
    for title, block in blocks.items():
        logger.info(f"{title}:\n{block}", event_type="water_mark_summary", block=title)
