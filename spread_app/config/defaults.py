"""Default configuration parameters for the spread evaluation system."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class QuoteParams:
    """Quote freshness parameters."""
    max_age_seconds: int = 60                        # Older quotes are invalid
    max_future_skew_seconds: int = 30                # Clock skew allowed for future timestamps


@dataclass(frozen=True)
class FeeParams:
    """Fee fallback parameters."""
    default_fee: str = "0.0020"                      # Used when no fee fetcher is configured
    fee_overrides: dict[str, str] = field(default_factory=dict)  # Per-exchange fee fractions


@dataclass(frozen=True)
class SummaryParams:
    """Daily water-mark summary parameters."""
    enabled: bool = True
    report_time: str = "00:00"                       # Midnight every day
    timezone: str = "UTC"


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False
    include_timestamp: bool = True


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    quotes: QuoteParams
    fees: FeeParams
    summary: SummaryParams
    logging: LoggingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        quotes=QuoteParams(),
        fees=FeeParams(),
        summary=SummaryParams(),
        logging=LoggingParams(),
    )
