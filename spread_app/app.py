"""
Application wiring for the spread engine.

Loads spread.yaml once and builds every component from it: logging, quote
and fee sources, the evaluation engine with its sinks, and the daily
water-mark summary scheduler.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional, Union

import structlog

from .config.defaults import DefaultConfig
from .config.loader import ConfigLoader
from .data.models import SpreadResult
from .engine import SpreadEvaluationEngine
from .logging.config import configure_logging_from_params
from .reporting.scheduler import SummaryScheduler
from .sources.base import FeeSource, QuoteSource
from .sources.memory import InMemoryFeeSource, InMemoryQuoteSource
from .spreads.watermarks import WaterMarkTracker

logger = structlog.get_logger(__name__)


@dataclass
class SpreadApp:
    """Engine and summary scheduler sharing one water-mark tracker."""

    config: DefaultConfig
    engine: SpreadEvaluationEngine
    scheduler: SummaryScheduler

    @classmethod
    def from_config(
        cls,
        quote_source: Optional[QuoteSource] = None,
        fee_source: Optional[FeeSource] = None,
        config_dir: Optional[Union[str, Path]] = None,
        overrides: Optional[dict[str, Any]] = None,
        clock: Optional[Callable[[], datetime]] = None,
        configure_logs: bool = True,
    ) -> "SpreadApp":
        """
        Build the application from spread.yaml.

        Sources default to the in-memory implementations configured from the
        quotes and fees sections.

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        config = ConfigLoader.create(Path(config_dir) if config_dir else None).load_config(overrides)

        if configure_logs:
            configure_logging_from_params(config.logging)

        tracker = WaterMarkTracker()
        engine = SpreadEvaluationEngine.from_config(
            quote_source=quote_source or InMemoryQuoteSource(config.quotes, clock=clock),
            fee_source=fee_source or InMemoryFeeSource(config.fees),
            config_dir=config_dir,
            overrides=overrides,
            tracker=tracker,
        )
        scheduler = SummaryScheduler.from_config(tracker, config.summary, clock=clock)

        logger.info(
            "Spread app configured",
            report_time=config.summary.report_time,
            timezone=config.summary.timezone,
            summary_enabled=config.summary.enabled
        )
        return cls(config=config, engine=engine, scheduler=scheduler)

    def run_cycle(self) -> list[SpreadResult]:
        """Evaluate every configured trade combination once."""
        return self.engine.evaluate_all()

    def start(self) -> None:
        self.scheduler.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        self.scheduler.stop(timeout)
