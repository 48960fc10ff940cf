"""Daily water-mark summary scheduling."""

import threading
from datetime import datetime, time, timezone, tzinfo
from typing import Callable, Optional
from zoneinfo import ZoneInfo

import structlog

from ..config.defaults import SummaryParams
from ..logging.config import log_water_mark_summary
from ..spreads.watermarks import WaterMarkTracker
from ..utils.time import parse_report_time, seconds_until_next_report

logger = structlog.get_logger(__name__)


class SummaryScheduler:
    """
    Logs the water-mark summary once a day at a fixed wall-clock time.

    Runs on a daemon thread and only pulls summary_blocks() from the tracker.
    A disabled scheduler never starts its thread; run_once() still works.
    """

    def __init__(
        self,
        tracker: WaterMarkTracker,
        report_time: time = time(0, 0),
        tz: tzinfo = timezone.utc,
        clock: Optional[Callable[[], datetime]] = None,
        enabled: bool = True,
    ) -> None:
        self.tracker = tracker
        self.enabled = enabled
        self.report_time = report_time
        self.tz = tz
        self._clock = clock
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.reports_logged = 0

    @classmethod
    def from_config(
        cls,
        tracker: WaterMarkTracker,
        params: SummaryParams,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> "SummaryScheduler":
        """Build a scheduler from the summary section of spread.yaml."""
        return cls(
            tracker,
            report_time=parse_report_time(params.report_time),
            tz=ZoneInfo(params.timezone),
            clock=clock,
            enabled=params.enabled,
        )

    def run_once(self) -> dict[str, str]:
        """Log the current summary immediately and return the rendered blocks."""
        blocks = self.tracker.summary_blocks()
        log_water_mark_summary(logger, blocks)
        self.reports_logged += 1
        return blocks

    def seconds_until_next_run(self) -> float:
        now = self._clock() if self._clock else None
        return seconds_until_next_report(self.report_time, self.tz, now=now)

    def start(self) -> None:
        """Start the reporting thread; no-op if disabled or already running."""
        if not self.enabled:
            logger.info("Water-mark summary disabled")
            return

        if self._thread is not None and self._thread.is_alive():
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name="water-mark-summary", daemon=True
        )
        self._thread.start()
        logger.info(
            "Water-mark summary scheduled",
            report_time=self.report_time.strftime("%H:%M"),
            timezone=str(self.tz)
        )

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop the reporting thread and wait for it to exit."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self) -> None:
        while not self._stop_event.wait(self.seconds_until_next_run()):
            self.run_once()
