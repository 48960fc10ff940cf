"""Standard output spread delivery."""

import json
import sys
from datetime import datetime, timezone
from typing import Any, Optional

from ..config.delivery import StdoutDeliveryConfig
from .base import BaseSpreadDelivery, DeliveryResult, DeliveryStatus


class StdoutSpreadDelivery(BaseSpreadDelivery):
    """Print spread results to stdout."""

    def __init__(self, name: str, config: StdoutDeliveryConfig,
                 instruments_filter: Optional[list[str]] = None):
        super().__init__(name, config, instruments_filter)
        self.config: StdoutDeliveryConfig = config

    def deliver(self, events: list[dict[str, Any]]) -> list[DeliveryResult]:
        """Deliver events to stdout."""
        results = []

        for event in events:
            try:
                print(self._format_event(event), file=sys.stdout, flush=True)
                results.append(DeliveryResult(
                    status=DeliveryStatus.SUCCESS,
                    message="Printed to stdout"
                ))

            except (OSError, TypeError, ValueError) as e:
                self.logger.error(
                    "Failed to print spread to stdout",
                    delivery_name=self.name,
                    instrument=event.get("instrument"),
                    error=str(e)
                )
                results.append(DeliveryResult(
                    status=DeliveryStatus.FAILED,
                    message=f"Stdout error: {str(e)}",
                    error=e
                ))

        return results

    def _format_event(self, event: dict[str, Any]) -> str:
        """Format event for stdout output."""
        if self.config.format == "pretty":
            return (
                f"[{datetime.now(timezone.utc).isoformat()}] SPREAD: "
                f"{event['long_exchange']}/{event['short_exchange']} {event['instrument']} "
                f"entry={event['entry_spread']} exit={event['exit_spread']}"
            )

        if self.config.include_timestamp:
            event = {**event, "stdout_timestamp": datetime.now(timezone.utc).isoformat()}
        return json.dumps(event)

    def health_check(self) -> bool:
        """Check if stdout is available."""
        try:
            return sys.stdout.writable()
        except (OSError, ValueError):
            return False
