"""Base classes for spread result delivery."""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

import structlog

if TYPE_CHECKING:
    from ..data.models import SpreadResult


class DeliveryStatus(Enum):
    """Delivery status."""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class DeliveryResult:
    """Result of one delivery attempt."""
    status: DeliveryStatus
    message: Optional[str] = None
    delivery_time_ms: Optional[int] = None
    error: Optional[Exception] = None


class BaseSpreadDelivery(ABC):
    """
    Base class for event sinks receiving spread results.

    Publishing is fire-and-forget: failures are logged and counted but never
    raised back into the evaluation cycle.
    """

    def __init__(self, name: str, config: Any, instruments_filter: Optional[list[str]] = None):
        self.name = name
        self.config = config
        self.instruments_filter = instruments_filter
        self.logger = structlog.get_logger(f"spread.delivery.{name}")
        self._delivery_count = 0
        self._error_count = 0

    @abstractmethod
    def deliver(self, events: list[dict[str, Any]]) -> list[DeliveryResult]:
        """
        Deliver events to the configured destination.

        Args:
            events: Serialized spread results

        Returns:
            List of delivery results for each event
        """

    @abstractmethod
    def health_check(self) -> bool:
        """Check if delivery mechanism is healthy."""

    def accepts(self, result: "SpreadResult") -> bool:
        """Whether this sink wants results for the instrument."""
        return self.instruments_filter is None or result.instrument in self.instruments_filter

    def publish(self, result: "SpreadResult") -> Optional[DeliveryResult]:
        """Deliver one spread result without reporting failures to the caller."""
        if not self.accepts(result):
            return None

        start_time = time.time()
        try:
            delivery_results = self.deliver([result.to_dict()])
        except Exception as e:
            delivery_results = [DeliveryResult(
                status=DeliveryStatus.FAILED,
                message=f"Unexpected error: {str(e)}",
                error=e
            )]

        delivery_result = delivery_results[0] if delivery_results else DeliveryResult(
            status=DeliveryStatus.FAILED, message="No delivery result"
        )
        delivery_result.delivery_time_ms = int((time.time() - start_time) * 1000)

        if delivery_result.status == DeliveryStatus.SUCCESS:
            self._delivery_count += 1
        else:
            self._error_count += 1
            self.logger.warning(
                "Spread delivery failed",
                delivery_name=self.name,
                pair=str(result.key),
                error=delivery_result.message
            )

        return delivery_result

    def get_stats(self) -> dict[str, Any]:
        """Get delivery statistics."""
        return {
            "name": self.name,
            "delivery_count": self._delivery_count,
            "error_count": self._error_count,
            "success_rate": (
                self._delivery_count / (self._delivery_count + self._error_count)
                if (self._delivery_count + self._error_count) > 0 else 0.0
            )
        }

    def reset_stats(self):
        """Reset delivery statistics."""
        self._delivery_count = 0
        self._error_count = 0
