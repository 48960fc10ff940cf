"""Event sinks for computed spread results."""

from ..config.delivery import DeliveryDestination, DeliveryMethod, SpreadDeliveryConfig
from .base import BaseSpreadDelivery, DeliveryResult, DeliveryStatus
from .file_delivery import FileSpreadDelivery
from .stdout_delivery import StdoutSpreadDelivery


def create_delivery(destination: DeliveryDestination) -> BaseSpreadDelivery:
    """Build the sink for a configured destination."""
    if destination.method == DeliveryMethod.FILE_OUTPUT:
        return FileSpreadDelivery(destination.name, destination.config,
                                  destination.instruments_filter)
    return StdoutSpreadDelivery(destination.name, destination.config,
                                destination.instruments_filter)


def create_deliveries(config: SpreadDeliveryConfig) -> list[BaseSpreadDelivery]:
    """Build every enabled sink."""
    if not config.enabled:
        return []
    return [create_delivery(d) for d in config.destinations if d.enabled]


__all__ = [
    "BaseSpreadDelivery",
    "DeliveryResult",
    "DeliveryStatus",
    "FileSpreadDelivery",
    "StdoutSpreadDelivery",
    "create_delivery",
    "create_deliveries",
]
