"""
Event sink configuration.

The `delivery` section of spread.yaml lists destinations; each one names a
sink method (stdout or file) and the options for that sink. Results can be
limited to some instruments per destination.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from ..errors import ConfigurationError


class DeliveryMethod(Enum):
    """Supported event sink types."""
    FILE_OUTPUT = "file_output"
    STDOUT = "stdout"


@dataclass(frozen=True)
class FileDeliveryConfig:
    """Spread results appended to a file."""
    output_path: str
    format: str = "jsonl"  # json, jsonl
    append_mode: bool = True
    create_dirs: bool = True


@dataclass(frozen=True)
class StdoutDeliveryConfig:
    """Spread results printed to stdout."""
    format: str = "json"  # json, pretty
    include_timestamp: bool = True


SinkConfig = Union[FileDeliveryConfig, StdoutDeliveryConfig]


@dataclass(frozen=True)
class DeliveryDestination:
    """One configured event sink."""
    name: str
    method: DeliveryMethod
    config: SinkConfig
    enabled: bool = True
    instruments_filter: Optional[list[str]] = None


@dataclass(frozen=True)
class SpreadDeliveryConfig:
    """All configured event sinks."""
    destinations: list[DeliveryDestination]
    enabled: bool = True


def create_stdout_destination(
    name: str = "stdout",
    format: str = "json",
    enabled: bool = True,
    instruments_filter: Optional[list[str]] = None,
    **kwargs
) -> DeliveryDestination:
    """Stdout sink destination."""
    return DeliveryDestination(
        name=name,
        method=DeliveryMethod.STDOUT,
        config=StdoutDeliveryConfig(format=format, **kwargs),
        enabled=enabled,
        instruments_filter=instruments_filter,
    )


def create_file_destination(
    name: str,
    output_path: str,
    format: str = "jsonl",
    enabled: bool = True,
    instruments_filter: Optional[list[str]] = None,
    **kwargs
) -> DeliveryDestination:
    """File sink destination."""
    return DeliveryDestination(
        name=name,
        method=DeliveryMethod.FILE_OUTPUT,
        config=FileDeliveryConfig(output_path=output_path, format=format, **kwargs),
        enabled=enabled,
        instruments_filter=instruments_filter,
    )


def get_default_delivery_config() -> SpreadDeliveryConfig:
    """Print every result to stdout as JSON."""
    return SpreadDeliveryConfig(destinations=[create_stdout_destination()])


def parse_destination(entry: dict[str, Any]) -> DeliveryDestination:
    """
    Build a destination from one entry of the delivery section.

    Raises:
        ConfigurationError: Unknown method, missing output path or unknown options
    """
    if not isinstance(entry, dict):
        raise ConfigurationError(f"Delivery destination must be a mapping, got {entry!r}")

    try:
        method = DeliveryMethod(entry.get("method"))
    except ValueError as e:
        raise ConfigurationError(
            f"Unknown delivery method {entry.get('method')!r}",
            context={"destination": entry.get("name")}
        ) from e

    name = entry.get("name", method.value)
    options = dict(entry.get("config") or {})
    common = {
        "enabled": entry.get("enabled", True),
        "instruments_filter": entry.get("instruments_filter"),
    }

    try:
        if method == DeliveryMethod.FILE_OUTPUT:
            if "output_path" not in options:
                raise ConfigurationError(
                    f"File destination {name!r} needs an output_path",
                    context={"destination": name}
                )
            return create_file_destination(name, options.pop("output_path"), **options, **common)
        return create_stdout_destination(name, **options, **common)
    except TypeError as e:
        raise ConfigurationError(
            f"Invalid options for destination {name!r}: {e}",
            context={"destination": name}
        ) from e


def parse_delivery_config(section: Optional[dict[str, Any]]) -> SpreadDeliveryConfig:
    """Build sink configuration from the delivery section, stdout if it is absent."""
    if not section:
        return get_default_delivery_config()

    return SpreadDeliveryConfig(
        destinations=[parse_destination(entry) for entry in section.get("destinations", []) or []],
        enabled=section.get("enabled", True),
    )
