"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from ..data.models import ExchangePairKey
from ..errors import ConfigurationError
from .defaults import (
    DefaultConfig,
    FeeParams,
    LoggingParams,
    QuoteParams,
    SummaryParams,
    get_default_config,
)
from .delivery import SpreadDeliveryConfig, parse_delivery_config
from .validation import ConfigValidator

CONFIG_FILENAME = "spread.yaml"


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_file(self) -> dict[str, Any]:
        """Load the raw YAML configuration file, empty if it does not exist."""
        config_file = self.config_dir / CONFIG_FILENAME

        if not config_file.exists():
            return {}

        try:
            with open(config_file) as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Could not parse {config_file}: {e}",
                context={"path": str(config_file)}
            ) from e

        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise ConfigurationError(
                f"{config_file} must contain a mapping at top level",
                context={"path": str(config_file)}
            )
        return raw

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Runtime overrides (highest priority)
        2. spread.yaml in the config directory
        3. Global defaults (lowest priority)
        """
        # Start with global defaults
        config = self._dataclass_to_dict(self.defaults)

        # Apply file configuration
        config = self._deep_merge(config, self.load_file())

        # Apply runtime overrides
        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load_config(self, overrides: Optional[dict[str, Any]] = None) -> DefaultConfig:
        """Merge, validate and build the typed configuration."""
        config = self.merge_config(overrides)

        errors = ConfigValidator.validate_config(config)
        if errors:
            raise ConfigurationError(
                "Invalid configuration: " + "; ".join(
                    f"{err.field}: {err.message} (got: {err.value})" for err in errors
                ),
                errors=errors
            )

        try:
            return DefaultConfig(
                quotes=QuoteParams(**config.get("quotes", {})),
                fees=FeeParams(**config.get("fees", {})),
                summary=SummaryParams(**config.get("summary", {})),
                logging=LoggingParams(**config.get("logging", {})),
            )
        except TypeError as e:
            # Unknown keys in one of the sections
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def load_trade_combinations(self, overrides: Optional[dict[str, Any]] = None) -> list[ExchangePairKey]:
        """
        Expand the configured trade combinations into exchange pair keys.

        Each entry names a long exchange, a short exchange and the instruments
        traded between them.
        """
        config = self.merge_config(overrides)
        combinations = config.get("trade_combinations", []) or []

        errors = ConfigValidator.validate_trade_combinations(combinations)
        if errors:
            raise ConfigurationError(
                "Invalid trade combinations: " + "; ".join(
                    f"{err.field}: {err.message}" for err in errors
                ),
                errors=errors
            )

        pairs = []
        for combination in combinations:
            for instrument in combination["instruments"]:
                pair = ExchangePairKey(
                    long_exchange=combination["long"],
                    short_exchange=combination["short"],
                    instrument=instrument,
                )
                if pair not in pairs:
                    pairs.append(pair)
        return pairs

    def load_delivery_config(self, overrides: Optional[dict[str, Any]] = None) -> SpreadDeliveryConfig:
        """Build event sink configuration; stdout only when none is configured."""
        return parse_delivery_config(self.merge_config(overrides).get("delivery"))

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                elif isinstance(value, dict):
                    result[field_name] = dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
