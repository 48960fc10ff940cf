"""Configuration validation utilities."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..utils.time import parse_report_time

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def parse_fee_fraction(value: Any) -> Optional[Decimal]:
    """Decimal fee fraction in [0, 1), or None if value is not one."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
        return None
    try:
        fee = Decimal(str(value))
    except InvalidOperation:
        return None
    if not fee.is_finite() or fee < 0 or fee >= 1:
        return None
    return fee


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_quote_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate quote freshness parameters."""
        errors = []

        if "max_age_seconds" in params:
            value = params["max_age_seconds"]
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                errors.append(ValidationError(
                    field="max_age_seconds",
                    message="Must be a positive integer",
                    value=value
                ))

        if "max_future_skew_seconds" in params:
            value = params["max_future_skew_seconds"]
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                errors.append(ValidationError(
                    field="max_future_skew_seconds",
                    message="Must be a non-negative integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_fee_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate fee fractions."""
        errors = []

        if "default_fee" in params:
            value = params["default_fee"]
            if parse_fee_fraction(value) is None:
                errors.append(ValidationError(
                    field="default_fee",
                    message="Must be a fee fraction in [0, 1)",
                    value=value
                ))

        overrides = params.get("fee_overrides", {})
        if not isinstance(overrides, dict):
            errors.append(ValidationError(
                field="fee_overrides",
                message="Must be a mapping of exchange to fee fraction",
                value=overrides
            ))
        else:
            for exchange, value in overrides.items():
                if parse_fee_fraction(value) is None:
                    errors.append(ValidationError(
                        field=f"fee_overrides.{exchange}",
                        message="Must be a fee fraction in [0, 1)",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_summary_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate daily summary parameters."""
        errors = []

        if "enabled" in params and not isinstance(params["enabled"], bool):
            errors.append(ValidationError(
                field="enabled",
                message="Must be a boolean",
                value=params["enabled"]
            ))

        if "report_time" in params:
            value = params["report_time"]
            try:
                parse_report_time(str(value))
            except ValueError:
                errors.append(ValidationError(
                    field="report_time",
                    message="Must be a wall-clock time formatted HH:MM",
                    value=value
                ))

        if "timezone" in params:
            value = params["timezone"]
            try:
                ZoneInfo(str(value))
            except (ZoneInfoNotFoundError, ValueError):
                errors.append(ValidationError(
                    field="timezone",
                    message="Must be an IANA time zone name",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                errors.append(ValidationError(
                    field="level",
                    message=f"Must be one of {', '.join(LOG_LEVELS)}",
                    value=value
                ))

        for flag in ("format_json", "include_timestamp"):
            if flag in params and not isinstance(params[flag], bool):
                errors.append(ValidationError(
                    field=flag,
                    message="Must be a boolean",
                    value=params[flag]
                ))

        return errors

    @staticmethod
    def validate_trade_combinations(combinations: Any) -> list[ValidationError]:
        """Validate the long/short/instruments trade combination list."""
        errors = []

        if not isinstance(combinations, list):
            return [ValidationError(
                field="trade_combinations",
                message="Must be a list",
                value=combinations
            )]

        for index, combination in enumerate(combinations):
            prefix = f"trade_combinations[{index}]"
            if not isinstance(combination, dict):
                errors.append(ValidationError(
                    field=prefix,
                    message="Must be a mapping with long, short and instruments",
                    value=combination
                ))
                continue

            long_exchange = combination.get("long")
            short_exchange = combination.get("short")
            for name, value in (("long", long_exchange), ("short", short_exchange)):
                if not isinstance(value, str) or not value.strip():
                    errors.append(ValidationError(
                        field=f"{prefix}.{name}",
                        message="Must be a non-empty exchange name",
                        value=value
                    ))

            if isinstance(long_exchange, str) and long_exchange == short_exchange:
                errors.append(ValidationError(
                    field=prefix,
                    message="Long and short exchanges must differ",
                    value=long_exchange
                ))

            instruments = combination.get("instruments")
            if (not isinstance(instruments, list) or not instruments
                    or not all(isinstance(i, str) and i.strip() for i in instruments)):
                errors.append(ValidationError(
                    field=f"{prefix}.instruments",
                    message="Must be a non-empty list of instrument names",
                    value=instruments
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "quotes" in config:
            errors.extend(ConfigValidator.validate_quote_params(config["quotes"]))

        if "fees" in config:
            errors.extend(ConfigValidator.validate_fee_params(config["fees"]))

        if "summary" in config:
            errors.extend(ConfigValidator.validate_summary_params(config["summary"]))

        if "logging" in config:
            errors.extend(ConfigValidator.validate_logging_params(config["logging"]))

        if "trade_combinations" in config:
            errors.extend(ConfigValidator.validate_trade_combinations(config["trade_combinations"]))

        return errors
