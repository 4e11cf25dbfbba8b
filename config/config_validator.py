from decimal import Decimal, InvalidOperation
import logging
from typing import Any

from .config_template import MAX_TOTAL_LEVELS, REQUIRED_KEYS
from .exceptions import ConfigValidationError


def to_decimal(value: Any) -> Decimal | None:
    """Converts a JSON value to Decimal, or returns None when it is not a finite number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            return None
    else:
        return None
    return result if result.is_finite() else None


def to_count(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, Decimal) and value == value.to_integral_value():
        return int(value)
    return None


class ConfigValidator:
    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    def validate(self, config: dict[str, Any]) -> None:
        if not isinstance(config, dict):
            raise ConfigValidationError("Configuration must be a JSON object")

        missing_fields = self._validate_required_fields(config)
        if missing_fields:
            raise ConfigValidationError(missing_fields=missing_fields)

        invalid_fields = []
        invalid_fields += self._validate_currencies(config)
        invalid_fields += self._validate_prices(config)
        invalid_fields += self._validate_level_counts(config)
        invalid_fields += self._validate_optional_settings(config)

        if not invalid_fields:
            invalid_fields += self._validate_grid_bounds(config)

        if invalid_fields:
            raise ConfigValidationError(invalid_fields=invalid_fields)

    def _validate_required_fields(self, config: dict[str, Any]) -> list[str]:
        missing_fields = []
        for key in REQUIRED_KEYS:
            if key not in config:
                self.logger.error(f"Missing parameter '{key}' in the configuration file.")
                missing_fields.append(key)
        return missing_fields

    def _validate_currencies(self, config: dict[str, Any]) -> list[str]:
        invalid_fields = []
        for key in ("baseCurrency", "quoteCurrency"):
            value = config[key]
            if not isinstance(value, str) or not value.strip() or "/" in value:
                self.logger.error(f"'{key}' must be a non-empty currency symbol, got {value!r}.")
                invalid_fields.append(key)
        return invalid_fields

    def _validate_prices(self, config: dict[str, Any]) -> list[str]:
        invalid_fields = []
        for key in ("centralPrice", "amountAsQuote", "interLevelsDelta"):
            value = to_decimal(config[key])
            if value is None or value <= 0:
                self.logger.error(f"'{key}' must be a positive number, got {config[key]!r}.")
                invalid_fields.append(key)
        return invalid_fields

    def _validate_level_counts(self, config: dict[str, Any]) -> list[str]:
        invalid_fields = []
        for key in ("upperLevelsCount", "downLevelsCount"):
            value = to_count(config[key])
            if value is None or value < 0:
                self.logger.error(f"'{key}' must be a non-negative integer, got {config[key]!r}.")
                invalid_fields.append(key)
        return invalid_fields

    def _validate_optional_settings(self, config: dict[str, Any]) -> list[str]:
        invalid_fields = []

        exchange = config.get("exchange")
        if exchange is not None and (not isinstance(exchange, str) or not exchange.strip()):
            self.logger.error(f"'exchange' must be a ccxt exchange id, got {exchange!r}.")
            invalid_fields.append("exchange")

        exchange_options = config.get("exchangeOptions")
        if exchange_options is not None and not isinstance(exchange_options, dict):
            self.logger.error("'exchangeOptions' must be a JSON object.")
            invalid_fields.append("exchangeOptions")

        if "retryDelaySeconds" in config:
            retry_delay = to_decimal(config["retryDelaySeconds"])
            if retry_delay is None or retry_delay < 0:
                self.logger.error(
                    f"'retryDelaySeconds' must be a non-negative number, got {config['retryDelaySeconds']!r}."
                )
                invalid_fields.append("retryDelaySeconds")

        if "classifyFlatMoves" in config and not isinstance(config["classifyFlatMoves"], bool):
            self.logger.error("'classifyFlatMoves' must be true or false.")
            invalid_fields.append("classifyFlatMoves")

        return invalid_fields

    def _validate_grid_bounds(self, config: dict[str, Any]) -> list[str]:
        invalid_fields = []
        upper_count = to_count(config["upperLevelsCount"])
        down_count = to_count(config["downLevelsCount"])
        total_levels = upper_count + down_count + 1

        if total_levels > MAX_TOTAL_LEVELS:
            self.logger.error(f"Grid would have {total_levels} levels, the maximum allowed is {MAX_TOTAL_LEVELS}.")
            invalid_fields += ["upperLevelsCount", "downLevelsCount"]
            return invalid_fields

        central_price = to_decimal(config["centralPrice"])
        inter_levels_delta = to_decimal(config["interLevelsDelta"])
        lowest_level = central_price - inter_levels_delta * down_count
        if lowest_level <= 0:
            self.logger.error(
                f"The lowest grid level would be {lowest_level}. "
                f"Reduce 'downLevelsCount' or 'interLevelsDelta' so every level stays above zero."
            )
            invalid_fields.append("downLevelsCount")

        return invalid_fields
