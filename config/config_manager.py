from decimal import Decimal
import json
import logging
import os
from typing import Any

from core.grid_management.grid_levels import GridConfig

from .config_template import CONFIGURATION_TEMPLATE, DEFAULT_EXCHANGE, DEFAULT_EXCHANGE_OPTIONS
from .config_validator import ConfigValidator, to_count, to_decimal
from .exceptions import ConfigFileNotFoundError, ConfigParseError


def _to_json_numbers(value: Any) -> Any:
    """Turns the Decimals produced by ``parse_float`` back into floats for third-party options."""
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, dict):
        return {key: _to_json_numbers(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_to_json_numbers(item) for item in value]
    return value


class ConfigManager:
    def __init__(self, config_file: str, config_validator: ConfigValidator):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.config_file = config_file
        self.config_validator = config_validator
        self.config: dict[str, Any] = {}
        self.load_config()

    def load_config(self) -> None:
        if not os.path.isfile(self.config_file):
            self._write_template()
            raise ConfigFileNotFoundError(
                self.config_file,
                "Configuration file was missing and a template has been created. "
                "Review it before running the bot again",
            )

        try:
            with open(self.config_file, encoding="utf-8") as file:
                self.config = json.load(file, parse_float=Decimal)
        except json.JSONDecodeError as e:
            self.logger.error(f"Failed to parse configuration file {self.config_file}: {e}")
            raise ConfigParseError(self.config_file, e) from e

        self.config_validator.validate(self.config)
        self.logger.info(f"Configuration loaded from {self.config_file}")

    def _write_template(self) -> None:
        directory = os.path.dirname(self.config_file)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(self.config_file, "w", encoding="utf-8") as file:
            json.dump(CONFIGURATION_TEMPLATE, file, indent=4)

        self.logger.warning(f"Configuration file not found. A template was written to {self.config_file}")

    def get_base_currency(self) -> str:
        return self.config["baseCurrency"]

    def get_quote_currency(self) -> str:
        return self.config["quoteCurrency"]

    def get_trading_pair(self) -> str:
        return f"{self.get_base_currency()}/{self.get_quote_currency()}"

    def get_central_price(self) -> Decimal:
        return to_decimal(self.config["centralPrice"])

    def get_amount_as_quote(self) -> Decimal:
        return to_decimal(self.config["amountAsQuote"])

    def get_upper_levels_count(self) -> int:
        return to_count(self.config["upperLevelsCount"])

    def get_down_levels_count(self) -> int:
        return to_count(self.config["downLevelsCount"])

    def get_inter_levels_delta(self) -> Decimal:
        return to_decimal(self.config["interLevelsDelta"])

    def get_grid_config(self) -> GridConfig:
        return GridConfig(
            central_price=self.get_central_price(),
            inter_level_delta=self.get_inter_levels_delta(),
            upper_count=self.get_upper_levels_count(),
            down_count=self.get_down_levels_count(),
        )

    def get_exchange_name(self) -> str:
        return self.config.get("exchange", DEFAULT_EXCHANGE).strip().lower()

    def get_exchange_options(self) -> dict[str, Any]:
        exchange_options = _to_json_numbers(self.config.get("exchangeOptions", {}))
        return {**DEFAULT_EXCHANGE_OPTIONS, **exchange_options}

    def get_retry_delay(self) -> float:
        return float(to_decimal(self.config.get("retryDelaySeconds", 0)))

    def is_flat_classification_enabled(self) -> bool:
        return self.config.get("classifyFlatMoves", False)
