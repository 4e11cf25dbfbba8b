from decimal import Decimal
import logging
from typing import Any

from core.streaming.models import TrendObservation
from core.streaming.trend_classifier import Direction

from .reporter_interface import ReporterInterface

DIRECTION_MARKERS = {
    Direction.UP: "▲",
    Direction.DOWN: "▼",
    Direction.FLAT: "=",
}


class LoggingReporter(ReporterInterface):
    """
    Reporter that writes everything through the standard logging module.
    """

    def __init__(self, quote_currency: str, logger: logging.Logger | None = None):
        self.quote_currency = quote_currency
        self.logger = logger or logging.getLogger(self.__class__.__name__)

    def report_observation(self, observation: TrendObservation) -> None:
        marker = DIRECTION_MARKERS[observation.direction]
        self.logger.info(f"{observation.observed_at} {observation.price} {self.quote_currency} {marker}")

    def report_failure(self, error: Exception) -> None:
        self.logger.error(f"{type(error).__name__}: {error}")
        self.logger.warning("Waiting for the price stream to recover...")

    def report_fatal(self, message: str) -> None:
        self.logger.critical(message)

    def report_configuration(self, config: dict[str, Any]) -> None:
        self.logger.info("Current configuration:")
        for key, value in config.items():
            self.logger.info(f"  {key}: {value}")

    def report_grid_levels(self, levels: list[Decimal], quote_currency: str) -> None:
        self.logger.info("Grid levels:")
        self.logger.info(", ".join(str(level) for level in levels))
        self.logger.info(f"Highest level: {levels[-1]} {quote_currency}")
        self.logger.info(f"Lowest level: {levels[0]} {quote_currency}")
