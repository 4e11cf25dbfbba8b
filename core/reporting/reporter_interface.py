from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any

from core.streaming.models import TrendObservation


class ReporterInterface(ABC):
    @abstractmethod
    def report_observation(self, observation: TrendObservation) -> None:
        """Called once for every classified price sample."""
        pass

    @abstractmethod
    def report_failure(self, error: Exception) -> None:
        """Called once for the first failure of a run of consecutive stream failures."""
        pass

    @abstractmethod
    def report_fatal(self, message: str) -> None:
        """Called when the stream cannot be started at all."""
        pass

    def report_configuration(self, config: dict[str, Any]) -> None:
        pass

    def report_grid_levels(self, levels: list[Decimal], quote_currency: str) -> None:
        pass
