from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from core.streaming.models import PriceSample


class ExchangeInterface(ABC):
    @property
    @abstractmethod
    def name(self) -> str:
        """Human readable name of the exchange."""
        pass

    @abstractmethod
    def supports_ticker_stream(self) -> bool:
        """Returns True when the exchange can push ticker updates over a WebSocket."""
        pass

    @abstractmethod
    def subscribe(self, pair: str) -> AsyncIterator[PriceSample]:
        """
        Subscribes to the ticker of the pair and yields one PriceSample per update.
        Transport failures are raised from the iterator and end the subscription.
        """
        pass

    @abstractmethod
    def current_time_iso8601(self) -> str:
        """Returns the exchange clock as an ISO 8601 string."""
        pass

    @abstractmethod
    async def close_connection(self) -> None:
        """Close current exchange connection."""
        pass
