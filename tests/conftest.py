import asyncio
from decimal import Decimal

import pytest

from core.reporting.reporter_interface import ReporterInterface
from core.services.exchange_interface import ExchangeInterface
from core.streaming.models import PriceSample


class ScriptedExchange(ExchangeInterface):
    """
    Exchange whose subscriptions replay scripted sessions. Each session is a list of
    prices and exceptions; an exception is raised in place of the next sample.
    Once the script is exhausted a subscription blocks until cancelled.
    """

    def __init__(self, sessions=None, supports_ticker_stream: bool = True):
        self.sessions = list(sessions or [])
        self._supports_ticker_stream = supports_ticker_stream
        self.subscribe_calls: list[str] = []
        self.subscribed = asyncio.Event()
        self.closed = False
        self._clock = 0

    @property
    def name(self) -> str:
        return "Scripted"

    def supports_ticker_stream(self) -> bool:
        return self._supports_ticker_stream

    async def subscribe(self, pair: str):
        self.subscribe_calls.append(pair)
        self.subscribed.set()
        if not self.sessions:
            await asyncio.Event().wait()
            return

        for item in self.sessions.pop(0):
            if isinstance(item, BaseException):
                raise item
            yield PriceSample(price=Decimal(str(item)), observed_at=self.current_time_iso8601())

    def current_time_iso8601(self) -> str:
        self._clock += 1
        return f"2023-04-27T12:00:{self._clock:02d}.000Z"

    async def close_connection(self) -> None:
        self.closed = True


class RecordingReporter(ReporterInterface):
    def __init__(self, on_observation=None):
        self.observations = []
        self.failures = []
        self.fatals = []
        self.configurations = []
        self.grid_levels = []
        self.on_observation = on_observation

    def report_observation(self, observation):
        self.observations.append(observation)
        if self.on_observation:
            self.on_observation(observation)

    def report_failure(self, error):
        self.failures.append(error)

    def report_fatal(self, message):
        self.fatals.append(message)

    def report_configuration(self, config):
        self.configurations.append(config)

    def report_grid_levels(self, levels, quote_currency):
        self.grid_levels.append((levels, quote_currency))


@pytest.fixture
def scripted_exchange():
    return ScriptedExchange


@pytest.fixture
def recording_reporter():
    return RecordingReporter


@pytest.fixture
def valid_config():
    return {
        "baseCurrency": "BTCF0",
        "quoteCurrency": "USTF0",
        "centralPrice": 29000,
        "amountAsQuote": Decimal("2.0"),
        "upperLevelsCount": 2,
        "downLevelsCount": 2,
        "interLevelsDelta": 200,
    }
