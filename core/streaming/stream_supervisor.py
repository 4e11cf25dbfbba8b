import asyncio
from decimal import Decimal
import logging

from core.reporting.reporter_interface import ReporterInterface
from core.services.exceptions import UnsupportedTickerStreamError
from core.services.exchange_interface import ExchangeInterface

from .models import PriceSample, TrendObservation
from .trend_classifier import classify_trend


class StreamSupervisor:
    """
    Keeps one ticker subscription alive for as long as it runs.

    Every sample is classified against the last successfully processed price and
    forwarded to the reporter. Any error raised while waiting for the next sample
    ends the current subscription and a new one is opened right away. Only the
    first failure of a run of consecutive failures is reported; the next
    successful sample re-arms reporting.
    """

    def __init__(
        self,
        exchange_service: ExchangeInterface,
        reporter: ReporterInterface,
        pair: str,
        retry_delay: float = 0.0,
        three_way_trend: bool = False,
    ):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.exchange_service = exchange_service
        self.reporter = reporter
        self.pair = pair
        self.retry_delay = retry_delay
        self.three_way_trend = three_way_trend
        self.previous_price: Decimal | None = None
        self.suppressing_repeats = False
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    def check_capability(self) -> None:
        if not self.exchange_service.supports_ticker_stream():
            message = (
                f"The exchange {self.exchange_service.name} does not support ticker subscriptions (watchTicker)."
            )
            self.reporter.report_fatal(message)
            raise UnsupportedTickerStreamError(message)

    async def run(self) -> None:
        self.check_capability()

        self._running = True
        self.previous_price = None
        self.suppressing_repeats = False
        self.logger.info(f"Receiving {self.pair} prices from {self.exchange_service.name}...")

        try:
            while self._running:
                await self._run_session()
                if self._running:
                    # A zero delay still yields to the event loop between subscriptions.
                    await asyncio.sleep(self.retry_delay)
        finally:
            self._running = False
            self.logger.info(f"Price stream for {self.pair} stopped.")

    def stop(self) -> None:
        self._running = False

    async def _run_session(self) -> None:
        try:
            stream = aiter(self.exchange_service.subscribe(self.pair))
        except Exception as e:
            self._handle_failure(e)
            return

        try:
            while self._running:
                try:
                    sample = await anext(stream)
                except StopAsyncIteration:
                    self.logger.debug(f"Ticker stream for {self.pair} ended, resubscribing.")
                    return
                except Exception as e:
                    self._handle_failure(e)
                    return

                self._handle_sample(sample)
        finally:
            await self._close_stream(stream)

    async def _close_stream(self, stream) -> None:
        # Plain async iterators have nothing to close, only generators do.
        aclose = getattr(stream, "aclose", None)
        if aclose is None:
            return

        try:
            await aclose()
        except Exception as e:
            self.logger.warning(f"Error while closing the ticker stream for {self.pair}: {e}")

    def _handle_sample(self, sample: PriceSample) -> None:
        direction = classify_trend(sample.price, self.previous_price, three_way=self.three_way_trend)
        self.previous_price = sample.price
        self.suppressing_repeats = False
        self.reporter.report_observation(
            TrendObservation(price=sample.price, observed_at=sample.observed_at, direction=direction)
        )

    def _handle_failure(self, error: Exception) -> None:
        if self.suppressing_repeats:
            self.logger.debug(f"Stream for {self.pair} still failing: {error}")
            return

        self.suppressing_repeats = True
        self.reporter.report_failure(error)
