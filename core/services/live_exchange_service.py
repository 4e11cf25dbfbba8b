from collections.abc import AsyncIterator
from decimal import Decimal, InvalidOperation
import logging
import os

from ccxt.base.errors import BaseError
import ccxt.pro as ccxtpro

from config.config_manager import ConfigManager
from core.streaming.models import PriceSample

from .exceptions import DataFetchError, UnsupportedExchangeError
from .exchange_interface import ExchangeInterface


class LiveExchangeService(ExchangeInterface):
    def __init__(self, config_manager: ConfigManager):
        self.config_manager = config_manager
        self.logger = logging.getLogger(self.__class__.__name__)
        self.exchange_name = self.config_manager.get_exchange_name()

        # Public tickers need no credentials, keys are only forwarded when configured.
        self.api_key = os.getenv("EXCHANGE_API_KEY")
        self.secret_key = os.getenv("EXCHANGE_SECRET_KEY")

        self.exchange = self._initialize_exchange()

    def _initialize_exchange(self):
        exchange_options = dict(self.config_manager.get_exchange_options())
        if self.api_key and self.secret_key:
            exchange_options["apiKey"] = self.api_key
            exchange_options["secret"] = self.secret_key

        try:
            exchange_class = getattr(ccxtpro, self.exchange_name)
        except AttributeError:
            raise UnsupportedExchangeError(f"The exchange '{self.exchange_name}' is not supported.") from None

        return exchange_class(exchange_options)

    @property
    def name(self) -> str:
        return getattr(self.exchange, "name", None) or self.exchange_name

    def supports_ticker_stream(self) -> bool:
        return bool(self.exchange.has.get("watchTicker"))

    async def subscribe(self, pair: str) -> AsyncIterator[PriceSample]:
        while True:
            try:
                ticker = await self.exchange.watch_ticker(pair)
            except BaseError as e:
                raise DataFetchError(f"Error receiving ticker for {pair}: {e!s}") from e

            yield PriceSample(price=self._parse_last_price(pair, ticker), observed_at=self.current_time_iso8601())

    def _parse_last_price(self, pair: str, ticker: dict) -> Decimal:
        last_price = ticker.get("last") if isinstance(ticker, dict) else None
        if last_price is None or isinstance(last_price, bool):
            raise DataFetchError(f"Ticker for {pair} carries no last price: {ticker!r}")

        try:
            return Decimal(str(last_price))
        except InvalidOperation as e:
            raise DataFetchError(f"Ticker for {pair} carries an invalid last price: {last_price!r}") from e

    def current_time_iso8601(self) -> str:
        return self.exchange.iso8601(self.exchange.milliseconds())

    async def close_connection(self) -> None:
        self.logger.info("Closing WebSocket connection...")
        try:
            await self.exchange.close()
        except Exception as e:
            self.logger.error(f"Error while closing WebSocket connection: {e}", exc_info=True)
