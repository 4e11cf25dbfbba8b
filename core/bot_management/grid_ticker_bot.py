import asyncio
from collections.abc import Callable
from decimal import Decimal
import logging
import traceback

from config.config_manager import ConfigManager
from core.grid_management.grid_manager import GridManager
from core.reporting.logging_reporter import LoggingReporter
from core.reporting.reporter_interface import ReporterInterface
from core.services.exceptions import UnsupportedExchangeError
from core.services.exchange_interface import ExchangeInterface
from core.services.exchange_service_factory import ExchangeServiceFactory
from core.streaming.stream_supervisor import StreamSupervisor


class GridTickerBot:
    def __init__(
        self,
        config_manager: ConfigManager,
        reporter: ReporterInterface | None = None,
        exchange_service: ExchangeInterface | None = None,
        confirm_func: Callable[[str], bool] | None = None,
    ):
        try:
            self.logger = logging.getLogger(self.__class__.__name__)
            self.config_manager = config_manager
            self.quote_currency: str = self.config_manager.get_quote_currency()
            self.trading_pair = self.config_manager.get_trading_pair()
            self.reporter = reporter or LoggingReporter(self.quote_currency)
            self.confirm_func = confirm_func
            self.grid_manager = GridManager(self.config_manager)
            self.grid_levels: list[Decimal] = []
            self.is_running = False
            self._stop_requested = False
            self._stream_task: asyncio.Task | None = None

            self.exchange_service = exchange_service or ExchangeServiceFactory.create_exchange_service(
                self.config_manager
            )
            self.stream_supervisor = StreamSupervisor(
                exchange_service=self.exchange_service,
                reporter=self.reporter,
                pair=self.trading_pair,
                retry_delay=self.config_manager.get_retry_delay(),
                three_way_trend=self.config_manager.is_flat_classification_enabled(),
            )

        except UnsupportedExchangeError as e:
            self.logger.error(f"{type(e).__name__}: {e}")
            raise

        except Exception:
            self.logger.error("An unexpected error occurred.")
            self.logger.error(traceback.format_exc())
            raise

    def prepare(self) -> bool:
        """
        Shows the configuration and the grid levels, asking the operator to confirm each.
        Returns False when the operator declines.
        """
        self.reporter.report_configuration(self.config_manager.config)
        if not self._confirm("Continue with the current configuration?"):
            self.logger.info("Configuration rejected by the operator.")
            return False

        self.grid_levels = self.grid_manager.initialize_grid_levels()
        self.reporter.report_grid_levels(self.grid_levels, self.quote_currency)
        if not self._confirm("Continue with these grid levels?"):
            self.logger.info("Grid levels rejected by the operator.")
            return False

        return True

    def _confirm(self, question: str) -> bool:
        if self.confirm_func is None:
            return True
        return self.confirm_func(question)

    async def run(self) -> None:
        self.is_running = True
        self._stop_requested = False
        self.logger.info(f"Receiving data from exchange {self.exchange_service.name}...")

        try:
            self._stream_task = asyncio.create_task(self.stream_supervisor.run())
            await self._stream_task

        except asyncio.CancelledError:
            if not self._stop_requested:
                raise
            self.logger.info("Price stream cancelled.")

        finally:
            self.is_running = False
            self._stream_task = None
            await self.exchange_service.close_connection()
            self.logger.info("Grid Ticker Bot has been stopped.")

    def stop(self) -> None:
        if not self.is_running:
            self.logger.info("Bot is not running. Nothing to stop.")
            return

        self.logger.info("Stopping Grid Ticker Bot...")
        self._stop_requested = True
        self.stream_supervisor.stop()
        if self._stream_task and not self._stream_task.done():
            self._stream_task.cancel()
