from decimal import Decimal
from unittest.mock import AsyncMock, Mock, patch

from ccxt.base.errors import NetworkError
import pytest

from core.services.exceptions import DataFetchError, UnsupportedExchangeError
from core.services.exchange_service_factory import ExchangeServiceFactory
from core.services.live_exchange_service import LiveExchangeService


class TestLiveExchangeService:
    @pytest.fixture
    def config_manager(self):
        config_manager = Mock()
        config_manager.get_exchange_name.return_value = "bitfinex"
        config_manager.get_exchange_options.return_value = {"newUpdates": False}
        return config_manager

    @pytest.fixture
    def mock_exchange(self):
        exchange = Mock()
        exchange.name = "Bitfinex"
        exchange.has = {"watchTicker": True}
        exchange.milliseconds.return_value = 1682596800000
        exchange.iso8601.return_value = "2023-04-27T12:00:00.000Z"
        exchange.close = AsyncMock()
        return exchange

    @pytest.fixture
    def service(self, config_manager, mock_exchange, monkeypatch):
        monkeypatch.delenv("EXCHANGE_API_KEY", raising=False)
        monkeypatch.delenv("EXCHANGE_SECRET_KEY", raising=False)
        with patch("core.services.live_exchange_service.ccxtpro") as mock_ccxtpro:
            mock_ccxtpro.bitfinex.return_value = mock_exchange
            service = LiveExchangeService(config_manager)
            mock_ccxtpro.bitfinex.assert_called_once_with({"newUpdates": False})
        return service

    def test_unknown_exchange_is_unsupported(self, config_manager):
        config_manager.get_exchange_name.return_value = "nope"

        with patch("core.services.live_exchange_service.ccxtpro", new=Mock(spec=[])):
            with pytest.raises(UnsupportedExchangeError, match="nope"):
                LiveExchangeService(config_manager)

    def test_credentials_are_forwarded_when_configured(self, config_manager, mock_exchange, monkeypatch):
        monkeypatch.setenv("EXCHANGE_API_KEY", "key")
        monkeypatch.setenv("EXCHANGE_SECRET_KEY", "secret")

        with patch("core.services.live_exchange_service.ccxtpro") as mock_ccxtpro:
            mock_ccxtpro.bitfinex.return_value = mock_exchange
            LiveExchangeService(config_manager)

        mock_ccxtpro.bitfinex.assert_called_once_with({"newUpdates": False, "apiKey": "key", "secret": "secret"})

    def test_factory_creates_live_service(self, config_manager, mock_exchange):
        with patch("core.services.live_exchange_service.ccxtpro") as mock_ccxtpro:
            mock_ccxtpro.bitfinex.return_value = mock_exchange
            service = ExchangeServiceFactory.create_exchange_service(config_manager)

        assert isinstance(service, LiveExchangeService)

    def test_name_and_capability(self, service, mock_exchange):
        assert service.name == "Bitfinex"
        assert service.supports_ticker_stream() is True

        mock_exchange.has = {"watchTicker": False}
        assert service.supports_ticker_stream() is False

        mock_exchange.has = {}
        assert service.supports_ticker_stream() is False

    def test_current_time_uses_exchange_clock(self, service, mock_exchange):
        assert service.current_time_iso8601() == "2023-04-27T12:00:00.000Z"
        mock_exchange.iso8601.assert_called_once_with(1682596800000)

    @pytest.mark.asyncio
    async def test_subscribe_yields_samples_until_failure(self, service, mock_exchange):
        mock_exchange.watch_ticker = AsyncMock(
            side_effect=[{"last": 29000.5}, {"last": 28999}, NetworkError("socket closed")]
        )

        stream = service.subscribe("BTCF0/USTF0")
        first = await anext(stream)
        second = await anext(stream)

        assert first.price == Decimal("29000.5")
        assert first.observed_at == "2023-04-27T12:00:00.000Z"
        assert second.price == Decimal("28999")

        with pytest.raises(DataFetchError, match="socket closed"):
            await anext(stream)

        mock_exchange.watch_ticker.assert_awaited_with("BTCF0/USTF0")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("ticker", [{"last": None}, {}, {"last": "garbage"}, None])
    async def test_malformed_ticker_raises_data_fetch_error(self, service, mock_exchange, ticker):
        mock_exchange.watch_ticker = AsyncMock(return_value=ticker)

        with pytest.raises(DataFetchError):
            await anext(service.subscribe("BTCF0/USTF0"))

    @pytest.mark.asyncio
    async def test_close_connection(self, service, mock_exchange):
        await service.close_connection()

        mock_exchange.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close_connection_logs_errors(self, service, mock_exchange):
        mock_exchange.close.side_effect = RuntimeError("already closed")

        with patch.object(service.logger, "error") as mock_logger_error:
            await service.close_connection()

        assert mock_logger_error.called
