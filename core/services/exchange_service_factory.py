from config.config_manager import ConfigManager

from .exchange_interface import ExchangeInterface
from .live_exchange_service import LiveExchangeService


class ExchangeServiceFactory:
    @staticmethod
    def create_exchange_service(config_manager: ConfigManager) -> ExchangeInterface:
        return LiveExchangeService(config_manager)
