from decimal import Decimal
import logging

from config.config_manager import ConfigManager

from .grid_levels import GridConfig, generate_grid_levels


class GridManager:
    def __init__(self, config_manager: ConfigManager):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.config_manager: ConfigManager = config_manager
        self.grid_config: GridConfig = self.config_manager.get_grid_config()
        self.price_grids: list[Decimal] = []

    @property
    def central_price(self) -> Decimal:
        return self.grid_config.central_price

    def initialize_grid_levels(self) -> list[Decimal]:
        """
        Computes the price levels once for this run. The result is read-only afterwards.
        """
        self.price_grids = generate_grid_levels(self.grid_config)
        self.logger.info(
            f"Grid initialized with {len(self.price_grids)} levels around central price {self.central_price} "
            f"(delta {self.grid_config.inter_level_delta})"
        )
        return list(self.price_grids)
