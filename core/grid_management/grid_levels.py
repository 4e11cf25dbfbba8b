from dataclasses import dataclass
from decimal import Decimal, localcontext


@dataclass(frozen=True)
class GridConfig:
    central_price: Decimal
    inter_level_delta: Decimal
    upper_count: int
    down_count: int

    @property
    def total_levels(self) -> int:
        return self.upper_count + self.down_count + 1


def _required_precision(config: GridConfig) -> int:
    """Significant digits needed to hold every level exactly."""
    smallest_exponent = min(config.central_price.as_tuple().exponent, config.inter_level_delta.as_tuple().exponent)
    largest_magnitude = max(
        config.central_price.adjusted(),
        config.inter_level_delta.adjusted() + len(str(config.total_levels)),
    )
    return largest_magnitude - smallest_exponent + 2


def generate_grid_levels(config: GridConfig) -> list[Decimal]:
    """
    Computes the grid price levels, lowest first.

    Every level is derived from the lowest one and its index instead of by
    repeated addition, so ``levels[config.down_count]`` is exactly the central
    price and consecutive levels differ by exactly ``inter_level_delta``.
    The arithmetic runs with enough precision for the inputs, never rounding.

    Args:
        config: A validated grid configuration (positive delta, non-negative counts).
    Returns:
        list[Decimal]: ``upper_count + down_count + 1`` strictly increasing levels.
    """
    total_levels = config.total_levels
    assert total_levels >= 1, "grid must contain at least the central price"

    with localcontext() as context:
        context.prec = max(context.prec, _required_precision(config))
        min_level = config.central_price - config.inter_level_delta * config.down_count
        return [min_level + index * config.inter_level_delta for index in range(total_levels)]
