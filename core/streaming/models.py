from dataclasses import dataclass
from decimal import Decimal

from .trend_classifier import Direction


@dataclass(frozen=True)
class PriceSample:
    price: Decimal
    observed_at: str


@dataclass(frozen=True)
class TrendObservation:
    price: Decimal
    observed_at: str
    direction: Direction
