from decimal import Decimal
from enum import Enum


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    FLAT = "flat"


def classify_trend(current: Decimal, previous: Decimal | None, three_way: bool = False) -> Direction:
    """
    Classifies a price against the previously observed one.

    A missing previous price (first sample of a session) counts as a rise. With the
    default two-way classification an unchanged price is reported as ``UP``;
    ``three_way`` reports it as ``FLAT`` instead.
    """
    if previous is None:
        return Direction.UP

    delta = current - previous
    if delta == 0 and three_way:
        return Direction.FLAT
    return Direction.UP if delta >= 0 else Direction.DOWN
