"""Domain data models for candleview.

Re-exports all model classes for convenient imports::

    from candleview.models import Candle, CandleIndex, Price
"""

from candleview.models.candle import Candle
from candleview.models.types import CandleIndex, Pixel, Price, Timestamp

__all__ = [
    "Candle",
    "CandleIndex",
    "Pixel",
    "Price",
    "Timestamp",
]
