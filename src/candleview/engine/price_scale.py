"""Padded price interval for the vertical axis.

A :class:`PriceScale` is built from the candles currently on screen and
maps prices to a normalised vertical position (max price at the top).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from candleview.core.constants import (
    DEFAULT_PRICE_PADDING_PCT,
    EMPTY_SCALE_MAX,
    EMPTY_SCALE_MIN,
    FLAT_RANGE_MIN_PADDING,
    FLAT_RANGE_PADDING_PCT,
    FLAT_RANGE_THRESHOLD_PCT,
)
from candleview.models.candle import Candle

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FlatRangePolicy:
    """How to pad a slice whose price range is zero or nearly zero.

    A slice counts as flat when ``range <= 0`` or
    ``range < |max| * threshold_pct``.  It is then padded on both sides by
    ``max(base * padding_pct, min_padding)`` where *base* is ``|max|``,
    else ``|min|``, else ``1.0``.
    """

    threshold_pct: float = FLAT_RANGE_THRESHOLD_PCT
    padding_pct: float = FLAT_RANGE_PADDING_PCT
    min_padding: float = FLAT_RANGE_MIN_PADDING


DEFAULT_FLAT_POLICY = FlatRangePolicy()


@dataclass(frozen=True, slots=True)
class PriceScale:
    """Immutable ``[min, max]`` price interval."""

    min: float
    max: float

    @property
    def range(self) -> float:
        return self.max - self.min

    # -- factories ------------------------------------------------------------

    @classmethod
    def empty(cls) -> PriceScale:
        """Fallback scale used when there are no candles to measure."""
        return cls(EMPTY_SCALE_MIN, EMPTY_SCALE_MAX)

    @classmethod
    def from_candles(
        cls,
        candles: Sequence[Candle],
        padding_percent: float = DEFAULT_PRICE_PADDING_PCT,
        flat_policy: FlatRangePolicy = DEFAULT_FLAT_POLICY,
    ) -> PriceScale:
        """Scale spanning ``min(low)`` .. ``max(high)`` plus padding."""
        if not candles:
            return cls.empty()
        lo = candles[0].low
        hi = candles[0].high
        for c in candles:
            if c.low < lo:
                lo = c.low
            if c.high > hi:
                hi = c.high
        return cls._padded(lo, hi, padding_percent, flat_policy)

    @classmethod
    def from_closes(
        cls,
        candles: Sequence[Candle],
        padding_percent: float = DEFAULT_PRICE_PADDING_PCT,
        flat_policy: FlatRangePolicy = DEFAULT_FLAT_POLICY,
    ) -> PriceScale:
        """Scale over close prices only, for line charts."""
        if not candles:
            return cls.empty()
        closes = [c.close for c in candles]
        return cls._padded(min(closes), max(closes), padding_percent, flat_policy)

    @classmethod
    def from_prices(
        cls,
        prices: Iterable[float],
        padding_percent: float = DEFAULT_PRICE_PADDING_PCT,
        flat_policy: FlatRangePolicy = DEFAULT_FLAT_POLICY,
    ) -> PriceScale:
        values = list(prices)
        if not values:
            return cls.empty()
        return cls._padded(min(values), max(values), padding_percent, flat_policy)

    @classmethod
    def _padded(
        cls,
        min_price: float,
        max_price: float,
        padding_percent: float,
        policy: FlatRangePolicy,
    ) -> PriceScale:
        if max_price < min_price:
            # inverted high/low in garbage input
            min_price, max_price = max_price, min_price
        price_range = max_price - min_price
        if price_range <= 0 or (max_price > 0 and price_range < max_price * policy.threshold_pct):
            if abs(max_price) > 0:
                base = abs(max_price)
            elif abs(min_price) > 0:
                base = abs(min_price)
            else:
                base = 1.0
            padding = max(base * policy.padding_pct, policy.min_padding)
            logger.debug(
                "Flat price range %.8g..%.8g, padding by %.8g",
                min_price,
                max_price,
                padding,
            )
        else:
            padding = price_range * padding_percent
        return cls(min_price - padding, max_price + padding)

    # -- conversions ----------------------------------------------------------

    def price_to_y(self, price: float, height: float) -> float:
        """Map *price* to ``[0, height]`` with the max price at ``y = 0``."""
        if self.range == 0:
            return height / 2.0
        normalized = (price - self.min) / self.range
        return height * (1.0 - normalized)

    def y_to_price(self, y: float, height: float) -> float:
        """Exact inverse of :meth:`price_to_y`."""
        if height == 0:
            return self.min
        normalized = 1.0 - y / height
        return self.min + normalized * self.range

    def contains(self, price: float) -> bool:
        return self.min <= price <= self.max

    def ticks(self, count: int) -> list[float]:
        """Evenly spaced prices from ``max`` down to ``min`` (inclusive)."""
        if count <= 0:
            return []
        if count == 1:
            return [(self.min + self.max) / 2.0]
        step = self.range / (count - 1)
        return [self.max - i * step for i in range(count)]
