"""Crosshair resolution: pointer position to the candle beneath it."""

from __future__ import annotations

from dataclasses import dataclass

from candleview.core.formatting import candle_summary, fmt_price
from candleview.engine.chart_engine import ChartEngine
from candleview.engine.coordinate_mapper import CoordinateMapper
from candleview.models.candle import Candle


@dataclass(frozen=True, slots=True)
class CrosshairPoint:
    """Where the crosshair lines should be drawn and what they point at.

    Attributes
    ----------
    index:
        Absolute candle index under the pointer.
    candle:
        The candle at *index*.
    x:
        Centre of the candle's slot (the vertical line snaps here).
    y:
        Pointer y, unchanged.
    price:
        Price at *y* on the current scale.
    """

    index: int
    candle: Candle
    x: float
    y: float
    price: float

    @property
    def price_label(self) -> str:
        return fmt_price(self.price)

    @property
    def candle_label(self) -> str:
        """OHLC readout of the candle under the crosshair."""
        return candle_summary(self.candle)


def resolve_crosshair(
    engine: ChartEngine,
    mapper: CoordinateMapper,
    x: float,
    y: float,
) -> CrosshairPoint | None:
    """Snap the pointer at ``(x, y)`` to a candle, or ``None`` for a miss."""
    index = mapper.x_to_index(x)
    candle = engine.candle_at(index)
    if index is None or candle is None:
        return None
    return CrosshairPoint(
        index=index,
        candle=candle,
        x=mapper.candle_center_x(index),
        y=y,
        price=mapper.y_to_price(y),
    )


class CrosshairTracker:
    """Remembers the last resolved candle so callers notify only on change."""

    def __init__(self) -> None:
        self._current: CrosshairPoint | None = None

    @property
    def current(self) -> CrosshairPoint | None:
        return self._current

    def update(
        self,
        engine: ChartEngine,
        mapper: CoordinateMapper,
        x: float,
        y: float,
    ) -> tuple[CrosshairPoint | None, bool]:
        """Resolve ``(x, y)``; return the point and whether the candle changed.

        A miss keeps the previous point (the crosshair stays on the last
        candle while the finger wanders over padding).
        """
        point = resolve_crosshair(engine, mapper, x, y)
        if point is None:
            return self._current, False
        changed = self._current is None or self._current.index != point.index
        self._current = point
        return point, changed

    def clear(self) -> bool:
        """Drop the crosshair; ``True`` if one was showing."""
        had_point = self._current is not None
        self._current = None
        return had_point
