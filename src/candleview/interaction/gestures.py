"""Turn decoded gesture deltas into engine transitions.

Device decoding (touch, mouse wheel, trackpad) happens in the UI toolkit.
These helpers receive plain numbers: a horizontal pixel delta for drags
and a scale factor for pinches.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from candleview.core.constants import PINCH_ZOOM_THRESHOLD
from candleview.core.numeric import round_half_away
from candleview.engine.chart_engine import ChartEngine
from candleview.engine.coordinate_mapper import CoordinateMapper

logger = logging.getLogger(__name__)


@dataclass
class PanAccumulator:
    """Converts continuous drag pixels into whole-candle pan steps.

    Each event adds its pixel delta to ``accumulated``.  Once the total
    reaches one candle width, the engine is panned by the rounded number of
    candles and only the consumed pixels are subtracted, so slow drags are
    never lost and fast drags do not jitter.

    ``pixel_delta`` uses the pan sign convention: positive moves toward
    newer data.  For a drag, pass ``previous_x - current_x``.
    """

    accumulated: float = 0.0

    def feed(self, engine: ChartEngine, pixel_delta: float, candle_width: float) -> ChartEngine:
        """Add *pixel_delta* and return the (possibly panned) engine."""
        if candle_width <= 0:
            return engine
        self.accumulated += pixel_delta
        if abs(self.accumulated / candle_width) < 1.0:
            return engine
        steps = round_half_away(self.accumulated / candle_width)
        self.accumulated -= steps * candle_width
        logger.debug("Pan by %d candles (remainder %.3f px)", steps, self.accumulated)
        return engine.pan(steps)

    def reset(self) -> None:
        """Forget the remainder (call at gesture start and after a zoom)."""
        self.accumulated = 0.0


def pinch_zoom_delta(
    scale: float,
    base_scale: float = 1.0,
    threshold: float = PINCH_ZOOM_THRESHOLD,
) -> int:
    """Zoom step for a pinch whose scale moved from *base_scale* to *scale*.

    Spreading fingers (scale up) zooms in, i.e. shows fewer candles, so the
    result is ``-1``; pinching together gives ``+1``.  Changes within
    *threshold* are treated as a pan and return ``0``.
    """
    change = scale - base_scale
    if abs(change) <= threshold:
        return 0
    return -1 if change > 0 else 1


def zoom_at_pixel(
    engine: ChartEngine,
    mapper: CoordinateMapper,
    focal_x: float,
    delta: int,
) -> ChartEngine:
    """Zoom around the candle under *focal_x*.

    Falls back to a plain :meth:`ChartEngine.zoom` when the focal point is
    outside the content area or over an empty slot.
    """
    if delta == 0:
        return engine
    anchor = mapper.x_to_index(focal_x)
    if engine.candle_at(anchor) is None:
        return engine.zoom(delta)
    return engine.zoom_around(anchor, delta)
