"""Viewport, price scale, engine and coordinate mapper.

Re-exports the engine types for convenient imports::

    from candleview.engine import ChartEngine, CoordinateMapper, PriceScale, Viewport
"""

from candleview.engine.chart_engine import ChartEngine
from candleview.engine.coordinate_mapper import CoordinateMapper
from candleview.engine.price_scale import FlatRangePolicy, PriceScale
from candleview.engine.viewport import IndexRange, Viewport

__all__ = [
    "ChartEngine",
    "CoordinateMapper",
    "FlatRangePolicy",
    "IndexRange",
    "PriceScale",
    "Viewport",
]
