"""Static candlestick preview drawn with matplotlib.

A reference consumer of the engine: every coordinate comes from
:class:`CoordinateMapper`, and the axes are set up in pixel space
(origin top-left) so no data-space transforms are involved.
"""

from __future__ import annotations

import logging
import random
from pathlib import Path

from matplotlib.figure import Figure
from matplotlib.patches import Rectangle

from candleview.core.formatting import axis_labels, candle_summary, fmt_price
from candleview.engine.chart_engine import ChartEngine
from candleview.engine.coordinate_mapper import CoordinateMapper
from candleview.models.candle import Candle

logger = logging.getLogger(__name__)

DARK_BG = "#070B10"
DARK_FG = "#C7D1DB"
DARK_BORDER = "#243044"
BULL_COLOR = "#26A69A"
BEAR_COLOR = "#EF5350"
LAST_PRICE_COLOR = "#F0B90B"

_DPI = 100.0
_BODY_FRACTION = 0.7
_MIN_BODY_PX = 1.0


def render_engine(
    engine: ChartEngine,
    width: int = 800,
    height: int = 450,
    title: str | None = None,
) -> Figure:
    """Draw the engine's visible candles into a new :class:`Figure`."""
    fig = Figure(figsize=(width / _DPI, height / _DPI), dpi=_DPI)
    fig.patch.set_facecolor(DARK_BG)
    ax = fig.add_axes((0.0, 0.0, 1.0, 1.0))
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.set_axis_off()

    mapper = engine.create_mapper(width, height)
    left, top, right, bottom = mapper.content_bounds()
    ax.add_patch(
        Rectangle(
            (left, top), right - left, bottom - top,
            facecolor="none", edgecolor=DARK_BORDER, linewidth=1,
        )
    )

    _draw_price_axis(ax, mapper)

    visible = engine.get_visible_candles()
    start = engine.viewport.start_index
    for offset, candle in enumerate(visible):
        _draw_candle(ax, mapper, start + offset, candle)

    latest = engine.get_latest_price()
    if latest is not None and mapper.price_scale.contains(latest):
        y = mapper.price_to_y(latest)
        ax.plot([left, right], [y, y], linewidth=1, linestyle="--", color=LAST_PRICE_COLOR)
        ax.text(
            right, y, fmt_price(latest), ha="right", va="bottom",
            fontsize=8, color=LAST_PRICE_COLOR,
        )

    header = [title] if title else []
    latest_candle = engine.get_latest_candle()
    if latest_candle is not None:
        header.append(candle_summary(latest_candle))
    if header:
        ax.text(left, top + 2, "   ".join(header), ha="left", va="top", fontsize=9, color=DARK_FG)

    logger.debug(
        "Rendered %d candles (start=%d, candle_width=%.2fpx)",
        len(visible),
        start,
        mapper.candle_width,
    )
    return fig


def _draw_candle(ax, mapper: CoordinateMapper, index: int, candle: Candle) -> None:
    color = BULL_COLOR if candle.is_bullish else BEAR_COLOR
    cx = mapper.candle_center_x(index)
    ax.plot(
        [cx, cx],
        [mapper.price_to_y(candle.high), mapper.price_to_y(candle.low)],
        linewidth=1,
        color=color,
    )

    y_open = mapper.price_to_y(candle.open)
    y_close = mapper.price_to_y(candle.close)
    body_w = mapper.candle_width * _BODY_FRACTION
    body_h = max(abs(y_close - y_open), _MIN_BODY_PX)
    ax.add_patch(
        Rectangle(
            (cx - body_w / 2.0, min(y_open, y_close)), body_w, body_h,
            facecolor=color, edgecolor=color, linewidth=1, alpha=0.9,
        )
    )


def _draw_price_axis(ax, mapper: CoordinateMapper) -> None:
    left, _, right, _ = mapper.content_bounds()
    for price, label in axis_labels(mapper.price_scale):
        y = mapper.price_to_y(price)
        ax.plot([left, right], [y, y], linewidth=0.6, color=DARK_BORDER, alpha=0.6)
        ax.text(left - 4, y, label, ha="right", va="center", fontsize=8, color=DARK_FG)


def save_preview(fig: Figure, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, facecolor=fig.get_facecolor())
    logger.info("Saved preview to %s", path)
    return path


def random_walk(
    count: int,
    start_price: float = 100.0,
    start_time: int = 1_700_000_000,
    interval: int = 60,
    seed: int | None = None,
) -> list[Candle]:
    """Synthetic candles for previews and demos."""
    rng = random.Random(seed)
    candles: list[Candle] = []
    price = start_price
    for i in range(count):
        open_ = price
        close = max(open_ * (1.0 + rng.gauss(0.0, 0.01)), 0.01)
        high = max(open_, close) * (1.0 + abs(rng.gauss(0.0, 0.004)))
        low = min(open_, close) * (1.0 - abs(rng.gauss(0.0, 0.004)))
        volume = abs(rng.gauss(1000.0, 250.0))
        candles.append(Candle(start_time + i * interval, open_, high, low, close, volume))
        price = close
    return candles
