"""Apply live trade ticks to an engine.

The engine itself only offers ``with_candles`` and ``reset_viewport``;
whether the view should keep following the newest candle is a policy
decided here.
"""

from __future__ import annotations

import logging

from candleview.engine.chart_engine import ChartEngine
from candleview.models.candle import Candle

logger = logging.getLogger(__name__)


def is_following_latest(engine: ChartEngine) -> bool:
    """``True`` when the newest candle is inside the current window."""
    return engine.viewport.end_index >= len(engine)


def apply_tick(
    engine: ChartEngine,
    time: int,
    price: float,
    follow_latest: bool = True,
) -> tuple[ChartEngine, bool]:
    """Fold a trade at (*time*, *price*) into the dataset.

    - Same ``time`` as the newest candle: that candle is updated with
      :meth:`Candle.with_tick`.
    - Any other ``time``: a new flat candle is appended.
    - Empty engine: the tick becomes the first candle and the window is
      framed on it (``with_candles`` alone keeps the empty window).

    When *follow_latest* is set and the window was showing the newest
    candle before the tick, the window is re-anchored on the newest
    candles with the same ``visible_count``.

    Returns
    -------
    tuple[ChartEngine, bool]
        The new engine and whether the view scrolled to follow the data.
    """
    latest = engine.get_latest_candle()
    if latest is None:
        first = engine.with_candles([Candle.from_price(time, price)])
        return first.reset_viewport(engine.viewport.visible_count), True

    was_following = is_following_latest(engine)
    candles = list(engine.candles)
    if latest.time == time:
        candles[-1] = latest.with_tick(price)
    else:
        if time < latest.time:
            logger.debug("Out-of-order tick at %d (latest %d) appended", time, latest.time)
        candles.append(Candle.from_price(time, price))

    updated = engine.with_candles(candles)
    if follow_latest and was_following:
        return updated.reset_viewport(engine.viewport.visible_count), True
    return updated, False
