"""Chart engine: candles + viewport + cached price scale.

:class:`ChartEngine` is the single owner of the dataset and the visible
window.  It never mutates in place: :meth:`pan`, :meth:`zoom`,
:meth:`with_candles` and friends return a new engine, and the caller swaps
its reference.  The only internal state is the price-scale cache, which is
tagged with the version it was computed for and is never shared between
engine values.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Iterable, NamedTuple, Sequence

from candleview.core.config import ChartConfig
from candleview.core.numeric import clamp
from candleview.engine.coordinate_mapper import CoordinateMapper
from candleview.engine.price_scale import FlatRangePolicy, PriceScale
from candleview.engine.viewport import Viewport
from candleview.models.candle import Candle

logger = logging.getLogger(__name__)


class _ScaleCache(NamedTuple):
    scale: PriceScale
    version: int
    padding_percent: float


class ChartEngine:
    """Immutable view state for one candle series.

    Parameters
    ----------
    candles:
        Full dataset, oldest first.  Copied into a tuple.
    default_visible_count:
        Candles shown initially (right-aligned to the newest).  Defaults to
        ``config.default_visible_count``.
    viewport:
        Explicit starting viewport; overrides *default_visible_count*.
    close_only:
        Build the price scale from close prices (line charts) instead of
        high/low.  Defaults to ``config.close_only``.
    config:
        Engine defaults; a default :class:`ChartConfig` when omitted.
    """

    def __init__(
        self,
        candles: Iterable[Candle],
        default_visible_count: int | None = None,
        *,
        viewport: Viewport | None = None,
        close_only: bool | None = None,
        config: ChartConfig | None = None,
    ) -> None:
        self._config = config if config is not None else ChartConfig()
        self._candles: tuple[Candle, ...] = tuple(candles)
        self._close_only = self._config.close_only if close_only is None else close_only
        if viewport is None:
            viewport = self._default_viewport(default_visible_count)
        self._viewport = viewport
        self._version = 0
        self._cache: _ScaleCache | None = None

    def _default_viewport(self, visible_count: int | None) -> Viewport:
        n = len(self._candles)
        count = visible_count if visible_count is not None else self._config.default_visible_count
        if n == 0:
            return Viewport(start_index=0, visible_count=count, total_count=0)
        return Viewport.last(clamp(count, 1, n), n)

    def _derive(
        self,
        candles: Sequence[Candle],
        viewport: Viewport,
        config: ChartConfig | None = None,
    ) -> ChartEngine:
        engine = ChartEngine(
            candles,
            viewport=viewport,
            close_only=self._close_only,
            config=config if config is not None else self._config,
        )
        engine._version = self._version + 1
        return engine

    # -- accessors ------------------------------------------------------------

    @property
    def candles(self) -> tuple[Candle, ...]:
        return self._candles

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @property
    def config(self) -> ChartConfig:
        return self._config

    @property
    def close_only(self) -> bool:
        return self._close_only

    @property
    def version(self) -> int:
        """Monotonic counter, bumped by every transition that changes data or view."""
        return self._version

    @property
    def is_empty(self) -> bool:
        return not self._candles

    def __len__(self) -> int:
        return len(self._candles)

    def __repr__(self) -> str:
        return (
            f"ChartEngine(candles={len(self._candles)}, viewport={self._viewport!r}, "
            f"version={self._version})"
        )

    def candle_at(self, index: int | None) -> Candle | None:
        """Candle at *index*, or ``None`` for a miss (including ``None`` input)."""
        if index is None or not 0 <= index < len(self._candles):
            return None
        return self._candles[index]

    def get_visible_candles(self) -> tuple[Candle, ...]:
        rng = self._viewport.visible_range()
        if rng.start >= len(self._candles):
            return ()
        return self._candles[rng.start : min(rng.end, len(self._candles))]

    def get_latest_candle(self) -> Candle | None:
        if not self._candles:
            return None
        return self._candles[-1]

    def get_latest_price(self) -> float | None:
        """Close of the newest candle, or ``None`` when there is no data."""
        if not self._candles:
            return None
        return self._candles[-1].close

    # -- price scale ----------------------------------------------------------

    def get_price_scale(self, padding_percent: float | None = None) -> PriceScale | None:
        """Padded scale for the visible candles, or ``None`` with no data.

        Repeated calls on the same engine return the same object; the first
        call after a transition recomputes from the visible slice.
        """
        if not self._candles:
            return None
        if padding_percent is None:
            padding_percent = self._config.price_padding_pct

        cache = self._cache
        if (
            cache is not None
            and cache.version == self._version
            and cache.padding_percent == padding_percent
        ):
            return cache.scale

        visible = self.get_visible_candles()
        policy = FlatRangePolicy(
            threshold_pct=self._config.flat_range_threshold_pct,
            padding_pct=self._config.flat_range_padding_pct,
            min_padding=self._config.flat_range_min_padding,
        )
        if self._close_only:
            scale = PriceScale.from_closes(visible, padding_percent, policy)
        else:
            scale = PriceScale.from_candles(visible, padding_percent, policy)

        logger.debug(
            "Price scale recomputed for version %d over %d candles: %.8g..%.8g",
            self._version,
            len(visible),
            scale.min,
            scale.max,
        )
        self._cache = _ScaleCache(scale, self._version, padding_percent)
        return scale

    # -- transitions ----------------------------------------------------------

    def with_candles(
        self,
        new_candles: Iterable[Candle],
        default_visible_count: int | None = None,
    ) -> ChartEngine:
        """Replace the dataset, keeping the current window position.

        Only ``total_count`` changes; ``start_index`` and ``visible_count``
        are kept even when the engine was empty.  Re-framing on new data is
        the caller's policy (see :func:`candleview.interaction.live_feed.apply_tick`).
        *default_visible_count*, when given, replaces the config default used
        by a later :meth:`reset_viewport`.
        """
        candles = tuple(new_candles)
        config = self._config
        if default_visible_count is not None:
            config = dataclasses.replace(
                config, default_visible_count=max(1, default_visible_count)
            )
        viewport = self._viewport.with_total_count(len(candles))
        return self._derive(candles, viewport, config)

    def with_viewport(self, viewport: Viewport) -> ChartEngine:
        return self._derive(self._candles, viewport)

    def pan(self, delta: int) -> ChartEngine:
        """Scroll by *delta* candles (positive = toward newer data)."""
        return self.with_viewport(self._viewport.pan(delta))

    def zoom(
        self,
        delta: int,
        min_visible: int | None = None,
        max_visible: int | None = None,
    ) -> ChartEngine:
        """Show *delta* more (positive) or fewer (negative) candles."""
        return self.with_viewport(
            self._viewport.zoom(
                delta,
                min_visible=self._min_visible(min_visible),
                max_visible=self._max_visible(max_visible),
            )
        )

    def zoom_around(
        self,
        anchor_index: int,
        delta: int,
        min_visible: int | None = None,
        max_visible: int | None = None,
    ) -> ChartEngine:
        """Zoom keeping *anchor_index* at the same relative screen position."""
        return self.with_viewport(
            self._viewport.zoom_around(
                anchor_index,
                delta,
                min_visible=self._min_visible(min_visible),
                max_visible=self._max_visible(max_visible),
            )
        )

    def reset_viewport(self, visible_count: int | None = None) -> ChartEngine:
        """Jump back to the newest *visible_count* candles."""
        if visible_count is None:
            visible_count = self._config.default_visible_count
        return self.with_viewport(Viewport.last(visible_count, len(self._candles)))

    def fit_all(self) -> ChartEngine:
        return self.with_viewport(Viewport.fit_all(len(self._candles)))

    def _min_visible(self, value: int | None) -> int:
        return self._config.min_visible if value is None else value

    def _max_visible(self, value: int | None) -> int:
        return self._config.max_visible if value is None else value

    # -- mapping --------------------------------------------------------------

    def create_mapper(
        self,
        chart_width: float,
        chart_height: float,
        padding_left: float | None = None,
        padding_right: float | None = None,
        padding_top: float | None = None,
        padding_bottom: float | None = None,
        padding_percent: float | None = None,
    ) -> CoordinateMapper:
        """Build the coordinate mapper for one render pass.

        Paddings default to the config values.  With no data the mapper uses
        :meth:`PriceScale.empty` so axes can still be laid out.
        """
        cfg = self._config
        scale = self.get_price_scale(padding_percent)
        if scale is None:
            scale = PriceScale.empty()
        return CoordinateMapper(
            viewport=self._viewport,
            price_scale=scale,
            chart_width=chart_width,
            chart_height=chart_height,
            padding_left=cfg.padding_left if padding_left is None else padding_left,
            padding_right=cfg.padding_right if padding_right is None else padding_right,
            padding_top=cfg.padding_top if padding_top is None else padding_top,
            padding_bottom=cfg.padding_bottom if padding_bottom is None else padding_bottom,
        )
