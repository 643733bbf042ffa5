"""Data <-> screen coordinate conversion for one render pass."""

from __future__ import annotations

from dataclasses import dataclass

from candleview.core.exceptions import LayoutError
from candleview.core.numeric import clamp, round_half_away
from candleview.engine.price_scale import PriceScale
from candleview.engine.viewport import Viewport
from candleview.models.types import CandleIndex, Pixel, Price


@dataclass(frozen=True, slots=True)
class CoordinateMapper:
    """Converts candle index <-> x and price <-> y.

    Built by :meth:`ChartEngine.create_mapper` (or directly) for exactly one
    layout; rebuild it whenever the viewport, scale or widget size changes.
    The content area is the rectangle inside the four paddings.

    Raises
    ------
    LayoutError
        If the paddings are larger than the chart, leaving a negative
        content width or height.
    """

    viewport: Viewport
    price_scale: PriceScale
    chart_width: float
    chart_height: float
    padding_left: float = 0.0
    padding_right: float = 0.0
    padding_top: float = 0.0
    padding_bottom: float = 0.0

    def __post_init__(self) -> None:
        if self.content_width < 0 or self.content_height < 0:
            raise LayoutError(
                f"Padding leaves negative content area "
                f"({self.content_width:g} x {self.content_height:g}) "
                f"for chart size {self.chart_width:g} x {self.chart_height:g}."
            )

    @property
    def content_width(self) -> float:
        return self.chart_width - self.padding_left - self.padding_right

    @property
    def content_height(self) -> float:
        return self.chart_height - self.padding_top - self.padding_bottom

    @property
    def candle_width(self) -> float:
        """Horizontal slot allotted to one candle."""
        return self.content_width / self.viewport.visible_count

    # -- horizontal -----------------------------------------------------------

    def index_to_x(self, index: CandleIndex) -> Pixel:
        """Left edge of *index*'s slot.

        Not clamped: indices outside the viewport project outside the
        content area, which lets renderers draw partially visible edges.
        """
        relative = index - self.viewport.start_index
        normalized = relative / self.viewport.visible_count
        return normalized * self.content_width + self.padding_left

    def x_to_index(self, x: Pixel) -> CandleIndex | None:
        """Nearest candle slot under pixel *x*.

        Returns ``None`` when *x* falls outside the content area, which is
        routine for pointer events.  The result always names one of the
        viewport's slots, but when the dataset is shorter than the window
        the slot can be past the last candle, so callers still check it
        against the data (see :meth:`ChartEngine.candle_at`).
        """
        relative_x = x - self.padding_left
        if relative_x < 0 or relative_x > self.content_width or self.content_width == 0:
            return None
        normalized = relative_x / self.content_width
        start = self.viewport.start_index
        index = start + round_half_away(normalized * self.viewport.visible_count)
        return clamp(index, start, start + self.viewport.visible_count - 1)

    def candle_left_x(self, index: CandleIndex) -> Pixel:
        return self.index_to_x(index)

    def candle_center_x(self, index: CandleIndex) -> Pixel:
        """X at which a single OHLC point for *index* is plotted."""
        return self.index_to_x(index) + self.candle_width / 2.0

    def candle_right_x(self, index: CandleIndex) -> Pixel:
        return self.index_to_x(index) + self.candle_width

    # -- vertical -------------------------------------------------------------

    def price_to_y(self, price: Price) -> Pixel:
        return self.price_scale.price_to_y(price, self.content_height) + self.padding_top

    def y_to_price(self, y: Pixel) -> Price:
        return self.price_scale.y_to_price(y - self.padding_top, self.content_height)

    # -- bounds ---------------------------------------------------------------

    def content_bounds(self) -> tuple[float, float, float, float]:
        """``(left, top, right, bottom)`` of the content area in pixels."""
        return (
            self.padding_left,
            self.padding_top,
            self.padding_left + self.content_width,
            self.padding_top + self.content_height,
        )

    def contains_point(self, x: float, y: float) -> bool:
        left, top, right, bottom = self.content_bounds()
        return left <= x <= right and top <= y <= bottom
