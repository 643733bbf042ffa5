"""Visible index window over a candle dataset.

A :class:`Viewport` says which contiguous run of candle indices is on
screen.  It is a pure value: pan and zoom return new viewports and never
touch the candles themselves.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Iterator

from candleview.core.constants import DEFAULT_MAX_VISIBLE, DEFAULT_MIN_VISIBLE
from candleview.core.numeric import clamp, round_half_away


@dataclass(frozen=True, slots=True)
class IndexRange:
    """Half-open index interval ``[start, end)``."""

    start: int
    end: int

    def __len__(self) -> int:
        return max(0, self.end - self.start)

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and self.start <= index < self.end

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.end))

    def as_slice(self) -> slice:
        return slice(self.start, self.end)


@dataclass(frozen=True, slots=True)
class Viewport:
    """Window of ``visible_count`` candles starting at ``start_index``.

    ``start_index + visible_count`` may exceed ``total_count`` (for example
    while a dataset is still short); every range query clamps to
    ``[0, total_count]``.  Negative inputs are clamped at construction.
    """

    start_index: int
    visible_count: int
    total_count: int

    def __post_init__(self) -> None:
        if self.start_index < 0:
            object.__setattr__(self, "start_index", 0)
        if self.visible_count < 1:
            object.__setattr__(self, "visible_count", 1)
        if self.total_count < 0:
            object.__setattr__(self, "total_count", 0)

    # -- factories ------------------------------------------------------------

    @classmethod
    def last(cls, visible_count: int, total_count: int) -> Viewport:
        """Show the most recent *visible_count* candles."""
        visible_count = max(visible_count, 1)
        start = clamp(total_count - visible_count, 0, max(total_count, 0))
        if total_count > 0:
            visible_count = clamp(visible_count, 1, total_count - start)
        return cls(start_index=start, visible_count=visible_count, total_count=total_count)

    @classmethod
    def fit_all(cls, total_count: int) -> Viewport:
        """Show the whole dataset."""
        return cls(start_index=0, visible_count=max(total_count, 1), total_count=total_count)

    def with_total_count(self, total_count: int) -> Viewport:
        return dataclasses.replace(self, total_count=total_count)

    # -- derived --------------------------------------------------------------

    @property
    def end_index(self) -> int:
        """Exclusive end of the window, not clamped to the dataset."""
        return self.start_index + self.visible_count

    @property
    def max_start(self) -> int:
        return clamp(self.total_count - self.visible_count, 0, self.total_count)

    @property
    def can_pan_left(self) -> bool:
        return self.start_index > 0

    @property
    def can_pan_right(self) -> bool:
        return self.visible_range().end < self.total_count

    def visible_range(self) -> IndexRange:
        """Indices to slice from the dataset, clamped to ``[0, total_count]``."""
        return IndexRange(
            self.start_index,
            clamp(self.start_index + self.visible_count, 0, self.total_count),
        )

    # -- transitions ----------------------------------------------------------

    def pan(self, delta: int) -> Viewport:
        """Shift the window by *delta* candles (positive = toward newer data)."""
        new_start = clamp(self.start_index + delta, 0, self.max_start)
        return dataclasses.replace(self, start_index=new_start)

    def zoom(
        self,
        delta: int,
        min_visible: int = DEFAULT_MIN_VISIBLE,
        max_visible: int = DEFAULT_MAX_VISIBLE,
    ) -> Viewport:
        """Grow (positive *delta*) or shrink (negative) the window, keeping its start."""
        new_visible = self._zoomed_count(delta, min_visible, max_visible)
        new_start = clamp(
            self.start_index,
            0,
            clamp(self.total_count - new_visible, 0, self.total_count),
        )
        return dataclasses.replace(self, start_index=new_start, visible_count=new_visible)

    def zoom_around(
        self,
        anchor_index: int,
        delta: int,
        min_visible: int = DEFAULT_MIN_VISIBLE,
        max_visible: int = DEFAULT_MAX_VISIBLE,
    ) -> Viewport:
        """Zoom so that *anchor_index* keeps its relative screen position.

        The anchor may lie outside the current window; the same ratio
        formula still applies.
        """
        ratio = (anchor_index - self.start_index) / self.visible_count
        new_visible = self._zoomed_count(delta, min_visible, max_visible)
        new_start = clamp(
            round_half_away(anchor_index - new_visible * ratio),
            0,
            clamp(self.total_count - new_visible, 0, self.total_count),
        )
        return dataclasses.replace(self, start_index=new_start, visible_count=new_visible)

    def _zoomed_count(self, delta: int, min_visible: int, max_visible: int) -> int:
        min_visible = max(min_visible, 1)
        effective_max = clamp(max_visible, min_visible, self.total_count)
        return clamp(self.visible_count + delta, min_visible, effective_max)
