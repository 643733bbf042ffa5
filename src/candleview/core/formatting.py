"""Label formatting helpers for axis, crosshair and price-line text."""

from __future__ import annotations

import math
from typing import Any, TYPE_CHECKING

from candleview.core.constants import DEFAULT_AXIS_LABELS

if TYPE_CHECKING:
    from candleview.engine.price_scale import PriceScale
    from candleview.models.candle import Candle


# (lower bound of |price|, decimals), checked top-down
_PRICE_DECIMALS: tuple[tuple[float, int], ...] = (
    (1000.0, 2),
    (100.0, 3),
    (1.0, 4),
    (0.1, 5),
    (0.01, 6),
    (0.001, 7),
)
_SMALLEST_DECIMALS = 8


def _to_finite(x: Any) -> float | None:
    try:
        v = float(x)
    except (TypeError, ValueError):
        return None
    return v if math.isfinite(v) else None


def _price_decimals(magnitude: float) -> int:
    for bound, decimals in _PRICE_DECIMALS:
        if magnitude >= bound:
            return decimals
    return _SMALLEST_DECIMALS


def fmt_price(x: Any, symbol: str = "") -> str:
    """Price with magnitude-aware decimals and trailing zeros dropped.

    ``12345.678 -> "12,345.68"``, ``150.0 -> "150"``, ``0.00001234 ->
    "0.00001234"``; ``"N/A"`` for ``None``, NaN, infinities or junk.
    """
    v = _to_finite(x)
    if v is None:
        return "N/A"
    sign = "-" if v < 0 else ""
    av = abs(v)
    s = f"{av:,.{_price_decimals(av)}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return f"{sign}{symbol}{s}"


def fmt_compact(x: Any, decimals: int = 1, symbol: str = "") -> str:
    """Format large values with K/M/B suffixes, e.g. ``1.2M``."""
    v = _to_finite(x)
    if v is None:
        return "N/A"
    sign = "-" if v < 0 else ""
    av = abs(v)
    if av >= 1e9:
        return f"{sign}{symbol}{av / 1e9:.{decimals}f}B"
    if av >= 1e6:
        return f"{sign}{symbol}{av / 1e6:.{decimals}f}M"
    if av >= 1e3:
        return f"{sign}{symbol}{av / 1e3:.{decimals}f}K"
    return f"{sign}{symbol}{av:.{decimals}f}"


def fmt_percent(pct: Any, decimals: int = 2) -> str:
    """Signed percentage: ``+1.23%``, ``-0.50%``, ``0.00%``."""
    v = _to_finite(pct)
    if v is None:
        return "N/A"
    if v > 0:
        return f"+{v:.{decimals}f}%"
    if v < 0:
        return f"{v:.{decimals}f}%"
    return f"{0.0:.{decimals}f}%"


def axis_labels(scale: PriceScale, count: int = DEFAULT_AXIS_LABELS) -> list[tuple[float, str]]:
    """Return ``(price, label)`` pairs for evenly spaced price-axis ticks."""
    return [(p, fmt_price(p)) for p in scale.ticks(count)]


def candle_summary(candle: Candle) -> str:
    """One-line OHLC readout for crosshair and last-candle labels.

    ``"O 100  H 110  L 95  C 108  +8.00%  V 500.0"``; the volume part is
    omitted when the candle has none.
    """
    parts = [
        f"O {fmt_price(candle.open)}",
        f"H {fmt_price(candle.high)}",
        f"L {fmt_price(candle.low)}",
        f"C {fmt_price(candle.close)}",
        fmt_percent(candle.change_percent),
    ]
    if candle.volume is not None:
        parts.append(f"V {fmt_compact(candle.volume)}")
    return "  ".join(parts)
