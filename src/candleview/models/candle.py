"""OHLC candle data model.

The engine only ever sees integer timestamps; no ``datetime`` objects are
created while mapping or drawing.  Candles are immutable so they can be
shared between engine values and cached freely.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Mapping

from candleview.models.types import Price, Timestamp


@dataclass(frozen=True, slots=True)
class Candle:
    """A single OHLC(V) candlestick bar.

    Parameters
    ----------
    time:
        Bucket start as a Unix timestamp.  Seconds or milliseconds are both
        accepted as long as a dataset is consistent.
    open, high, low, close:
        Price values for the bar.
    volume:
        Traded volume, or ``None`` when the source does not provide it.
    """

    time: Timestamp
    open: float
    high: float
    low: float
    close: float
    volume: float | None = None

    # -- construction ---------------------------------------------------------

    @classmethod
    def from_price(cls, time: Timestamp, price: Price, volume: float | None = None) -> Candle:
        """Open a new flat candle at *price* (first tick of a bucket)."""
        return cls(time=time, open=price, high=price, low=price, close=price, volume=volume)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Candle:
        """Parse a dict row such as ``{"time": 1, "open": "1.5", ...}``.

        Numbers and numeric strings are accepted.  Anything unparseable
        becomes ``0``; a missing ``volume`` key becomes ``None``.
        """
        volume = None
        if "volume" in data and data["volume"] is not None:
            volume = _parse_float(data["volume"])
        return cls(
            time=_parse_int(data.get("time")),
            open=_parse_float(data.get("open")),
            high=_parse_float(data.get("high")),
            low=_parse_float(data.get("low")),
            close=_parse_float(data.get("close")),
            volume=volume,
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form accepted by :meth:`from_mapping`."""
        out: dict[str, Any] = {
            "time": self.time,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
        }
        if self.volume is not None:
            out["volume"] = self.volume
        return out

    # -- live updates ---------------------------------------------------------

    def with_tick(self, price: Price) -> Candle:
        """Return a copy updated with a live trade at *price*.

        ``high``/``low`` widen to include the tick and ``close`` becomes the
        tick; ``open``, ``time`` and ``volume`` are unchanged.
        """
        return dataclasses.replace(
            self,
            high=price if price > self.high else self.high,
            low=price if price < self.low else self.low,
            close=price,
        )

    # -- derived properties ---------------------------------------------------

    @property
    def is_bullish(self) -> bool:
        """``True`` if the close is at or above the open."""
        return self.close >= self.open

    @property
    def is_bearish(self) -> bool:
        """``True`` if the close is strictly below the open."""
        return self.close < self.open

    @property
    def is_neutral(self) -> bool:
        return self.close == self.open

    @property
    def change_value(self) -> float:
        """Absolute move from open to close."""
        return self.close - self.open

    @property
    def change_percent(self) -> float:
        """Percentage change from open to close: ``(close - open) / open * 100``.

        Returns ``0.0`` if *open* is zero (degenerate candle).
        """
        if self.open == 0.0:
            return 0.0
        return (self.close - self.open) / self.open * 100.0

    @property
    def mid(self) -> float:
        """Midpoint price: ``(high + low) / 2``."""
        return (self.high + self.low) / 2.0

    # -- validation -----------------------------------------------------------

    def validate(self) -> list[str]:
        """Return a list of consistency problems (empty means valid).

        The engine tolerates invalid candles; this is for data loaders that
        want to report them.
        """
        errors: list[str] = []
        if self.time < 0:
            errors.append(f"time={self.time} must be >= 0.")
        if self.volume is not None and self.volume < 0:
            errors.append(f"volume={self.volume} must be >= 0.")
        if self.high < self.low:
            errors.append(f"high={self.high} must be >= low={self.low}.")
        if self.high < self.open:
            errors.append(f"high={self.high} must be >= open={self.open}.")
        if self.high < self.close:
            errors.append(f"high={self.high} must be >= close={self.close}.")
        if self.low > self.open:
            errors.append(f"low={self.low} must be <= open={self.open}.")
        if self.low > self.close:
            errors.append(f"low={self.low} must be <= close={self.close}.")
        return errors


def _parse_float(value: Any) -> float:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except (TypeError, ValueError):
        return 0.0


def _parse_int(value: Any) -> int:
    if isinstance(value, int):
        return value
    try:
        return int(float(str(value).strip()))
    except (TypeError, ValueError, OverflowError):
        return 0
