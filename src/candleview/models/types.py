"""Domain-specific type aliases for candleview.

These aliases document intent at call sites without introducing runtime cost.
"""

from __future__ import annotations

from typing import TypeAlias

# Position of a candle in the full dataset (0 = oldest).
CandleIndex: TypeAlias = int

# A price value on the vertical axis.
Price: TypeAlias = float

# A screen coordinate in logical pixels, origin at the top-left.
Pixel: TypeAlias = float

# Candle bucket start as a Unix timestamp (seconds or milliseconds, but consistent).
Timestamp: TypeAlias = int
