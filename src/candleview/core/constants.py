"""Shared constants for candleview.

Every default and fallback policy used by the engine is centralised here so
there is a single source of truth.  :class:`~candleview.core.config.ChartConfig`
mirrors these values and lets callers override them.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Viewport defaults
# ---------------------------------------------------------------------------
DEFAULT_VISIBLE_COUNT: int = 100  # candles shown on first load / reset
DEFAULT_MIN_VISIBLE: int = 5  # zoom-in limit
DEFAULT_MAX_VISIBLE: int = 1000  # zoom-out limit (also clamped to dataset size)

# ---------------------------------------------------------------------------
# Price scale
# ---------------------------------------------------------------------------
DEFAULT_PRICE_PADDING_PCT: float = 0.05  # 5% headroom above and below

# Flat or nearly flat slices get padding relative to the price itself.
FLAT_RANGE_THRESHOLD_PCT: float = 0.001  # range < 0.1% of max counts as flat
FLAT_RANGE_PADDING_PCT: float = 0.05  # pad by 5% of the base price
FLAT_RANGE_MIN_PADDING: float = 0.01  # never pad by less than this

# Scale returned when there is nothing to measure.
EMPTY_SCALE_MIN: float = 0.0
EMPTY_SCALE_MAX: float = 100.0

# ---------------------------------------------------------------------------
# Layout defaults (pixels) used when a caller does not measure labels.
# ---------------------------------------------------------------------------
DEFAULT_PADDING_LEFT: float = 60.0
DEFAULT_PADDING_RIGHT: float = 10.0
DEFAULT_PADDING_TOP: float = 10.0
DEFAULT_PADDING_BOTTOM: float = 40.0

# ---------------------------------------------------------------------------
# Interaction
# ---------------------------------------------------------------------------
PINCH_ZOOM_THRESHOLD: float = 0.05  # scale change below this is a pan
DEFAULT_AXIS_LABELS: int = 5

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
DEFAULT_LOG_LEVEL: str = "INFO"  # used when settings and CLI are silent

# ---------------------------------------------------------------------------
# File names
# ---------------------------------------------------------------------------
SETTINGS_FILENAME: str = "chart_settings.json"
