"""Validated chart configuration loaded from ``chart_settings.json``."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from candleview.core.constants import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_VISIBLE,
    DEFAULT_MIN_VISIBLE,
    DEFAULT_PADDING_BOTTOM,
    DEFAULT_PADDING_LEFT,
    DEFAULT_PADDING_RIGHT,
    DEFAULT_PADDING_TOP,
    DEFAULT_PRICE_PADDING_PCT,
    DEFAULT_VISIBLE_COUNT,
    FLAT_RANGE_MIN_PADDING,
    FLAT_RANGE_PADDING_PCT,
    FLAT_RANGE_THRESHOLD_PCT,
)
from candleview.core.exceptions import ConfigError
from candleview.core.logging_setup import resolve_level

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChartConfig:
    """Immutable snapshot of engine defaults.

    Build from a JSON file via :meth:`from_file`, from parsed data via
    :meth:`from_dict`, or construct directly for testing.
    """

    default_visible_count: int = DEFAULT_VISIBLE_COUNT
    min_visible: int = DEFAULT_MIN_VISIBLE
    max_visible: int = DEFAULT_MAX_VISIBLE
    price_padding_pct: float = DEFAULT_PRICE_PADDING_PCT
    flat_range_threshold_pct: float = FLAT_RANGE_THRESHOLD_PCT
    flat_range_padding_pct: float = FLAT_RANGE_PADDING_PCT
    flat_range_min_padding: float = FLAT_RANGE_MIN_PADDING
    close_only: bool = False
    padding_left: float = DEFAULT_PADDING_LEFT
    padding_right: float = DEFAULT_PADDING_RIGHT
    padding_top: float = DEFAULT_PADDING_TOP
    padding_bottom: float = DEFAULT_PADDING_BOTTOM
    log_level: str = DEFAULT_LOG_LEVEL

    # -- factory ----------------------------------------------------------

    @classmethod
    def from_file(cls, path: Path) -> ChartConfig:
        """Load from a JSON settings file with validation.

        Missing or unparseable values fall back to defaults.  Validation
        warnings are logged but never raise.
        """
        try:
            raw = path.read_text(encoding="utf-8")
            data: dict[str, Any] = json.loads(raw) or {}
            if not isinstance(data, dict):
                data = {}
        except (OSError, json.JSONDecodeError, TypeError) as exc:
            logger.warning("Could not read config from %s: %s", path, exc)
            data = {}
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ChartConfig:
        """Build from already-parsed settings, coercing each value."""
        min_visible = max(1, _safe_int(data.get("min_visible"), DEFAULT_MIN_VISIBLE))
        cfg = cls(
            default_visible_count=max(
                1,
                _safe_int(data.get("default_visible_count"), DEFAULT_VISIBLE_COUNT),
            ),
            min_visible=min_visible,
            max_visible=max(
                min_visible,
                _safe_int(data.get("max_visible"), DEFAULT_MAX_VISIBLE),
            ),
            price_padding_pct=_safe_float(
                data.get("price_padding_pct"), DEFAULT_PRICE_PADDING_PCT
            ),
            flat_range_threshold_pct=_safe_float(
                data.get("flat_range_threshold_pct"), FLAT_RANGE_THRESHOLD_PCT
            ),
            flat_range_padding_pct=_safe_float(
                data.get("flat_range_padding_pct"), FLAT_RANGE_PADDING_PCT
            ),
            flat_range_min_padding=_safe_float(
                data.get("flat_range_min_padding"), FLAT_RANGE_MIN_PADDING
            ),
            close_only=_safe_bool(data.get("close_only"), False),
            padding_left=_safe_float(data.get("padding_left"), DEFAULT_PADDING_LEFT),
            padding_right=_safe_float(data.get("padding_right"), DEFAULT_PADDING_RIGHT),
            padding_top=_safe_float(data.get("padding_top"), DEFAULT_PADDING_TOP),
            padding_bottom=_safe_float(data.get("padding_bottom"), DEFAULT_PADDING_BOTTOM),
            log_level=_safe_level(data.get("log_level"), DEFAULT_LOG_LEVEL),
        )

        errors = cfg.validate()
        for err in errors:
            logger.warning("Config validation: %s", err)

        return cfg

    # -- validation -------------------------------------------------------

    def validate(self) -> list[str]:
        """Return a list of human-readable validation warnings (empty = OK)."""
        errors: list[str] = []
        if self.default_visible_count < 1:
            errors.append(f"default_visible_count={self.default_visible_count} must be >= 1.")
        if self.min_visible < 1:
            errors.append(f"min_visible={self.min_visible} must be >= 1.")
        if self.max_visible < self.min_visible:
            errors.append(
                f"max_visible={self.max_visible} must be >= min_visible={self.min_visible}."
            )
        if self.price_padding_pct < 0:
            errors.append(f"price_padding_pct={self.price_padding_pct} must be >= 0.")
        if self.flat_range_threshold_pct < 0:
            errors.append(
                f"flat_range_threshold_pct={self.flat_range_threshold_pct} must be >= 0."
            )
        if self.flat_range_padding_pct <= 0:
            errors.append(f"flat_range_padding_pct={self.flat_range_padding_pct} must be > 0.")
        if self.flat_range_min_padding <= 0:
            errors.append(f"flat_range_min_padding={self.flat_range_min_padding} must be > 0.")
        for name in ("padding_left", "padding_right", "padding_top", "padding_bottom"):
            value = getattr(self, name)
            if value < 0:
                errors.append(f"{name}={value} must be >= 0.")
        try:
            resolve_level(self.log_level)
        except ConfigError:
            errors.append(f"log_level={self.log_level!r} is not a logging level name.")
        return errors


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _safe_int(value: Any, default: int) -> int:
    try:
        return int(float(str(value).replace("%", "").strip()))
    except (TypeError, ValueError, OverflowError):
        return default


def _safe_float(value: Any, default: float) -> float:
    try:
        return float(str(value).replace("%", "").strip())
    except (TypeError, ValueError):
        return default


def _safe_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        v = value.strip().lower()
        if v in ("1", "true", "yes", "on"):
            return True
        if v in ("0", "false", "no", "off"):
            return False
    if isinstance(value, (int, float)):
        return bool(value)
    return default


def _safe_level(value: Any, default: str) -> str:
    if value is None:
        return default
    name = str(value).strip().upper()
    try:
        resolve_level(name)
    except ConfigError:
        return default
    return name
