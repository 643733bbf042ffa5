"""Shared pytest fixtures for candleview tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from candleview.core.config import ChartConfig
from candleview.engine.chart_engine import ChartEngine
from candleview.models.candle import Candle


def make_series(count: int, base: float = 100.0, step: float = 1.0) -> list[Candle]:
    """Deterministic rising series: candle *i* spans ``base + i*step`` +/- 2."""
    out: list[Candle] = []
    for i in range(count):
        mid = base + i * step
        out.append(
            Candle(
                time=1_700_000_000 + i * 60,
                open=mid - 0.5,
                high=mid + 2.0,
                low=mid - 2.0,
                close=mid + 0.5,
                volume=10.0 + i,
            )
        )
    return out


@pytest.fixture
def series_factory() -> Callable[..., list[Candle]]:
    return make_series


@pytest.fixture
def three_candles() -> list[Candle]:
    """lows {100, 105, 115}, highs {110, 120, 125}."""
    return [
        Candle(time=1, open=102.0, high=110.0, low=100.0, close=108.0),
        Candle(time=2, open=108.0, high=120.0, low=105.0, close=118.0),
        Candle(time=3, open=118.0, high=125.0, low=115.0, close=121.0),
    ]


@pytest.fixture
def engine_500() -> ChartEngine:
    """500 candles, newest 100 visible."""
    return ChartEngine(make_series(500), 100)


@pytest.fixture
def sample_config() -> ChartConfig:
    return ChartConfig()


@pytest.fixture
def sample_settings_dict() -> dict[str, Any]:
    """A raw chart_settings.json-style dict for testing config loading."""
    return {
        "default_visible_count": 80,
        "min_visible": 10,
        "max_visible": 400,
        "price_padding_pct": 0.1,
        "close_only": True,
        "padding_left": 72,
    }


@pytest.fixture
def settings_file(tmp_path: Path, sample_settings_dict: dict[str, Any]) -> Path:
    """Write a sample chart_settings.json and return its path."""
    p = tmp_path / "chart_settings.json"
    p.write_text(json.dumps(sample_settings_dict, indent=2), encoding="utf-8")
    return p
