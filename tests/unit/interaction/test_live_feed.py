"""Tests for candleview.interaction.live_feed."""

from __future__ import annotations

import pytest

from candleview.engine.chart_engine import ChartEngine
from candleview.engine.viewport import Viewport
from candleview.interaction.live_feed import apply_tick, is_following_latest

LAST_TIME = 1_700_000_000 + 499 * 60


class TestIsFollowingLatest:
    def test_at_newest(self, engine_500: ChartEngine) -> None:
        assert is_following_latest(engine_500) is True

    def test_scrolled_back(self, engine_500: ChartEngine) -> None:
        assert is_following_latest(engine_500.pan(-1)) is False

    def test_window_wider_than_data(self, series_factory) -> None:
        engine = ChartEngine(series_factory(30), viewport=Viewport(0, 100, 30))
        assert is_following_latest(engine) is True


class TestApplyTick:
    def test_first_tick_on_empty_engine(self) -> None:
        engine, scrolled = apply_tick(ChartEngine([], 100), 1000, 5.0)
        assert scrolled is True
        assert len(engine) == 1
        assert engine.get_latest_price() == 5.0
        assert engine.viewport == Viewport(0, 1, 1)

    def test_same_time_updates_latest(self, engine_500: ChartEngine) -> None:
        previous = engine_500.get_latest_candle()
        assert previous is not None
        engine, _ = apply_tick(engine_500, LAST_TIME, 700.0)
        latest = engine.get_latest_candle()
        assert len(engine) == 500
        assert latest is not None
        assert latest.close == 700.0
        assert latest.high == 700.0
        assert latest.low == previous.low
        assert latest.open == previous.open

    def test_same_time_low_tick(self, engine_500: ChartEngine) -> None:
        engine, _ = apply_tick(engine_500, LAST_TIME, 1.0)
        latest = engine.get_latest_candle()
        assert latest is not None
        assert latest.low == 1.0

    def test_new_time_appends_and_follows(self, engine_500: ChartEngine) -> None:
        engine, scrolled = apply_tick(engine_500, LAST_TIME + 60, 600.0)
        assert scrolled is True
        assert len(engine) == 501
        assert engine.viewport == Viewport(401, 100, 501)
        latest = engine.get_latest_candle()
        assert latest is not None
        assert (latest.open, latest.high, latest.low, latest.close) == (600.0,) * 4

    def test_scrolled_back_keeps_window(self, engine_500: ChartEngine) -> None:
        engine, scrolled = apply_tick(engine_500.pan(-50), LAST_TIME + 60, 600.0)
        assert scrolled is False
        assert engine.viewport == Viewport(350, 100, 501)

    def test_follow_disabled(self, engine_500: ChartEngine) -> None:
        engine, scrolled = apply_tick(engine_500, LAST_TIME + 60, 600.0, follow_latest=False)
        assert scrolled is False
        assert engine.viewport == Viewport(400, 100, 501)

    def test_out_of_order_tick_appended(self, engine_500: ChartEngine) -> None:
        engine, _ = apply_tick(engine_500, LAST_TIME - 600, 42.0)
        assert len(engine) == 501
        assert engine.get_latest_price() == 42.0

    def test_source_engine_unchanged(self, engine_500: ChartEngine) -> None:
        apply_tick(engine_500, LAST_TIME + 60, 600.0)
        assert len(engine_500) == 500
        assert engine_500.get_latest_price() == pytest.approx(599.5)

    def test_scale_follows_tick(self, engine_500: ChartEngine) -> None:
        engine, _ = apply_tick(engine_500, LAST_TIME, 900.0)
        scale = engine.get_price_scale()
        assert scale is not None
        assert scale.contains(900.0)
