"""Tests for candleview.engine.viewport."""

from __future__ import annotations

import pytest

from candleview.engine.viewport import IndexRange, Viewport


class TestLast:
    def test_most_recent_window(self) -> None:
        vp = Viewport.last(100, 500)
        assert vp.start_index == 400
        assert vp.visible_count == 100
        assert vp.total_count == 500

    @pytest.mark.parametrize("visible, total", [(1, 1), (10, 10), (50, 500), (499, 500)])
    def test_ends_at_total_when_it_fits(self, visible: int, total: int) -> None:
        vp = Viewport.last(visible, total)
        assert vp.start_index + vp.visible_count == total

    @pytest.mark.parametrize("visible, total", [(100, 20), (100, 100), (5, 1)])
    def test_starts_at_zero_when_larger(self, visible: int, total: int) -> None:
        vp = Viewport.last(visible, total)
        assert vp.start_index == 0
        assert vp.visible_count == total

    @pytest.mark.parametrize("visible", [0, -3])
    def test_non_positive_visible_shows_newest(self, visible: int) -> None:
        vp = Viewport.last(visible, 500)
        assert (vp.start_index, vp.visible_count) == (499, 1)
        assert len(vp.visible_range()) == 1

    def test_empty_dataset(self) -> None:
        vp = Viewport.last(100, 0)
        assert vp.start_index == 0
        assert vp.visible_count == 100
        assert len(vp.visible_range()) == 0


class TestConstruction:
    def test_negative_inputs_clamped(self) -> None:
        vp = Viewport(start_index=-5, visible_count=0, total_count=-1)
        assert vp.start_index == 0
        assert vp.visible_count == 1
        assert vp.total_count == 0

    def test_fit_all(self) -> None:
        vp = Viewport.fit_all(250)
        assert (vp.start_index, vp.visible_count, vp.total_count) == (0, 250, 250)

    def test_fit_all_empty(self) -> None:
        assert Viewport.fit_all(0).visible_count == 1

    def test_frozen(self) -> None:
        vp = Viewport.last(10, 20)
        with pytest.raises(AttributeError):
            vp.start_index = 3  # type: ignore[misc]

    def test_value_equality(self) -> None:
        assert Viewport(1, 2, 3) == Viewport(1, 2, 3)

    def test_with_total_count(self) -> None:
        vp = Viewport(400, 100, 500).with_total_count(510)
        assert vp == Viewport(400, 100, 510)


class TestPan:
    def test_pan_back(self) -> None:
        vp = Viewport.last(100, 500).pan(-10)
        assert vp.start_index == 390
        assert vp.visible_count == 100

    def test_pan_forward(self) -> None:
        assert Viewport(100, 100, 500).pan(25).start_index == 125

    def test_clamped_at_newest(self) -> None:
        assert Viewport.last(100, 500).pan(50).start_index == 400

    def test_clamped_at_oldest(self) -> None:
        assert Viewport(5, 100, 500).pan(-50).start_index == 0

    def test_repeated_pan_stays_in_bounds(self) -> None:
        vp = Viewport.last(100, 500)
        for _ in range(20):
            vp = vp.pan(-37)
            assert 0 <= vp.start_index <= 400
        assert vp.start_index == 0
        for _ in range(20):
            vp = vp.pan(41)
            assert 0 <= vp.start_index <= 400
        assert vp.start_index == 400

    def test_window_larger_than_data(self) -> None:
        vp = Viewport(0, 100, 30)
        assert vp.pan(5).start_index == 0
        assert vp.pan(-5).start_index == 0

    def test_returns_new_value(self) -> None:
        vp = Viewport(100, 100, 500)
        moved = vp.pan(1)
        assert vp.start_index == 100
        assert moved is not vp


class TestZoom:
    def test_zoom_in(self) -> None:
        vp = Viewport(400, 100, 500).zoom(-20)
        assert vp.visible_count == 80
        assert vp.start_index == 400

    def test_zoom_out_reclamps_start(self) -> None:
        vp = Viewport(400, 100, 500).zoom(50)
        assert vp.visible_count == 150
        assert vp.start_index == 350

    def test_min_visible(self) -> None:
        assert Viewport(400, 10, 500).zoom(-50).visible_count == 5

    def test_custom_limits(self) -> None:
        vp = Viewport(0, 50, 500)
        assert vp.zoom(-45, min_visible=20).visible_count == 20
        assert vp.zoom(400, max_visible=120).visible_count == 120

    def test_max_limited_by_total(self) -> None:
        vp = Viewport(0, 100, 300).zoom(5000)
        assert vp.visible_count == 300
        assert vp.start_index == 0

    def test_tiny_dataset(self) -> None:
        vp = Viewport(0, 3, 3).zoom(-1)
        assert vp.visible_count == 5
        assert vp.start_index == 0
        assert len(vp.visible_range()) == 3


class TestZoomAround:
    def test_anchor_in_middle(self) -> None:
        vp = Viewport(400, 100, 500).zoom_around(450, -20)
        # ratio 0.5 -> start = 450 - 80 * 0.5 = 410
        assert vp.visible_count == 80
        assert vp.start_index == 410

    def test_anchor_at_start(self) -> None:
        vp = Viewport(200, 100, 500).zoom_around(200, -50)
        assert vp.start_index == 200
        assert vp.visible_count == 50

    @pytest.mark.parametrize("anchor", [210, 233, 260, 299])
    @pytest.mark.parametrize("delta", [-30, -1, 1, 40])
    def test_anchor_keeps_relative_position(self, anchor: int, delta: int) -> None:
        before = Viewport(200, 100, 1000)
        after = before.zoom_around(anchor, delta)
        ratio_before = (anchor - before.start_index) / before.visible_count
        ratio_after = (anchor - after.start_index) / after.visible_count
        # Off by at most half a candle after rounding the new start
        assert abs(ratio_after - ratio_before) <= 0.5 / after.visible_count + 1e-12

    def test_clamped_near_edge(self) -> None:
        vp = Viewport(400, 100, 500).zoom_around(495, 60)
        assert vp.visible_count == 160
        assert vp.start_index == 340

    def test_off_window_anchor_still_applies_formula(self) -> None:
        # ratio = (100 - 200) / 100 = -1; start = 100 - 50 * -1 = 150
        vp = Viewport(200, 100, 1000).zoom_around(100, -50)
        assert vp.start_index == 150


class TestRanges:
    def test_visible_range_clamped(self) -> None:
        rng = Viewport(450, 100, 500).visible_range()
        assert rng == IndexRange(450, 500)
        assert len(rng) == 50

    def test_end_index_unclamped(self) -> None:
        assert Viewport(450, 100, 500).end_index == 550

    def test_index_range_protocols(self) -> None:
        rng = IndexRange(3, 6)
        assert list(rng) == [3, 4, 5]
        assert 3 in rng
        assert 6 not in rng
        assert list(range(10))[rng.as_slice()] == [3, 4, 5]

    def test_inverted_range_is_empty(self) -> None:
        rng = Viewport(600, 100, 500).visible_range()
        assert len(rng) == 0
        assert list(rng) == []

    def test_can_pan_flags(self) -> None:
        assert Viewport.last(100, 500).can_pan_left is True
        assert Viewport.last(100, 500).can_pan_right is False
        assert Viewport(0, 100, 500).can_pan_left is False
        assert Viewport(0, 100, 500).can_pan_right is True
