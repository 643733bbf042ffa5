"""Tests for candleview.core.config."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest

from candleview.core.config import ChartConfig


class TestChartConfigDefaults:
    def test_default_construction(self) -> None:
        cfg = ChartConfig()
        assert cfg.default_visible_count == 100
        assert cfg.min_visible == 5
        assert cfg.max_visible == 1000
        assert cfg.price_padding_pct == 0.05
        assert cfg.flat_range_threshold_pct == 0.001
        assert cfg.flat_range_padding_pct == 0.05
        assert cfg.flat_range_min_padding == 0.01
        assert cfg.close_only is False
        assert (cfg.padding_left, cfg.padding_right, cfg.padding_top, cfg.padding_bottom) == (
            60.0,
            10.0,
            10.0,
            40.0,
        )
        assert cfg.log_level == "INFO"

    def test_frozen(self) -> None:
        cfg = ChartConfig()
        with pytest.raises(AttributeError):
            cfg.min_visible = 3  # type: ignore[misc]


class TestChartConfigValidation:
    def test_valid_config_no_errors(self) -> None:
        assert ChartConfig().validate() == []

    def test_max_below_min(self) -> None:
        errors = ChartConfig(min_visible=50, max_visible=10).validate()
        assert any("max_visible" in e for e in errors)

    def test_zero_min_visible(self) -> None:
        errors = ChartConfig(min_visible=0).validate()
        assert any("min_visible" in e for e in errors)

    def test_negative_padding_pct(self) -> None:
        errors = ChartConfig(price_padding_pct=-0.1).validate()
        assert any("price_padding_pct" in e for e in errors)

    def test_zero_flat_padding(self) -> None:
        errors = ChartConfig(flat_range_min_padding=0.0).validate()
        assert any("flat_range_min_padding" in e for e in errors)

    def test_negative_pixel_padding(self) -> None:
        errors = ChartConfig(padding_top=-1.0).validate()
        assert any("padding_top" in e for e in errors)

    def test_unknown_log_level(self) -> None:
        errors = ChartConfig(log_level="LOUD").validate()
        assert any("log_level" in e for e in errors)


class TestChartConfigFromFile:
    def test_load_valid_file(self, settings_file: Path) -> None:
        cfg = ChartConfig.from_file(settings_file)
        assert cfg.default_visible_count == 80
        assert cfg.min_visible == 10
        assert cfg.max_visible == 400
        assert cfg.price_padding_pct == 0.1
        assert cfg.close_only is True
        assert cfg.padding_left == 72.0
        # Others should be defaults
        assert cfg.padding_bottom == 40.0

    def test_missing_file(self, tmp_path: Path) -> None:
        cfg = ChartConfig.from_file(tmp_path / "does_not_exist.json")
        assert cfg == ChartConfig()

    def test_corrupt_json(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        p = tmp_path / "bad.json"
        p.write_text("{{{invalid json")
        with caplog.at_level(logging.WARNING, logger="candleview.core.config"):
            cfg = ChartConfig.from_file(p)
        assert cfg == ChartConfig()
        assert "Could not read config" in caplog.text

    def test_empty_file(self, tmp_path: Path) -> None:
        p = tmp_path / "empty.json"
        p.write_text("")
        assert ChartConfig.from_file(p) == ChartConfig()

    def test_non_dict_json(self, tmp_path: Path) -> None:
        p = tmp_path / "list.json"
        p.write_text(json.dumps([1, 2, 3]))
        assert ChartConfig.from_file(p) == ChartConfig()


class TestChartConfigFromDict:
    def test_string_values_coerced(self) -> None:
        cfg = ChartConfig.from_dict(
            {"default_visible_count": "60", "price_padding_pct": "0.02", "close_only": "yes"}
        )
        assert cfg.default_visible_count == 60
        assert cfg.price_padding_pct == 0.02
        assert cfg.close_only is True

    def test_unparseable_values_use_defaults(self) -> None:
        cfg = ChartConfig.from_dict({"min_visible": "many", "padding_left": None, "close_only": []})
        assert cfg.min_visible == 5
        assert cfg.padding_left == 60.0
        assert cfg.close_only is False

    def test_max_visible_raised_to_min(self) -> None:
        cfg = ChartConfig.from_dict({"min_visible": 50, "max_visible": 10})
        assert cfg.max_visible == 50

    def test_visible_counts_at_least_one(self) -> None:
        cfg = ChartConfig.from_dict({"default_visible_count": 0, "min_visible": -4})
        assert cfg.default_visible_count == 1
        assert cfg.min_visible == 1

    def test_validation_warnings_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        data: dict[str, Any] = {"price_padding_pct": -1}
        with caplog.at_level(logging.WARNING, logger="candleview.core.config"):
            cfg = ChartConfig.from_dict(data)
        assert cfg.price_padding_pct == -1.0
        assert "price_padding_pct" in caplog.text

    def test_log_level_normalised(self) -> None:
        assert ChartConfig.from_dict({"log_level": " debug "}).log_level == "DEBUG"

    @pytest.mark.parametrize("value", ["chatty", 10, None])
    def test_log_level_falls_back_to_info(self, value: Any) -> None:
        assert ChartConfig.from_dict({"log_level": value}).log_level == "INFO"
