#!/usr/bin/env python3
"""Render a static candlestick preview PNG through the chart engine.

Usage::

    python scripts/render_preview.py                          # random walk
    python scripts/render_preview.py --input candles.json      # [{"time": ..., "open": ...}, ...]
    python scripts/render_preview.py --pan -20 --zoom -30 --output out/preview.png
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from candleview.core.config import ChartConfig

# ---------------------------------------------------------------------------
# Ensure candleview is importable when run from a source checkout
# ---------------------------------------------------------------------------
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if _SRC_DIR.is_dir() and str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    p.add_argument("--input", type=Path, help="JSON file with a list of candle objects.")
    p.add_argument(
        "--config", type=Path, help="Settings JSON (default: ./chart_settings.json if present)."
    )
    p.add_argument("--count", type=int, default=500, help="Random-walk length.")
    p.add_argument("--seed", type=int, default=7)
    p.add_argument("--visible", type=int, default=None, help="Initial visible candles.")
    p.add_argument("--pan", type=int, default=0, help="Candles to pan (negative = older).")
    p.add_argument("--zoom", type=int, default=0, help="Visible-count delta.")
    p.add_argument("--close-only", action="store_true", help="Scale on closes only.")
    p.add_argument("--width", type=int, default=800)
    p.add_argument("--height", type=int, default=450)
    p.add_argument("--output", type=Path, default=Path("preview.png"))
    p.add_argument("--log-dir", type=Path, default=_PROJECT_ROOT / "logs")
    p.add_argument("--log-level", help="DEBUG, INFO, ... (default: settings log_level).")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    from candleview.core.config import ChartConfig
    from candleview.core.constants import SETTINGS_FILENAME
    from candleview.core.exceptions import ConfigError
    from candleview.core.logging_setup import setup_logger, teardown_logger

    args = _parse_args(argv)

    if args.config:
        config = ChartConfig.from_file(args.config)
    elif Path(SETTINGS_FILENAME).is_file():
        config = ChartConfig.from_file(Path(SETTINGS_FILENAME))
    else:
        config = ChartConfig()

    try:
        logger = setup_logger(log_dir=args.log_dir, level=args.log_level or config.log_level)
    except ConfigError as exc:
        print(f"render_preview: {exc}", file=sys.stderr)
        return 2

    try:
        return _render(args, config, logger)
    finally:
        teardown_logger()


def _render(args: argparse.Namespace, config: ChartConfig, logger: logging.Logger) -> int:
    from candleview.core.formatting import candle_summary
    from candleview.engine.chart_engine import ChartEngine
    from candleview.models.candle import Candle
    from candleview.preview.matplotlib_renderer import random_walk, render_engine, save_preview

    if args.input:
        try:
            rows = json.loads(args.input.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("Could not read candles from %s: %s", args.input, exc)
            return 1
        if not isinstance(rows, list):
            logger.error("Expected a JSON list of candles in %s", args.input)
            return 1
        candles = [Candle.from_mapping(r) for r in rows if isinstance(r, dict)]
        for i, c in enumerate(candles):
            for problem in c.validate():
                logger.warning("Candle %d: %s", i, problem)
    else:
        candles = random_walk(args.count, seed=args.seed)

    engine = ChartEngine(
        candles,
        args.visible,
        close_only=True if args.close_only else None,
        config=config,
    )
    if args.zoom:
        engine = engine.zoom(args.zoom)
    if args.pan:
        engine = engine.pan(args.pan)

    logger.info(
        "Rendering %d/%d candles (%r)",
        len(engine.get_visible_candles()),
        len(engine),
        engine.viewport,
    )
    latest = engine.get_latest_candle()
    if latest is not None:
        logger.info("Latest: %s", candle_summary(latest))
    title = args.input.name if args.input else "random walk"
    fig = render_engine(engine, args.width, args.height, title=title)
    save_preview(fig, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
