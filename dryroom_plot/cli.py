from __future__ import annotations

import argparse
from dataclasses import replace
import json
import logging
from pathlib import Path

from dryroom_plot.adapters import bundle_from_mapping
from dryroom_plot.options import DrawMode, RenderOptions, load_options
from dryroom_plot.renderer import render
from dryroom_plot.surface import RasterSurface


LOGGER = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="dryroom-plot")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("render", help="Render a temperature/humidity bundle (JSON) to a PNG.")
    run.add_argument("bundle", type=Path, help="JSON object with temperature, humidity and timestamps arrays.")
    run.add_argument("--out", type=Path, required=True)
    run.add_argument("--mode", choices=[mode.value for mode in DrawMode], default=DrawMode.COMBINED.value)
    run.add_argument("--width", type=int, default=None, help="Surface width. Default: preset width of the mode.")
    run.add_argument("--height", type=int, default=None, help="Surface height. Default: preset height of the mode.")
    run.add_argument("--config", type=Path, default=None, help="TOML file with render options.")
    run.add_argument("--tick-count", type=int, default=None)
    run.add_argument("--max-time-labels", type=int, default=None)
    run.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "render":
        mode = DrawMode(args.mode)
        options = _build_options(args.config, args.tick_count, args.max_time_labels)
        width, height = _resolve_dimensions(options, mode, args.width, args.height)
        with args.bundle.open("r", encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, dict):
            raise ValueError(f"bundle file must hold a JSON object: {args.bundle}")
        bundle = bundle_from_mapping(raw)
        LOGGER.info("loaded bundle: samples=%d source=%s", len(bundle), args.bundle)

        surface = RasterSurface(width, height)
        render(surface, bundle, mode, options)
        out = surface.save_png(args.out)
        print(f"render complete: mode={mode.value} size={width}x{height} samples={len(bundle)} out={out}")
        return

    raise RuntimeError(f"unsupported command: {args.command}")


def _build_options(config: Path | None, tick_count: int | None, max_time_labels: int | None) -> RenderOptions:
    options = load_options(config) if config is not None else RenderOptions()
    overrides = {}
    if tick_count is not None:
        overrides["tick_count"] = tick_count
    if max_time_labels is not None:
        overrides["max_time_labels"] = max_time_labels
    if not overrides:
        return options
    return replace(options, **overrides)


def _resolve_dimensions(options: RenderOptions, mode: DrawMode, width: int | None, height: int | None) -> tuple[int, int]:
    if width is not None and width <= 0:
        raise ValueError("width must be > 0")
    if height is not None and height <= 0:
        raise ValueError("height must be > 0")
    preset_w, preset_h = options.layout_for(mode).preferred_size
    return (width if width is not None else preset_w, height if height is not None else preset_h)
