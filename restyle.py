#!/usr/bin/env python3
"""
restyle.py
Recolour an image toward the Gruvbox palette and apply a style.

Usage:
  python restyle.py INPUT [OUTPUT] --strength S --style [gruvbox|retro|synthwave|mosaic|watercolor] --debug
  python restyle.py INPUT [OUTPUT] [STRENGTH] [STYLE]
  python restyle.py            (prints usage and the style list)

Styles:
  gruvbox    : edge-aware harmonisation (default).
  retro      : edge-aware harmonisation, VHS chroma shift and scanlines, film grain.
  synthwave  : softer harmonisation, red/blue gradient, saturation boost.
  mosaic     : harmonisation then block pixelation (--block-size).
  watercolor : harmonisation then blur with paper noise.

Output:
  Format follows the OUTPUT suffix. Defaults to output.png.

Notes:
  One image per run. CPU bound; --workers splits rows over threads.
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

import numpy as np

from gruvstyle.constants import BLEND_METHODS, DEFAULT_METHOD, DEFAULT_METRIC, METRICS
from gruvstyle.image_io import load_image_rgb, save_image_rgb
from gruvstyle.styles import STYLE_NAMES, apply_style, parse_style
from gruvstyle.utils import (
    debug_log,
    default_workers,
    error,
    format_seconds_compact,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
)


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        src: input image Path
        dst: output Path (default output.png)
        strength: float, clamped later per method
        style: style name
        block_size: mosaic block size
        method: "sigmoid" | "overshoot"
        metric: "cie76" | "ciede2000"
        quantize_de: compare truncated ΔE like older releases
        workers: threads for harmonisation
        seed: optional RNG seed for grain / watercolor noise
        debug: bool
    """
    parser = argparse.ArgumentParser(
        prog="restyle",
        description="Recolour an image toward the Gruvbox palette and apply a style.",
    )
    parser.add_argument("src", type=Path, nargs="?", default=None, help="Input image")
    parser.add_argument(
        "dst", type=Path, nargs="?", default=Path("output.png"), help="Output image"
    )
    parser.add_argument(
        "strength_pos", metavar="strength", type=float, nargs="?", default=None,
        help="Same as --strength",
    )
    parser.add_argument(
        "style_pos", metavar="style", nargs="?", default=None,
        help="Same as --style; unknown names fall back to gruvbox",
    )
    parser.add_argument(
        "--strength",
        type=float,
        default=None,
        help="Pull toward the palette. sigmoid: 0..1, overshoot: 0..2. Default 1.0.",
    )
    parser.add_argument(
        "--style", choices=list(STYLE_NAMES), default=None, help="Style chain (default gruvbox)."
    )
    parser.add_argument(
        "--block-size", type=int, default=16, help="Block size for the mosaic style"
    )
    parser.add_argument(
        "--method", choices=list(BLEND_METHODS), default=DEFAULT_METHOD, help="Blend formula."
    )
    parser.add_argument(
        "--metric", choices=list(METRICS), default=DEFAULT_METRIC, help="Palette distance."
    )
    parser.add_argument(
        "--quantize-de",
        action="store_true",
        help="Compare ΔE truncated to 1/1000 when picking palette entries.",
    )
    parser.add_argument(
        "--workers", type=int, default=default_workers(), help="Internal threads"
    )
    parser.add_argument("--seed", type=int, default=None, help="Noise seed")
    parser.add_argument("--debug", action="store_true", help="Verbose details")
    args = parser.parse_args(argv)

    # Flags win over the positional forms.
    if args.strength is None:
        args.strength = args.strength_pos if args.strength_pos is not None else 1.0
    if args.style is None:
        args.style = args.style_pos if args.style_pos is not None else "gruvbox"
    return args


def _print_usage() -> None:
    print("Usage: restyle <input> [output] [strength=1.0] [style]", file=sys.stderr)
    print("Available styles:", file=sys.stderr)
    for name in STYLE_NAMES:
        suffix = " (default)" if name == "gruvbox" else ""
        print(f"  - {name}{suffix}", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns the process exit status."""
    args = parse_cli_args(argv)
    if args.src is None:
        _print_usage()
        return 0

    print_config_line(
        "run",
        [
            ("Style", args.style),
            ("Strength", args.strength),
            ("Method", args.method),
            ("Workers", args.workers),
        ],
        debug=False,
    )

    src: Path = args.src
    if not src.exists():
        error(f"not found: {src}")
        return 2

    print_banner(src.name)
    t_start = time.perf_counter()
    img = load_image_rgb(src)
    height, width = img.shape[:2]
    t_loaded = time.perf_counter()
    if args.debug:
        debug_log(key_value_pairs_to_string([("Loaded", f"{width}x{height}")]))

    style = parse_style(args.style, block_size=args.block_size)
    rng = np.random.default_rng(args.seed)
    out = apply_style(
        img,
        style,
        args.strength,
        method=args.method,
        metric=args.metric,
        quantize=args.quantize_de,
        rng=rng,
        workers=args.workers,
        debug=args.debug,
    )
    t_styled = time.perf_counter()

    dst = save_image_rgb(args.dst, out)
    t_saved = time.perf_counter()

    if args.debug:
        debug_log(
            f"Total {format_seconds_compact(t_saved - t_start)}  "
            f"(load={format_seconds_compact(t_loaded - t_start)}, "
            f"style={format_seconds_compact(t_styled - t_loaded)}, "
            f"save={format_seconds_compact(t_saved - t_styled)})"
        )
    log(f"Styled image saved to {dst}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
