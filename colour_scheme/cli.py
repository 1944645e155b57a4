#!/usr/bin/env python3
"""
colour_scheme.cli
Recolour an image to a palette file, or extract a palette file from an image.

Usage:
  csor -m generate -p PALETTE -i INPUT -o OUTPUT [--workers N] [--debug]
  csor -m extract -i INPUT -P PALETTE_OUT [--workers N] [--debug]
  csor -v
  csor -h

Modes:
  generate : Replace every pixel with the closest colour from PALETTE.
  extract  : Write the image's most frequent colours (up to 128) to PALETTE_OUT.

Input:
  .png, .jpg or .jpeg, at most 15 MB. Palette files are UTF-8 text, one
  '#RGB' or '#RRGGBB' per line; '//' starts a comment.

Output:
  PNG keeps alpha; JPEG is written at quality 90. Palette files hold one
  uppercase '#RRGGBB' per line.
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

from . import __version__
from .constants import MIN_COLORS
from .core_types import PixelGrid
from .extract import extract_palette
from .image_io import ImageFileError, load_image_grid, save_image_grid, validate_extension
from .palette_data import read_palette_file, save_palette_file
from .palette_parse import PaletteError
from .partition import default_workers
from .remap import remap_to_palette
from .utils import (
    colour_usage_report,
    debug_log,
    enable_line_buffered_stdout,
    error,
    format_seconds_compact,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
    warn,
)

USAGE_LINES = [
    "Usage:",
    "  csor -m generate -p <palettePath> -i <imgInputPath> -o <imgOutputPath>",
    "  csor -m extract -i <imgInputPath> -P <paletteOutputPath>",
    "  csor -v",
    "  csor -h",
]

PROJECT_URL = "https://github.com/vannrr/color-schemorator"

EXAMPLES = (
    "Examples:\n"
    "  csor -m generate -p colors.txt -i original-image.jpg -o new-image.jpg\n"
    "  csor -m extract -i original-image.jpg -P palette.txt\n"
    "\n"
    f"For more information, visit: {PROJECT_URL}\n"
)


# CLI args


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="csor",
        description=(
            "Modify an image's colour palette from a list of hex colour codes\n"
            "(file can have '//' comments), or extract the palette of an image."
        ),
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Display the version and exit"
    )
    parser.add_argument(
        "-m",
        "--mode",
        choices=["generate", "extract"],
        default=None,
        help="Mode of operation: 'generate' or 'extract'",
    )
    parser.add_argument(
        "-p",
        "--palette",
        type=Path,
        default=None,
        help="Palette text file, one hex colour per line (generate)",
    )
    parser.add_argument(
        "-i", "--input", type=Path, default=None, help="Input image (jpg, jpeg, png)"
    )
    parser.add_argument(
        "-o", "--output", type=Path, default=None, help="Output image (generate)"
    )
    parser.add_argument(
        "-P",
        "--palette-out",
        type=Path,
        default=None,
        help="Output palette file (extract)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=default_workers(),
        help="Worker threads (default: CPU count)",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose run details")
    return parser


def print_version_message() -> None:
    log(f"Color Schemorator version {__version__}")
    log("Color Schemorator adjusts the colour palette of an image based on a")
    log("provided list of hex colour codes, or extracts one from an image.")
    log("For more information, visit:")
    log(f"  {PROJECT_URL}")


def print_invalid_args_message() -> None:
    log("Invalid input. Please check your command and try again.")
    log("")
    for line in USAGE_LINES:
        log(line)
    log("")
    log("For more information, use:")
    log("  csor -h")


def _debug_usage(grid: PixelGrid, workers: int, top_k: int = 10) -> None:
    debug_log(f"colours used (top {top_k}):")
    for hex_code, count in colour_usage_report(grid, workers=workers, limit=top_k):
        debug_log(f"  {hex_code}: {count:,}")


# Modes


def generate(
    palette_path: Path, input_path: Path, output_path: Path, workers: int, debug: bool
) -> None:
    """Remap input_path to the palette in palette_path and write output_path."""
    validate_extension(input_path, "input image")
    validate_extension(output_path, "output image")

    palette = read_palette_file(palette_path)
    grid = load_image_grid(input_path)
    print_config_line(
        "generate",
        [
            ("Size", (grid.width, grid.height)),
            ("Palette", len(palette)),
            ("Workers", workers),
        ],
        debug=debug,
    )

    t0 = time.perf_counter()
    mapped = remap_to_palette(grid, palette, workers=workers)
    if debug:
        debug_log(f"remap {format_seconds_compact(time.perf_counter() - t0)}")
        _debug_usage(mapped, workers)

    save_image_grid(output_path, mapped)


def extract(input_path: Path, palette_out: Path, workers: int, debug: bool) -> None:
    """Write the most frequent colours of input_path to palette_out."""
    validate_extension(input_path, "input image")

    grid = load_image_grid(input_path)
    print_config_line(
        "extract",
        [("Size", (grid.width, grid.height)), ("Workers", workers)],
        debug=debug,
    )

    t0 = time.perf_counter()
    palette = extract_palette(grid, workers=workers)
    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Extract", format_seconds_compact(time.perf_counter() - t0)),
                    ("Colours", len(palette)),
                ]
            )
        )
    if len(palette) < MIN_COLORS:
        warn(
            f"extracted {len(palette)} colour(s); a palette file needs at least {MIN_COLORS}"
        )

    save_palette_file(palette_out, palette)


# Entry point


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point. Exits 1 on invalid arguments or failed validation."""
    enable_line_buffered_stdout()
    args = build_parser().parse_args(argv)

    if args.version:
        print_version_message()
        return

    if args.workers < 1:
        error(f"--workers must be >= 1, got {args.workers}")
        sys.exit(1)

    if args.mode == "generate":
        if args.palette is None or args.input is None or args.output is None:
            print_invalid_args_message()
            sys.exit(1)
    elif args.mode == "extract":
        if args.input is None or args.palette_out is None:
            print_invalid_args_message()
            sys.exit(1)
    else:
        print_invalid_args_message()
        sys.exit(1)

    if args.debug:
        print_banner(args.input.name)

    start = time.perf_counter()
    try:
        if args.mode == "generate":
            generate(args.palette, args.input, args.output, args.workers, args.debug)
            label = "Image generated"
        else:
            extract(args.input, args.palette_out, args.workers, args.debug)
            label = "Palette extracted"
    except (PaletteError, ImageFileError, OSError) as e:
        error(str(e))
        sys.exit(1)

    log(f"{label} successfully in {format_seconds_compact(time.perf_counter() - start)}")


if __name__ == "__main__":
    main()
