# colour_scheme/__init__.py
"""
colour_scheme package.

Purpose:
  Recolour images onto a user-supplied palette (nearest colour), and derive a
  palette from an image by colour frequency. See colour_scheme.cli for the
  `csor` command line.

Public API:
  parse_palette_lines : palette text lines -> Palette (raises PaletteError).
  parse_palette_text  : whole palette document -> Palette.
  format_palette      : Palette -> '#RRGGBB' lines.
  remap_to_palette    : PixelGrid + Palette -> new PixelGrid (threaded).
  extract_palette     : PixelGrid -> Palette of the most frequent colours (threaded).
  split_columns       : column strips used by both transforms.
  core_types          : Colour, Palette, PixelGrid, Bounds.

Quick start:
  from colour_scheme import parse_palette_text, remap_to_palette
  from colour_scheme.image_io import load_image_grid, save_image_grid
"""

__version__ = "1.1.2"

from . import constants
from . import core_types
from .core_types import Bounds, Colour, Palette, PixelGrid
from .palette_parse import (
    PaletteError,
    format_palette,
    parse_hex_colour,
    parse_palette_lines,
    parse_palette_text,
)
from .partition import default_workers, split_columns
from .remap import remap_to_palette
from .extract import extract_palette

__all__ = [
    "__version__",
    "constants",
    "core_types",
    "Bounds",
    "Colour",
    "Palette",
    "PixelGrid",
    "PaletteError",
    "format_palette",
    "parse_hex_colour",
    "parse_palette_lines",
    "parse_palette_text",
    "default_workers",
    "split_columns",
    "remap_to_palette",
    "extract_palette",
]
