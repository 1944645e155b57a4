# colour_scheme/palette_data.py
from __future__ import annotations

"""
Palette files on disk.

Exports:
  read_palette_file(path) -> Palette
  save_palette_file(path, palette) -> Path
"""

from pathlib import Path

from .constants import PALETTE_FILE_MAX_MB
from .core_types import Palette
from .palette_parse import PaletteError, format_palette, parse_palette_text


def read_palette_file(path: Path, max_mb: int = PALETTE_FILE_MAX_MB) -> Palette:
    """
    Load and validate a UTF-8 palette file.

    Raises PaletteError for oversized, undecodable or invalid contents,
    OSError when the file cannot be read.
    """
    path = Path(path)
    size = path.stat().st_size
    if size > max_mb * 1024 * 1024:
        raise PaletteError([f"Input palette file size {size} bytes exceeds {max_mb}MB"])
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise PaletteError([f"error reading file: {e}"]) from e
    return parse_palette_text(text)


def save_palette_file(path: Path, palette: Palette) -> Path:
    """Write one '#RRGGBB' per line (no trailing newline)."""
    path = Path(path)
    if not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_palette(palette), encoding="utf-8")
    return path


__all__ = ["read_palette_file", "save_palette_file"]
