# colour_scheme/remap.py
from __future__ import annotations

"""
Nearest-colour remapping onto a fixed palette.

Functions:
  nearest_palette_indices(rows, pal_rows) -> index per row
  remap_strip(src, out, pal_rows, start_x, end_x)
  remap_to_palette(grid, palette, *, workers=None) -> PixelGrid

Distance is the plain sum of squared 8-bit RGBA channel differences. Ties go
to the earliest palette entry, so the result is fully determined by the input
grid and palette, whatever the worker count.
"""

from typing import Optional

import numpy as np

from .constants import NEAREST_CHUNK
from .core_types import (
    Palette,
    PixelGrid,
    U8Rows,
    pack_rgba,
    unpack_rgba,
)
from .partition import resolve_workers, run_column_strips, split_columns


def nearest_palette_indices(
    rows: U8Rows, pal_rows: U8Rows, chunk: int = NEAREST_CHUNK
) -> np.ndarray:
    """
    For each RGBA row pick the palette row with the least squared distance.

    Args:
      rows: uint8 [N,4]
      pal_rows: uint8 [P,4], P >= 1
    Returns:
      int64 [N] palette indices (first index wins on ties)
    """
    pal = pal_rows.astype(np.int32)
    out = np.empty((rows.shape[0],), dtype=np.int64)
    for i in range(0, rows.shape[0], chunk):
        pts = rows[i : i + chunk].astype(np.int32)
        diff = pts[:, None, :] - pal[None, :, :]
        d2 = np.sum(diff * diff, axis=2)
        out[i : i + chunk] = np.argmin(d2, axis=1)
    return out


def remap_strip(
    src: PixelGrid, out: PixelGrid, pal_rows: U8Rows, start_x: int, end_x: int
) -> None:
    """Fill out's columns [start_x, end_x) with the nearest palette colours."""
    block = src.columns(start_x, end_x)
    H, W, _ = block.shape
    if H == 0 or W == 0:
        return
    # Each distinct source colour is matched once.
    keys = pack_rgba(block)
    uniq, inverse = np.unique(keys, return_inverse=True)
    nearest = nearest_palette_indices(unpack_rgba(uniq), pal_rows)
    mapped = pal_rows[nearest[inverse.reshape(-1)]]
    out.columns(start_x, end_x)[...] = mapped.reshape(H, W, 4)


def remap_to_palette(
    grid: PixelGrid, palette: Palette, *, workers: Optional[int] = None
) -> PixelGrid:
    """
    New grid with identical bounds where every pixel is its nearest palette colour.

    The columns are split into one strip per worker; each worker writes only
    its own strip of the output. Returns after every worker has finished.
    """
    if len(palette) == 0:
        raise ValueError("cannot remap onto an empty palette")
    n = resolve_workers(workers)
    out = PixelGrid.blank(grid.bounds)
    if grid.is_empty:
        return out

    pal_rows = palette.to_array()
    spans = split_columns(grid.min_x, grid.max_x, n)
    run_column_strips(
        lambda s, e: remap_strip(grid, out, pal_rows, s, e), spans, n
    )
    return out


__all__ = ["nearest_palette_indices", "remap_strip", "remap_to_palette"]
