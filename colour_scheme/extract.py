# colour_scheme/extract.py
from __future__ import annotations

"""
Dominant-colour extraction by pixel frequency.

Each worker counts the colours of its own column strip into a private
FrequencyTable. The tables are merged on the calling thread after every worker
has finished, ranked by count and cut to MAX_COLORS.

Alpha is dropped before counting: entries are keyed on RGB and the resulting
palette is fully opaque. Equal counts are ranked by ascending (R, G, B).
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np

from .constants import MAX_COLORS
from .core_types import (
    Colour,
    ColourKeys,
    Palette,
    PixelGrid,
    pack_rgb,
    unpack_rgb,
)
from .partition import resolve_workers, run_column_strips, split_columns


@dataclass(frozen=True)
class FrequencyTable:
    """Distinct packed 0xRRGGBB keys (ascending) with their pixel counts."""

    keys: ColourKeys
    counts: np.ndarray  # int64, same length as keys

    @classmethod
    def empty(cls) -> "FrequencyTable":
        return cls(np.zeros((0,), dtype=np.uint32), np.zeros((0,), dtype=np.int64))

    @classmethod
    def from_pixels(cls, pixels: np.ndarray) -> "FrequencyTable":
        """Count every pixel of a uint8 [...,4] block."""
        if pixels.size == 0:
            return cls.empty()
        keys, counts = np.unique(pack_rgb(pixels), return_counts=True)
        return cls(keys.astype(np.uint32, copy=False), counts.astype(np.int64, copy=False))

    def __len__(self) -> int:
        return int(self.keys.shape[0])

    @property
    def total(self) -> int:
        return int(self.counts.sum())

    def ranked(self) -> "FrequencyTable":
        """Same entries ordered by count descending, then key ascending."""
        order = np.lexsort((self.keys, -self.counts))
        return FrequencyTable(self.keys[order], self.counts[order])

    def as_dict(self) -> Dict[Colour, int]:
        """Colour -> count in the table's current order."""
        rgb = unpack_rgb(self.keys)
        return {Colour.from_rgb(row): int(n) for row, n in zip(rgb, self.counts.tolist())}


def merge_tables(tables: Sequence[FrequencyTable]) -> FrequencyTable:
    """Sum counts per key across tables. Single-threaded reduce."""
    tables = [t for t in tables if len(t)]
    if not tables:
        return FrequencyTable.empty()
    if len(tables) == 1:
        return tables[0]
    all_keys = np.concatenate([t.keys for t in tables])
    all_counts = np.concatenate([t.counts for t in tables])
    keys, inverse = np.unique(all_keys, return_inverse=True)
    counts = np.bincount(inverse.reshape(-1), weights=all_counts, minlength=keys.shape[0])
    return FrequencyTable(keys.astype(np.uint32, copy=False), counts.astype(np.int64))


def count_colours(grid: PixelGrid, *, workers: Optional[int] = None) -> FrequencyTable:
    """Merged frequency table of the whole grid, counted strip by strip."""
    n = resolve_workers(workers)
    if grid.is_empty:
        return FrequencyTable.empty()
    spans = split_columns(grid.min_x, grid.max_x, n)
    partials = run_column_strips(
        lambda s, e: FrequencyTable.from_pixels(grid.columns(s, e)), spans, n
    )
    return merge_tables([t for t in partials if t is not None])


def top_colours(table: FrequencyTable, limit: int = MAX_COLORS) -> List[Colour]:
    """Up to limit opaque colours, most frequent first."""
    ranked = table.ranked()
    rgb = unpack_rgb(ranked.keys[:limit])
    return [Colour.from_rgb(row) for row in rgb]


def extract_palette(
    grid: PixelGrid, *, workers: Optional[int] = None, limit: int = MAX_COLORS
) -> Palette:
    """Palette of the grid's most frequent colours, at most min(limit, MAX_COLORS)."""
    limit = min(int(limit), MAX_COLORS)
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")
    table = count_colours(grid, workers=workers)
    return Palette(tuple(top_colours(table, limit)))


__all__ = [
    "FrequencyTable",
    "merge_tables",
    "count_colours",
    "top_colours",
    "extract_palette",
]
