# colour_scheme/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

from dataclasses import dataclass
from typing import Iterator, NamedTuple, Sequence, Tuple, Union, overload

import numpy as np
from numpy.typing import NDArray

from .constants import MAX_COLORS

# Basic aliases

RGBTuple = Tuple[int, int, int]
RGBATuple = Tuple[int, int, int, int]
HexStr = str

U8Image = NDArray[np.uint8]  # (H, W, 4) RGBA
U8Rows = NDArray[np.uint8]  # (N, 4) RGBA rows
ColourKeys = NDArray[np.uint32]  # (N,) packed 0xRRGGBB or 0xRRGGBBAA
ColumnRange = Tuple[int, int]  # [start_x, end_x)


class Bounds(NamedTuple):
    """Pixel rectangle with exclusive max edges."""

    min_x: int
    min_y: int
    max_x: int
    max_y: int


# Value objects


@dataclass(frozen=True)
class Colour:
    """Straight (non-premultiplied) 8-bit RGBA colour."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            v = getattr(self, name)
            if not 0 <= int(v) <= 255:
                raise ValueError(f"channel {name}={v} outside 0..255")
            object.__setattr__(self, name, int(v))

    @property
    def rgb(self) -> RGBTuple:
        return (self.r, self.g, self.b)

    @property
    def rgba(self) -> RGBATuple:
        return (self.r, self.g, self.b, self.a)

    @property
    def is_opaque(self) -> bool:
        return self.a == 255

    def to_hex(self) -> HexStr:
        """Uppercase '#RRGGBB' (alpha is not part of the text format)."""
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    @classmethod
    def from_rgb(cls, rgb: Sequence[int]) -> "Colour":
        """Opaque colour from an (r, g, b) sequence or array row."""
        return cls(int(rgb[0]), int(rgb[1]), int(rgb[2]), 255)


@dataclass(frozen=True)
class Palette:
    """
    Ordered, duplicate-free, immutable sequence of colours.

    At most MAX_COLORS entries. The lower bound is a parsing rule, not a type
    rule: an extracted palette of a flat image holds a single colour.
    """

    colours: Tuple[Colour, ...] = ()

    def __post_init__(self) -> None:
        cols = tuple(self.colours)
        for c in cols:
            if not isinstance(c, Colour):
                raise TypeError(f"palette entries must be Colour, got {type(c).__name__}")
        if len(cols) > MAX_COLORS:
            raise ValueError(f"palette holds {len(cols)} colours, max is {MAX_COLORS}")
        if len(set(cols)) != len(cols):
            raise ValueError("palette colours must be distinct")
        object.__setattr__(self, "colours", cols)

    def __len__(self) -> int:
        return len(self.colours)

    def __iter__(self) -> Iterator[Colour]:
        return iter(self.colours)

    @overload
    def __getitem__(self, index: int) -> Colour: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[Colour, ...]: ...

    def __getitem__(self, index: Union[int, slice]):
        return self.colours[index]

    def __contains__(self, colour: object) -> bool:
        return colour in self.colours

    def to_array(self) -> U8Rows:
        """RGBA rows as uint8 [P,4] in palette order."""
        out = np.zeros((len(self.colours), 4), dtype=np.uint8)
        for i, c in enumerate(self.colours):
            out[i] = c.rgba
        return out


@dataclass(frozen=True, eq=False)
class PixelGrid:
    """
    RGBA pixel rectangle anchored at (min_x, min_y).

    pixels is indexed [row, column, channel] with row 0 at min_y and
    column 0 at min_x.
    """

    pixels: U8Image
    min_x: int = 0
    min_y: int = 0

    def __post_init__(self) -> None:
        assert_u8_image_rgba(self.pixels)
        object.__setattr__(self, "min_x", int(self.min_x))
        object.__setattr__(self, "min_y", int(self.min_y))

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def max_x(self) -> int:
        return self.min_x + self.width

    @property
    def max_y(self) -> int:
        return self.min_y + self.height

    @property
    def bounds(self) -> Bounds:
        return Bounds(self.min_x, self.min_y, self.max_x, self.max_y)

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def at(self, x: int, y: int) -> Colour:
        """Colour at absolute coordinates (x, y)."""
        if not (self.min_x <= x < self.max_x and self.min_y <= y < self.max_y):
            raise IndexError(f"({x}, {y}) outside {tuple(self.bounds)}")
        r, g, b, a = self.pixels[y - self.min_y, x - self.min_x].tolist()
        return Colour(r, g, b, a)

    def columns(self, start_x: int, end_x: int) -> U8Image:
        """View of the absolute column range [start_x, end_x) over all rows."""
        return self.pixels[:, start_x - self.min_x : end_x - self.min_x]

    @classmethod
    def blank(cls, bounds: Bounds) -> "PixelGrid":
        """Transparent black grid covering bounds."""
        w = max(0, bounds.max_x - bounds.min_x)
        h = max(0, bounds.max_y - bounds.min_y)
        return cls(np.zeros((h, w, 4), dtype=np.uint8), bounds.min_x, bounds.min_y)

    @classmethod
    def filled(cls, width: int, height: int, colour: Colour) -> "PixelGrid":
        """Grid of width x height anchored at the origin, every pixel colour."""
        arr = np.empty((height, width, 4), dtype=np.uint8)
        arr[...] = colour.rgba
        return cls(arr)

    @classmethod
    def from_rgb_alpha(
        cls, rgb: np.ndarray, alpha: np.ndarray | None = None, min_x: int = 0, min_y: int = 0
    ) -> "PixelGrid":
        """Build from uint8 [H,W,3] colour and optional [H,W] alpha (default opaque)."""
        rgb = np.asarray(rgb, dtype=np.uint8)
        if rgb.ndim != 3 or rgb.shape[-1] != 3:
            raise ValueError(f"expected (H,W,3) rgb, got shape {rgb.shape}")
        H, W, _ = rgb.shape
        out = np.empty((H, W, 4), dtype=np.uint8)
        out[..., :3] = rgb
        if alpha is None:
            out[..., 3] = 255
        else:
            a = np.asarray(alpha, dtype=np.uint8)
            if a.shape != (H, W):
                raise ValueError(f"alpha shape {a.shape} does not match image {(H, W)}")
            out[..., 3] = a
        return cls(out, min_x, min_y)


# Small helpers


def assert_u8_image_rgba(image: np.ndarray) -> U8Image:
    """Validate a uint8 (H,W,4) image and return it typed as U8Image."""
    if not isinstance(image, np.ndarray):
        raise ValueError(f"expected numpy array, got {type(image).__name__}")
    if image.dtype != np.uint8 or image.ndim != 3 or image.shape[-1] != 4:
        raise ValueError(
            f"expected uint8 (H,W,4) image, got {image.dtype} {image.shape}"
        )
    return image  # type: ignore[return-value]


def pack_rgb(pixels: np.ndarray) -> ColourKeys:
    """Pack [...,>=3] uint8 pixels into flat uint32 0xRRGGBB keys."""
    flat = pixels.reshape(-1, pixels.shape[-1])
    return (
        (flat[:, 0].astype(np.uint32) << 16)
        | (flat[:, 1].astype(np.uint32) << 8)
        | flat[:, 2].astype(np.uint32)
    )


def pack_rgba(pixels: np.ndarray) -> ColourKeys:
    """Pack [...,4] uint8 pixels into flat uint32 0xRRGGBBAA keys."""
    flat = pixels.reshape(-1, 4)
    return (pack_rgb(flat) << 8) | flat[:, 3].astype(np.uint32)


def unpack_rgba(keys: ColourKeys) -> U8Rows:
    """Inverse of pack_rgba: uint32 keys to uint8 [N,4] rows."""
    k = np.asarray(keys, dtype=np.uint32)
    out = np.empty((k.shape[0], 4), dtype=np.uint8)
    out[:, 0] = (k >> 24) & 0xFF
    out[:, 1] = (k >> 16) & 0xFF
    out[:, 2] = (k >> 8) & 0xFF
    out[:, 3] = k & 0xFF
    return out


def unpack_rgb(keys: ColourKeys) -> NDArray[np.uint8]:
    """Inverse of pack_rgb: uint32 keys to uint8 [N,3] rows."""
    k = np.asarray(keys, dtype=np.uint32)
    out = np.empty((k.shape[0], 3), dtype=np.uint8)
    out[:, 0] = (k >> 16) & 0xFF
    out[:, 1] = (k >> 8) & 0xFF
    out[:, 2] = k & 0xFF
    return out


__all__ = [
    # aliases / types
    "RGBTuple",
    "RGBATuple",
    "HexStr",
    "U8Image",
    "U8Rows",
    "ColourKeys",
    "ColumnRange",
    "Bounds",
    # value objects
    "Colour",
    "Palette",
    "PixelGrid",
    # helpers
    "assert_u8_image_rgba",
    "pack_rgb",
    "pack_rgba",
    "unpack_rgb",
    "unpack_rgba",
]
