# colour_scheme/image_io.py
from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .constants import IMAGE_EXTENSIONS, IMAGE_FILE_MAX_MB, JPEG_QUALITY
from .core_types import PixelGrid

"""
Image file I/O: extension and size checks, decode to an RGBA PixelGrid,
encode a PixelGrid to PNG (RGBA) or JPEG (RGB).
"""


class ImageFileError(ValueError):
    """Image path rejected before or during decode/encode."""


def validate_extension(path: Path, name: str) -> str:
    """Return the lower-cased suffix, or raise ImageFileError."""
    ext = Path(path).suffix.lower()
    if ext not in IMAGE_EXTENSIONS:
        raise ImageFileError(f"invalid file extension on {name} file: {Path(path).suffix}")
    return ext


def validate_file_size(path: Path, name: str, max_mb: int) -> int:
    """Return the file size in bytes, or raise ImageFileError when above max_mb."""
    size = Path(path).stat().st_size
    if size > max_mb * 1024 * 1024:
        raise ImageFileError(f"{name} file size {size} bytes exceeds {max_mb}MB")
    return size


def _to_rgba(im: Image.Image) -> Image.Image:
    im = ImageOps.exif_transpose(im)
    return im.convert("RGBA")


def load_image_grid(path: Path, max_mb: int = IMAGE_FILE_MAX_MB) -> PixelGrid:
    """Decode an image file into an RGBA PixelGrid anchored at the origin."""
    path = Path(path)
    validate_extension(path, "input image")
    validate_file_size(path, "Input image", max_mb)
    try:
        with Image.open(path) as im0:
            im = _to_rgba(im0)
            arr = np.array(im, dtype=np.uint8)
    except UnidentifiedImageError as e:
        raise ImageFileError(f"error decoding image {path}: {e}") from e
    return PixelGrid(arr)


def grid_to_image(grid: PixelGrid) -> Image.Image:
    """RGBA Pillow image of the grid's pixels."""
    return Image.fromarray(np.ascontiguousarray(grid.pixels))


def save_image_grid(path: Path, grid: PixelGrid) -> Path:
    """Encode grid by extension: PNG keeps alpha, JPEG is RGB at JPEG_QUALITY."""
    path = Path(path)
    ext = validate_extension(path, "output image")
    if grid.is_empty:
        raise ImageFileError(f"cannot encode an empty {grid.width}x{grid.height} image")
    if not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    im = grid_to_image(grid)
    if ext == ".png":
        im.save(path, "PNG")
    else:
        im.convert("RGB").save(path, "JPEG", quality=JPEG_QUALITY)
    return path


__all__ = [
    "ImageFileError",
    "validate_extension",
    "validate_file_size",
    "load_image_grid",
    "grid_to_image",
    "save_image_grid",
]
