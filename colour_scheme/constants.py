# colour_scheme/constants.py
"""
Limits and tunables used across the project.

- Palette size limits (MIN_COLORS, MAX_COLORS)
- Parser error reporting (MAX_PARSE_ERRORS, TOKEN_PREVIEW_CHARS)
- File glue limits (PALETTE_FILE_MAX_MB, IMAGE_FILE_MAX_MB, IMAGE_EXTENSIONS)
"""
from __future__ import annotations

from typing import FrozenSet

# =========================
# Palette limits
# =========================
MIN_COLORS: int = 2
MAX_COLORS: int = 128

# =========================
# Palette text parsing
# =========================
MAX_PARSE_ERRORS: int = 15  # per-line messages kept before summarising
TOKEN_PREVIEW_CHARS: int = 30  # offending token is cut to this in messages
COMMENT_MARKER: str = "//"

# =========================
# File glue
# =========================
PALETTE_FILE_MAX_MB: int = 1
IMAGE_FILE_MAX_MB: int = 15
IMAGE_EXTENSIONS: FrozenSet[str] = frozenset({".jpg", ".jpeg", ".png"})
JPEG_QUALITY: int = 90

# =========================
# Remapper
# =========================
# Unique colours compared against the palette per vectorised block.
NEAREST_CHUNK: int = 8192

__all__ = [
    "MIN_COLORS",
    "MAX_COLORS",
    "MAX_PARSE_ERRORS",
    "TOKEN_PREVIEW_CHARS",
    "COMMENT_MARKER",
    "PALETTE_FILE_MAX_MB",
    "IMAGE_FILE_MAX_MB",
    "IMAGE_EXTENSIONS",
    "JPEG_QUALITY",
    "NEAREST_CHUNK",
]
