# colour_scheme/utils.py
from __future__ import annotations

"""
Shared CLI helpers: duration formatting, compact key/value lines, plain
prefix logging, and a colour usage report for finished images.

Library modules never log; only the command line calls into here.
"""

import sys
from pathlib import PurePath
from typing import Any, Iterable, List, Optional, TextIO, Tuple

from .core_types import PixelGrid
from .extract import count_colours


#  Time formatting


def format_seconds_compact(seconds: float) -> str:
    """Elapsed time as '850.0ms', '12.345s' or '2m 05.0s'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    minutes, rest = divmod(seconds, 60.0)
    if not minutes:
        return f"{rest:.3f}s"
    return f"{int(minutes)}m {rest:04.1f}s"


# Pretty logging


def format_value(value: Any) -> str:
    """
    Render one config value for a status line.

    bool -> on/off, int -> 1,234, float -> trimmed, (w, h) -> WxH,
    paths -> file name. Anything else goes through str().
    """
    if isinstance(value, bool):
        return "on" if value else "off"
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        return f"{value:.3f}".rstrip("0").rstrip(".")
    if isinstance(value, tuple) and len(value) == 2:
        return f"{value[0]}x{value[1]}"
    if isinstance(value, PurePath):
        return value.name
    return str(value)


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  ", eq: str = ": "
) -> str:
    """Format (name, value) pairs as 'Name: value' blocks separated by sep."""
    return sep.join(f"{name}{eq}{format_value(value)}" for name, value in pairs)


def _emit(prefix: str, message: str, stream: Optional[TextIO] = None) -> None:
    text = f"{prefix} {message}" if prefix else message
    print(text, file=stream or sys.stdout, flush=True)


def log(message: str) -> None:
    _emit("", message)


def debug_log(message: str) -> None:
    _emit("[debug]", message)


def warn(message: str) -> None:
    _emit("[warn]", message)


def error(message: str) -> None:
    """Errors go to stderr so stdout stays clean for piping."""
    _emit("[error]", message, sys.stderr)


def print_config_line(
    section: str, pairs: Iterable[Tuple[str, Any]], debug: bool
) -> None:
    """
    One '[section] Key: value  Key: value' line, e.g.:
      [generate] Size: 640x480  Palette: 16  Workers: 8
    Shown always, with a [debug] prefix when debug is on.
    """
    line = f"[{section}] {key_value_pairs_to_string(pairs)}"
    if debug:
        debug_log(line)
    else:
        log(line)


def print_banner(title: str) -> None:
    _emit("", f"\n== {title} ==")


def enable_line_buffered_stdout() -> None:
    """Line-buffer stdout when the stream supports reconfigure()."""
    reconfig = getattr(sys.stdout, "reconfigure", None)
    if callable(reconfig):
        try:
            reconfig(line_buffering=True, write_through=True)
        except (ValueError, OSError):
            pass


# Reports


def colour_usage_report(
    grid: PixelGrid, *, workers: Optional[int] = None, limit: Optional[int] = None
) -> List[Tuple[str, int]]:
    """
    (hex, count) for every colour in the grid, most used first.

    Alpha is ignored, matching the extractor's counting.
    """
    ranked = count_colours(grid, workers=workers).ranked()
    rows = list(ranked.as_dict().items())
    if limit is not None:
        rows = rows[:limit]
    return [(c.to_hex(), n) for c, n in rows]


__all__ = [
    "format_seconds_compact",
    "format_value",
    "key_value_pairs_to_string",
    "print_config_line",
    "print_banner",
    "log",
    "debug_log",
    "warn",
    "error",
    "enable_line_buffered_stdout",
    "colour_usage_report",
]
