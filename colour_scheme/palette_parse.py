# colour_scheme/palette_parse.py
from __future__ import annotations

"""
Palette text parsing and serialisation.

Text format: one '#RGB' or '#RRGGBB' token per line, '//' starts a comment,
blank lines are ignored. Only LF ends a line (CRLF is accepted). Problems are
reported together in a single PaletteError rather than stopping at the first.

Exports:
  parse_hex_colour(token) -> Colour
  parse_palette_lines(lines) -> Palette
  parse_palette_text(text) -> Palette
  format_palette(palette) -> str
  PaletteBuilder, LineError, PaletteError
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set

from .constants import (
    COMMENT_MARKER,
    MAX_COLORS,
    MAX_PARSE_ERRORS,
    MIN_COLORS,
    TOKEN_PREVIEW_CHARS,
)
from .core_types import Colour, Palette

_HEX_TOKEN = re.compile(r"#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")


class PaletteError(ValueError):
    """
    Aggregated palette validation failure.

    str(err) is the full multi-line report. messages holds the individual
    lines and palette the colours collected before validation failed.
    """

    def __init__(self, messages: List[str], palette: Optional[Palette] = None):
        self.messages = list(messages)
        self.palette = palette if palette is not None else Palette()
        super().__init__("\n".join(self.messages))


@dataclass(frozen=True)
class LineError:
    """A token on one source line that is not a hex colour."""

    line_no: int  # 1-based, against the original lines
    token: str

    def message(self) -> str:
        return f"Error on line {self.line_no}: invalid hex color '{truncate_token(self.token)}'"


def truncate_token(token: str, limit: int = TOKEN_PREVIEW_CHARS) -> str:
    """Cut token to limit characters, marking the cut with '...'."""
    if len(token) > limit:
        return token[:limit] + "..."
    return token


def strip_comment(line: str) -> str:
    """Drop everything from the first '//' and trim whitespace."""
    return line.split(COMMENT_MARKER, 1)[0].strip()


def parse_hex_colour(token: str) -> Colour:
    """Parse '#rgb' or '#rrggbb' (case-insensitive) into an opaque Colour."""
    s = token.strip()
    if not _HEX_TOKEN.fullmatch(s):
        raise ValueError(f"invalid hex color '{truncate_token(s)}'")
    if len(s) == 4:
        r, g, b = s[1], s[2], s[3]
        s = f"#{r}{r}{g}{g}{b}{b}"
    return Colour(int(s[1:3], 16), int(s[3:5], 16), int(s[5:7], 16), 255)


@dataclass
class PaletteBuilder:
    """
    Accumulates colours and validation failures line by line.

    Call add_line() for each source line, then build() once. Once
    MAX_PARSE_ERRORS failures are held the builder is capped: later lines add
    no colours and their failures only feed the "more errors" tally.
    """

    colours: List[Colour] = field(default_factory=list)
    failures: List[LineError] = field(default_factory=list)
    failure_count: int = 0
    overflowed: bool = False
    _seen: Set[Colour] = field(default_factory=set, repr=False)

    @property
    def capped(self) -> bool:
        return self.failure_count >= MAX_PARSE_ERRORS

    def add_line(self, line_no: int, raw: str) -> None:
        token = strip_comment(raw)
        if not token:
            return
        try:
            colour = parse_hex_colour(token)
        except ValueError:
            if not self.capped:
                self.failures.append(LineError(line_no, token))
            self.failure_count += 1
            return
        if not self.capped:
            self.add_colour(colour)

    def add_colour(self, colour: Colour) -> None:
        if colour in self._seen:
            return
        if len(self.colours) >= MAX_COLORS:
            self.overflowed = True
            return
        self.colours.append(colour)
        self._seen.add(colour)

    def messages(self) -> List[str]:
        """Full report in display order; empty when the palette is valid."""
        out: List[str] = []
        if len(self.colours) < MIN_COLORS:
            out.append(f"Minimum amount of colors in palette is {MIN_COLORS}")
        if self.overflowed:
            out.append(f"Max amount of colors in palette is {MAX_COLORS}")
        out.extend(f.message() for f in self.failures)
        hidden = self.failure_count - len(self.failures)
        if hidden > 0:
            out.append(f"{hidden} more errors...")
        return out

    def build(self) -> Palette:
        palette = Palette(tuple(self.colours))
        msgs = self.messages()
        if msgs:
            raise PaletteError(msgs, palette)
        return palette


def parse_palette_lines(lines: Iterable[str]) -> Palette:
    """Parse palette lines, raising PaletteError with every problem found."""
    builder = PaletteBuilder()
    for i, line in enumerate(lines, start=1):
        builder.add_line(i, line)
    return builder.build()


def parse_palette_text(text: str) -> Palette:
    """Parse a whole palette document."""
    # Only "\n" ends a line; other Unicode breaks stay inside the token.
    return parse_palette_lines(line.rstrip("\r") for line in text.split("\n"))


def format_palette(palette: Iterable[Colour]) -> str:
    """One uppercase '#RRGGBB' per line, no trailing newline."""
    return "\n".join(c.to_hex() for c in palette)


__all__ = [
    "PaletteError",
    "LineError",
    "PaletteBuilder",
    "truncate_token",
    "strip_comment",
    "parse_hex_colour",
    "parse_palette_lines",
    "parse_palette_text",
    "format_palette",
]
