"""Tests for colour_scheme.palette_data: palette files on disk."""

from pathlib import Path

import pytest
from colour_scheme.core_types import Colour, Palette
from colour_scheme.palette_data import read_palette_file, save_palette_file
from colour_scheme.palette_parse import PaletteError

CATPPUCCIN_LATTE = """\
// Catppuccin Latte (subset)
#333333
#3f3656
#dc8a78 // rosewater
#dd7878

#ea76cb
#8839ef // mauve
#8839EF
"""


class TestReadPaletteFile:
    def test_reads_in_order(self, tmp_path: Path):
        f = tmp_path / 'palette.txt'
        f.write_text(CATPPUCCIN_LATTE, encoding='utf-8')
        palette = read_palette_file(f)
        assert list(palette) == [
            Colour(51, 51, 51),
            Colour(63, 54, 86),
            Colour(220, 138, 120),
            Colour(221, 120, 120),
            Colour(234, 118, 203),
            Colour(136, 57, 239),
        ]

    def test_invalid_contents(self, tmp_path: Path):
        f = tmp_path / 'palette.txt'
        f.write_text('#fff\n#12g456\n', encoding='utf-8')
        with pytest.raises(PaletteError, match="line 2"):
            read_palette_file(f)

    def test_oversized(self, tmp_path: Path):
        f = tmp_path / 'palette.txt'
        f.write_text('#fff\n' * 300_000, encoding='utf-8')
        with pytest.raises(PaletteError, match='exceeds 1MB'):
            read_palette_file(f)

    def test_not_utf8(self, tmp_path: Path):
        f = tmp_path / 'palette.txt'
        f.write_bytes(b'#fff\n#000\n\xff\xfe\n')
        with pytest.raises(PaletteError, match='error reading file'):
            read_palette_file(f)

    def test_missing(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            read_palette_file(tmp_path / 'missing.txt')


class TestSavePaletteFile:
    def test_format(self, tmp_path: Path):
        palette = Palette((Colour(0xAF, 0xFF, 0xFF), Colour(0x0A, 0x0B, 0x0C)))
        out = save_palette_file(tmp_path / 'nested' / 'out.txt', palette)
        assert out.read_text(encoding='utf-8') == '#AFFFFF\n#0A0B0C'

    def test_round_trip(self, tmp_path: Path):
        palette = Palette(tuple(Colour(c, 0xFF, 0xFF) for c in (0xAF, 0xBF, 0xCF, 0xDF, 0xEF, 0xFF)))
        out = save_palette_file(tmp_path / 'out.txt', palette)
        assert read_palette_file(out) == palette
