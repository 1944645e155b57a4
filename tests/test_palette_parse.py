"""Tests for colour_scheme.palette_parse: hex tokens, validation report, serialisation."""

import pytest
from colour_scheme.constants import MAX_COLORS, MAX_PARSE_ERRORS
from colour_scheme.core_types import Colour, Palette
from colour_scheme.palette_parse import (
    PaletteBuilder,
    PaletteError,
    format_palette,
    parse_hex_colour,
    parse_palette_lines,
    parse_palette_text,
    strip_comment,
    truncate_token,
)


def _distinct_tokens(n: int) -> list[str]:
    return [f'#{i:06x}' for i in range(n)]


class TestParseHexColour:
    @pytest.mark.parametrize(
        'token, expected',
        [
            ('#fff', (255, 255, 255, 255)),
            ('#ffffff', (255, 255, 255, 255)),
            ('#000', (0, 0, 0, 255)),
            ('#000000', (0, 0, 0, 255)),
            ('#123abc', (0x12, 0x3A, 0xBC, 255)),
        ],
    )
    def test_valid(self, token, expected):
        assert parse_hex_colour(token).rgba == expected

    def test_uppercase(self):
        assert parse_hex_colour('#ABCDEF') == parse_hex_colour('#abcdef')

    def test_short_form_duplicates_nibbles(self):
        assert parse_hex_colour('#a1b') == Colour(0xAA, 0x11, 0xBB)

    @pytest.mark.parametrize('token', ['123456', '#12g456', '#1234', '#', '', '#fffffff', '#+1f', 'fff#'])
    def test_invalid(self, token):
        with pytest.raises(ValueError):
            parse_hex_colour(token)


class TestHelpers:
    def test_strip_comment(self):
        assert strip_comment('  #fff  // white // really') == '#fff'

    def test_comment_only_line(self):
        assert strip_comment('// just a note') == ''

    def test_truncate_short(self):
        assert truncate_token('abc') == 'abc'

    def test_truncate_long(self):
        token = 'x' * 40
        assert truncate_token(token) == 'x' * 30 + '...'

    def test_truncate_exact_limit(self):
        assert truncate_token('y' * 30) == 'y' * 30


class TestParsePaletteLines:
    def test_order_and_dedup(self):
        palette = parse_palette_lines(['#f00', '#00ff00', '#FF0000', '#00f', '#0f0'])
        assert [c.to_hex() for c in palette] == ['#FF0000', '#00FF00', '#0000FF']

    def test_all_colours_opaque(self):
        palette = parse_palette_lines(['#123', '#456789'])
        assert all(c.is_opaque for c in palette)

    def test_comments_and_blank_lines(self):
        text = '// my palette\n\n#111111 // dark\n   \n#eeeeee\n'
        palette = parse_palette_text(text)
        assert [c.to_hex() for c in palette] == ['#111111', '#EEEEEE']

    def test_single_colour_fails_minimum(self):
        with pytest.raises(PaletteError) as exc:
            parse_palette_lines(['#fff', '#FFFFFF'])
        assert exc.value.messages[0] == 'Minimum amount of colors in palette is 2'
        assert len(exc.value.palette) == 1

    def test_empty_input_fails_minimum(self):
        with pytest.raises(PaletteError) as exc:
            parse_palette_lines([])
        assert 'Minimum amount of colors' in str(exc.value)

    def test_only_newline_splits_lines(self):
        with pytest.raises(PaletteError) as exc:
            parse_palette_text('#fff\x0c#000\n#zzz')
        assert exc.value.messages == [
            'Minimum amount of colors in palette is 2',
            "Error on line 1: invalid hex color '#fff\x0c#000'",
            "Error on line 2: invalid hex color '#zzz'",
        ]

    @pytest.mark.parametrize('sep', ['\x0b', '\x1c', '\x85', '\u2028'])
    def test_unicode_breaks_do_not_shift_line_numbers(self, sep):
        with pytest.raises(PaletteError) as exc:
            parse_palette_text(f'#fff // a{sep}b\n#000\nnope')
        assert exc.value.messages == ["Error on line 3: invalid hex color 'nope'"]

    def test_crlf_line_endings(self):
        palette = parse_palette_text('#111111\r\n#222222\r\n')
        assert [c.to_hex() for c in palette] == ['#111111', '#222222']

    def test_line_numbers_count_original_lines(self):
        lines = ['#fff', '', '// comment', 'nothex', '#000']
        with pytest.raises(PaletteError) as exc:
            parse_palette_lines(lines)
        assert exc.value.messages == ["Error on line 4: invalid hex color 'nothex'"]

    def test_offending_token_truncated(self):
        bad = '#' + 'z' * 50
        with pytest.raises(PaletteError) as exc:
            parse_palette_lines(['#fff', '#000', bad])
        assert exc.value.messages[0].endswith("'" + bad[:30] + "...'")

    def test_errors_are_aggregated(self):
        with pytest.raises(PaletteError) as exc:
            parse_palette_lines(['#fff', '123456', '#000', '#12g456', '#1234'])
        msgs = exc.value.messages
        assert [m.split(':')[0] for m in msgs] == [
            'Error on line 2',
            'Error on line 4',
            'Error on line 5',
        ]
        assert str(exc.value) == '\n'.join(msgs)

    def test_minimum_message_prepended(self):
        with pytest.raises(PaletteError) as exc:
            parse_palette_lines(['#fff', 'bad'])
        assert exc.value.messages[0].startswith('Minimum amount')
        assert exc.value.messages[1].startswith('Error on line 2')

    def test_error_cap_and_summary(self):
        lines = ['#fff', '#000'] + ['oops'] * (MAX_PARSE_ERRORS + 5)
        with pytest.raises(PaletteError) as exc:
            parse_palette_lines(lines)
        msgs = exc.value.messages
        line_errors = [m for m in msgs if m.startswith('Error on line')]
        assert len(line_errors) == MAX_PARSE_ERRORS
        assert msgs[-1] == '5 more errors...'

    def test_colours_after_cap_are_ignored(self):
        lines = ['bad'] * MAX_PARSE_ERRORS + ['#fff', '#000']
        with pytest.raises(PaletteError) as exc:
            parse_palette_lines(lines)
        msgs = exc.value.messages
        assert msgs[0] == 'Minimum amount of colors in palette is 2'
        assert msgs[1] == "Error on line 1: invalid hex color 'bad'"
        assert len(msgs) == 1 + MAX_PARSE_ERRORS
        assert len(exc.value.palette) == 0

    def test_cap_hit_before_valid_lines_still_summarised(self):
        lines = ['bad'] * (MAX_PARSE_ERRORS + 1) + ['#fff', '#000', 'worse']
        with pytest.raises(PaletteError) as exc:
            parse_palette_lines(lines)
        msgs = exc.value.messages
        assert msgs[0].startswith('Minimum amount')
        assert msgs[-1] == '2 more errors...'
        assert msgs[-2] == f"Error on line {MAX_PARSE_ERRORS}: invalid hex color 'bad'"

    def test_no_summary_at_exact_cap(self):
        lines = ['#fff', '#000'] + ['oops'] * MAX_PARSE_ERRORS
        with pytest.raises(PaletteError) as exc:
            parse_palette_lines(lines)
        assert not any('more errors' in m for m in exc.value.messages)

    def test_maximum_exceeded(self):
        with pytest.raises(PaletteError) as exc:
            parse_palette_lines(_distinct_tokens(MAX_COLORS + 2))
        assert exc.value.messages == [f'Max amount of colors in palette is {MAX_COLORS}']
        partial = exc.value.palette
        assert len(partial) == MAX_COLORS
        assert partial[0] == Colour(0, 0, 0)
        assert partial[-1] == parse_hex_colour(f'#{MAX_COLORS - 1:06x}')

    def test_exactly_max_is_valid(self):
        palette = parse_palette_lines(_distinct_tokens(MAX_COLORS))
        assert len(palette) == MAX_COLORS

    def test_duplicates_past_max_do_not_overflow(self):
        lines = _distinct_tokens(MAX_COLORS) + ['#000000']
        assert len(parse_palette_lines(lines)) == MAX_COLORS


class TestPaletteBuilder:
    def test_build_success(self):
        b = PaletteBuilder()
        b.add_line(1, '#fff')
        b.add_line(2, '#000 // black')
        assert b.messages() == []
        assert isinstance(b.build(), Palette)

    def test_failure_count_tracks_hidden(self):
        b = PaletteBuilder()
        for i in range(MAX_PARSE_ERRORS + 3):
            b.add_line(i + 1, 'bad')
        assert b.failure_count == MAX_PARSE_ERRORS + 3
        assert len(b.failures) == MAX_PARSE_ERRORS


class TestFormatPalette:
    def test_uppercase_no_trailing_newline(self):
        palette = parse_palette_lines(['#abc', '#123456'])
        assert format_palette(palette) == '#AABBCC\n#123456'

    def test_round_trip(self):
        source = ['#afffff', '#bfffff', '#cfffff', '#dfffff', '#efffff', '#ffffff']
        palette = parse_palette_lines(source)
        again = parse_palette_text(format_palette(palette))
        assert again == palette
