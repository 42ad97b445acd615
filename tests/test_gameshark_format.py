"""
Tests for gameshark_format.py
Encoding layout, decode failures and the palette round trip
"""

import re

import numpy as np
import pytest

from colorcode.codec.gameshark_format import (
    ADDRESS_TABLE,
    decode,
    encode,
    format_line,
    is_gameshark_code,
    iter_lines,
    lookup_address,
    parse_line,
)
from colorcode.core.errors import EmptyInputError, FormatError, MalformedLineError
from colorcode.core.palette import FIELDS, SLOT_NAMES, Palette, randomize_palette


LINE_GRAMMAR = re.compile(r'^[0-9A-F]{8} [0-9A-F]{4}$')

DEFAULT_CODE = """\
8107EC40 FF00
8107EC42 0000
8107EC38 7F00
8107EC3A 0000
8107ECA0 7306
8107ECA2 0000
8107EC98 3903
8107EC9A 0000
8107EC58 FFFF
8107EC5A FF00
8107EC50 7F7F
8107EC52 7F00
8107EC28 0000
8107EC2A FF00
8107EC20 0000
8107EC22 7F00
8107EC70 721C
8107EC72 0E00
8107EC68 390E
8107EC6A 0700
8107EC88 FEC1
8107EC8A 7900
8107EC80 7F60
8107EC82 3C00"""


class TestAddressTable:
    def test_every_slot_and_field_present(self):
        assert set(ADDRESS_TABLE) == {(name, field) for name in SLOT_NAMES for field in FIELDS}

    def test_addresses_unique(self):
        addresses = [a for pair in ADDRESS_TABLE.values() for a in pair]
        assert len(addresses) == len(set(addresses)) == 24

    def test_lookup_address(self):
        assert lookup_address(0x8107EC40) == ('Hat', 'primary', 0)
        assert lookup_address(0x8107EC3A) == ('Hat', 'ambient', 1)
        assert lookup_address(0x8033B170) is None


class TestEncode:
    def test_default_palette_bytes(self, default_palette):
        assert encode(default_palette) == DEFAULT_CODE

    def test_hat_lines(self):
        palette = Palette({'Hat': (0xFF0000, 0x7F0000)})
        lines = encode(palette).split('\n')
        assert lines[:4] == ['8107EC40 FF00', '8107EC42 0000', '8107EC38 7F00', '8107EC3A 0000']

    def test_line_grammar(self, custom_palette):
        text = encode(custom_palette)
        assert not text.endswith('\n')
        for line in text.split('\n'):
            assert LINE_GRAMMAR.match(line)

    def test_line_count(self, default_palette):
        assert len(encode(default_palette).split('\n')) == 24

    def test_does_not_mutate(self, custom_palette):
        before = custom_palette.copy()
        encode(custom_palette)
        assert custom_palette == before

    def test_iter_lines_order(self, default_palette):
        addresses = [address for address, _ in iter_lines(default_palette)]
        expected = [a for name in SLOT_NAMES for field in FIELDS for a in ADDRESS_TABLE[(name, field)]]
        assert addresses == expected

    def test_format_line(self):
        assert format_line(0x8107EC40, 0xab) == '8107EC40 00AB'


class TestDecode:
    def test_decode_default_code(self, default_palette):
        assert decode(DEFAULT_CODE) == default_palette

    def test_decode_partial_keeps_defaults(self):
        palette = decode('8107EC40 00FF\n8107EC42 8000')
        assert palette['Hat'].primary == 0x00FF80
        assert palette['Hat'].ambient == 0x7F0000
        assert palette['Face'] == Palette.default()['Face']

    def test_decode_onto_base(self, custom_palette):
        palette = decode('8107EC88 0102\n8107EC8A 0300', base=custom_palette)
        assert palette['Face'].primary == 0x010203
        assert palette['Hat'] == custom_palette['Hat']

    def test_base_not_mutated(self, custom_palette):
        before = custom_palette.copy()
        decode(DEFAULT_CODE, base=custom_palette)
        assert custom_palette == before

    def test_ignores_unknown_addresses(self):
        palette = decode('8033B170 0064\n8107EC40 00FF\nD033AFA1 0020')
        assert palette['Hat'].primary == 0x00FF00

    def test_only_unknown_addresses_gives_defaults(self):
        assert decode('8033B170 0064') == Palette.default()

    def test_lowercase_and_crlf_accepted(self):
        text = encode(Palette({'Shoes': (0xABCDEF, 0x123456)})).lower().replace('\n', '\r\n')
        assert decode(text + '\r\n')['Shoes'].primary == 0xABCDEF

    def test_blank_lines_and_padding_skipped(self):
        palette = decode('\n  8107EC40 00FF  \n\n8107EC42 0000\n')
        assert palette['Hat'].primary == 0x00FF00

    def test_low_byte_of_blue_word_ignored(self):
        palette = decode('8107EC42 12FF')
        assert palette['Hat'].primary == 0xFF0012

    @pytest.mark.parametrize('text', ['', '   ', '\n\n', '\t \r\n'])
    def test_empty(self, text):
        with pytest.raises(EmptyInputError):
            decode(text)

    def test_empty_is_format_error(self):
        with pytest.raises(FormatError):
            decode('')

    @pytest.mark.parametrize('line', [
        'ZZZZZZZZ 0000',
        '8107EC40 FF0',
        '8107EC4 FF00',
        '8107EC40  FF00',
        '8107EC40\tFF00',
        '8107EC40FF00',
        '8107EC40 FF00 00',
        '0x8107EC40 FF00',
    ])
    def test_malformed_line(self, line):
        with pytest.raises(MalformedLineError) as exc_info:
            decode(line)
        assert exc_info.value.line_number == 1
        assert exc_info.value.line == line

    def test_malformed_line_fails_whole_block(self):
        text = DEFAULT_CODE + '\nZZZZZZZZ 0000'
        with pytest.raises(MalformedLineError) as exc_info:
            decode(text)
        assert exc_info.value.line_number == 25

    def test_parse_line(self):
        assert parse_line('8107EC40 FF00') == (0x8107EC40, 0xFF00)

    @pytest.mark.parametrize('line', ['8107EC40 FF00\n', '8107EC40 FF00\r\n', ' 8107EC40 FF00'])
    def test_parse_line_rejects_surrounding_whitespace(self, line):
        with pytest.raises(MalformedLineError) as exc_info:
            parse_line(line, 3)
        assert exc_info.value.line_number == 3


class TestRoundTrip:
    def test_default(self, default_palette):
        assert decode(encode(default_palette)) == default_palette

    def test_custom(self, custom_palette):
        assert decode(encode(custom_palette)) == custom_palette

    def test_random_palettes(self):
        rng = np.random.default_rng(99)
        for _ in range(50):
            palette = randomize_palette(Palette(), rng=rng, skip=())
            palette.set_color('Hat', 'ambient', int(rng.integers(0, 0xFFFFFF, endpoint=True)))
            assert decode(encode(palette)) == palette

    def test_roundtrip_independent_of_base(self, custom_palette):
        assert decode(encode(custom_palette), base=Palette.default()) == custom_palette


class TestIsGamesharkCode:
    def test_detects_code(self, default_palette):
        assert is_gameshark_code(encode(default_palette))

    def test_rejects_text(self):
        assert not is_gameshark_code('#ff0000')
        assert not is_gameshark_code('')

    def test_rejects_unrelated_codes(self):
        assert not is_gameshark_code('8033B170 0064')
