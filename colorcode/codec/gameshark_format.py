"""
GameShark Format Module - Encode/Decode palettes as GameShark codes

GameShark Format Specification:
Each line is one 16-bit write: {ADDRESS} {VALUE}
ADDRESS is 8 uppercase hex digits, VALUE is 4 uppercase hex digits,
separated by a single space. Lines are joined with '\\n'.

Every color takes two writes: the first word holds RRGG, the second BB00.
Slots are written in SLOT_NAMES order, primary before ambient.

Example (Hat #FF0000 / #7F0000):
8107EC40 FF00
8107EC42 0000
8107EC38 7F00
8107EC3A 0000
"""

import re

from colorcode.core.errors import EmptyInputError, MalformedLineError
from colorcode.core.palette import FIELDS, SLOT_NAMES, Palette
from colorcode.utils.color_utils import from_channels, to_channels
from colorcode.utils.logging_config import get_logger


logger = get_logger(__name__)

# (slot, field) -> (RRGG word address, BB00 word address), SM64 US layout
ADDRESS_TABLE = {
    ('Hat', 'primary'): (0x8107EC40, 0x8107EC42),
    ('Hat', 'ambient'): (0x8107EC38, 0x8107EC3A),
    ('Hair', 'primary'): (0x8107ECA0, 0x8107ECA2),
    ('Hair', 'ambient'): (0x8107EC98, 0x8107EC9A),
    ('Gloves', 'primary'): (0x8107EC58, 0x8107EC5A),
    ('Gloves', 'ambient'): (0x8107EC50, 0x8107EC52),
    ('Overall', 'primary'): (0x8107EC28, 0x8107EC2A),
    ('Overall', 'ambient'): (0x8107EC20, 0x8107EC22),
    ('Shoes', 'primary'): (0x8107EC70, 0x8107EC72),
    ('Shoes', 'ambient'): (0x8107EC68, 0x8107EC6A),
    ('Face', 'primary'): (0x8107EC88, 0x8107EC8A),
    ('Face', 'ambient'): (0x8107EC80, 0x8107EC82),
}

WORD_RG = 0
WORD_B = 1

# address -> (slot, field, word)
_ADDRESS_LOOKUP = {
    address: (slot, field, word)
    for (slot, field), addresses in ADDRESS_TABLE.items()
    for word, address in enumerate(addresses)
}

_LINE_PATTERN = re.compile(r'([0-9A-Fa-f]{8}) ([0-9A-Fa-f]{4})')


def format_line(address, value):
    """Format one write as 'AAAAAAAA VVVV'"""
    return f"{address & 0xFFFFFFFF:08X} {value & 0xFFFF:04X}"


def parse_line(line, line_number=1):
    """
    Parse one 'AAAAAAAA VVVV' line into (address, value)

    Raises:
        MalformedLineError: if the line is not two fixed-width hex tokens
    """
    match = _LINE_PATTERN.fullmatch(line)
    if not match:
        raise MalformedLineError(line_number, line)
    return int(match.group(1), 16), int(match.group(2), 16)


def lookup_address(address):
    """Return (slot, field, word) for a known address, None otherwise"""
    return _ADDRESS_LOOKUP.get(address)


def iter_lines(palette):
    """Yield (address, value) writes for a palette in wire order"""
    for name in SLOT_NAMES:
        slot = palette[name]
        for field in FIELDS:
            rg_address, b_address = ADDRESS_TABLE[(name, field)]
            r, g, b = to_channels(slot.get(field))
            yield rg_address, (r << 8) | g
            yield b_address, b << 8


def encode(palette):
    """
    Encode a palette as a GameShark code block

    Args:
        palette: Palette to encode, left unmodified

    Returns:
        str: newline-joined GameShark lines, no trailing newline
    """
    lines = [format_line(address, value) for address, value in iter_lines(palette)]
    logger.debug(f"Encoded palette into {len(lines)} GameShark lines")
    return '\n'.join(lines)


def decode(text, base=None):
    """
    Decode a GameShark code block into a palette

    Args:
        text: GameShark code block
        base: Palette supplying values for writes missing from the text,
              defaults to the standard palette. It is never modified.

    Returns:
        Palette: a new palette

    Raises:
        EmptyInputError: if text is empty or whitespace-only
        MalformedLineError: if any non-blank line is not 'AAAAAAAA VVVV'
    """
    if not text or not text.strip():
        raise EmptyInputError()

    # Parse every line before touching the palette so a bad line changes nothing
    writes = []
    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line:
            continue
        writes.append(parse_line(line, line_number))

    palette = base.copy() if base is not None else Palette()
    ignored = 0

    for address, value in writes:
        target = lookup_address(address)
        if target is None:
            ignored += 1
            continue

        slot, field, word = target
        r, g, b = to_channels(palette.get_color(slot, field))
        if word == WORD_RG:
            r, g = (value >> 8) & 0xFF, value & 0xFF
        else:
            b = (value >> 8) & 0xFF
        palette.set_color(slot, field, from_channels(r, g, b))

    logger.debug(f"Decoded {len(writes)} GameShark lines, ignored {ignored} unknown addresses")
    return palette


def is_gameshark_code(text):
    """Check whether text decodes as a GameShark block touching at least one palette address"""
    if not text or not text.strip():
        return False

    try:
        writes = [parse_line(line.strip(), n)
                  for n, line in enumerate(text.splitlines(), start=1) if line.strip()]
    except MalformedLineError:
        return False

    return any(lookup_address(address) is not None for address, _ in writes)
