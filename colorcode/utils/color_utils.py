"""
Color Utilities for PyColorCode
Conversions between packed 24-bit colors, channel triples and hex text
"""

import re

from colorcode.core.errors import HexColorError


COLOR_MASK = 0xFFFFFF
CHANNEL_MAX = 255

_HEX_PREFIXES = ('#', '0x', '0X')
_HEX_DIGITS = re.compile(r'[0-9A-Fa-f]{6}')


def clamp_channel(value):
    """Clamp a channel value to the 0-255 range"""
    return max(0, min(CHANNEL_MAX, int(value)))


def to_channels(color):
    """Split a packed 24-bit color into (r, g, b)"""
    color = int(color) & COLOR_MASK
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def from_channels(r, g, b):
    """Pack three channel values into a 24-bit color"""
    return (clamp_channel(r) << 16) | (clamp_channel(g) << 8) | clamp_channel(b)


def to_hex_text(color):
    """Format a packed color as #rrggbb"""
    r, g, b = to_channels(color)
    return f"#{r:02x}{g:02x}{b:02x}"


def parse_hex_text(text):
    """
    Parse #RRGGBB, 0xRRGGBB or RRGGBB into a packed color

    Raises:
        HexColorError: if the digits after the prefix are not exactly six hex digits
    """
    if not isinstance(text, str):
        raise HexColorError(text)

    digits = text.strip()
    for prefix in _HEX_PREFIXES:
        if digits.startswith(prefix):
            digits = digits[len(prefix):]
            break

    if not _HEX_DIGITS.fullmatch(digits):
        raise HexColorError(text)

    return int(digits, 16)


def derive_ambient(primary):
    """
    Compute the shaded companion of a primary color

    Each channel becomes round((c + 1) / 2) with halves rounded up,
    so white maps to #808080.
    """
    r, g, b = to_channels(primary)
    return from_channels(*[(c + 2) // 2 for c in (r, g, b)])


def color_brightness(color):
    """Perceived brightness (0-255) used to pick label contrast"""
    r, g, b = to_channels(color)
    return (r * 299 + g * 587 + b * 114) / 1000


def parse_color_from_clipboard(clipboard_text):
    """Parse a color from clipboard text in hex or rgb formats, None if unrecognized"""
    text = clipboard_text.strip().lower()

    try:
        return parse_hex_text(text)
    except HexColorError:
        pass

    # rgb(r, g, b) or plain comma-separated values
    text = text.replace('rgb(', '').replace(')', '')
    try:
        values = [int(x.strip()) for x in text.split(',')]
    except ValueError:
        return None

    if len(values) != 3 or not all(0 <= v <= CHANNEL_MAX for v in values):
        return None

    return from_channels(*values)
