"""
Palette model for PyColorCode
Six fixed character slots, each with a primary and an ambient color
"""

import numpy as np

from colorcode.utils.color_utils import COLOR_MASK, derive_ambient, to_hex_text


# Order is part of the GameShark code layout, do not reorder
SLOT_NAMES = ('Hat', 'Hair', 'Gloves', 'Overall', 'Shoes', 'Face')
FIELDS = ('primary', 'ambient')

SLOT_LABELS = {
    'Hat': 'Hat / Body',
    'Hair': 'Hair',
    'Gloves': 'Gloves',
    'Overall': 'Overall',
    'Shoes': 'Shoes',
    'Face': 'Face',
}

DEFAULT_COLORS = {
    'Hat': (0xFF0000, 0x7F0000),
    'Hair': (0x730600, 0x390300),
    'Gloves': (0xFFFFFF, 0x7F7F7F),
    'Overall': (0x0000FF, 0x00007F),
    'Shoes': (0x721C0E, 0x390E07),
    'Face': (0xFEC179, 0x7F603C),
}

MAX_LUCKY_ROUNDS = 100


class PaletteSlot:
    """One character part with its primary (emissive) and ambient (base) color"""

    __slots__ = ('name', '_primary', '_ambient')

    def __init__(self, name, primary, ambient):
        self.name = name
        self.primary = primary
        self.ambient = ambient

    @property
    def primary(self):
        return self._primary

    @primary.setter
    def primary(self, value):
        self._primary = int(value) & COLOR_MASK

    @property
    def ambient(self):
        return self._ambient

    @ambient.setter
    def ambient(self, value):
        self._ambient = int(value) & COLOR_MASK

    def get(self, field):
        if field not in FIELDS:
            raise KeyError(field)
        return getattr(self, field)

    def set(self, field, value):
        if field not in FIELDS:
            raise KeyError(field)
        setattr(self, field, value)

    def copy(self):
        return PaletteSlot(self.name, self.primary, self.ambient)

    def __eq__(self, other):
        if not isinstance(other, PaletteSlot):
            return NotImplemented
        return (self.name, self.primary, self.ambient) == (other.name, other.primary, other.ambient)

    def __repr__(self):
        return f"PaletteSlot({self.name!r}, {to_hex_text(self.primary)}, {to_hex_text(self.ambient)})"


class Palette:
    """
    The full set of character slots

    Always holds every name in SLOT_NAMES. Missing entries in `colors`
    fall back to DEFAULT_COLORS; iteration follows SLOT_NAMES order.

    Args:
        colors: optional mapping of slot name to (primary, ambient)
    """

    def __init__(self, colors=None):
        colors = dict(colors or {})
        unknown = set(colors) - set(SLOT_NAMES)
        if unknown:
            raise KeyError(f"Unknown palette slots: {sorted(unknown)}")

        self._slots = {}
        for name in SLOT_NAMES:
            primary, ambient = colors.get(name, DEFAULT_COLORS[name])
            self._slots[name] = PaletteSlot(name, primary, ambient)

    @classmethod
    def default(cls):
        return cls()

    def __getitem__(self, name):
        return self._slots[name]

    def __contains__(self, name):
        return name in self._slots

    def __iter__(self):
        for name in SLOT_NAMES:
            yield self._slots[name]

    def __len__(self):
        return len(self._slots)

    def __eq__(self, other):
        if not isinstance(other, Palette):
            return NotImplemented
        return all(self[name] == other[name] for name in SLOT_NAMES)

    def __repr__(self):
        return f"Palette({', '.join(repr(slot) for slot in self)})"

    def get_color(self, name, field):
        return self._slots[name].get(field)

    def set_color(self, name, field, value):
        self._slots[name].set(field, value)

    def copy(self):
        return Palette({slot.name: (slot.primary, slot.ambient) for slot in self})


def randomize_palette(palette, rng=None, skip=('Face',)):
    """
    Give every non-skipped slot a random primary and its derived ambient

    Args:
        palette: Palette to mutate
        rng: numpy Generator, a fresh default_rng() when omitted
        skip: slot names left untouched

    Returns:
        The same palette, for chaining
    """
    if rng is None:
        rng = np.random.default_rng()

    for slot in palette:
        if slot.name in skip:
            continue
        primary = int(rng.integers(0, COLOR_MASK, endpoint=True))
        slot.primary = primary
        slot.ambient = derive_ambient(primary)

    return palette


def feel_lucky_rounds(rng=None):
    """Number of randomize rounds to animate for the I Feel Lucky button"""
    if rng is None:
        rng = np.random.default_rng()
    return int(rng.integers(1, MAX_LUCKY_ROUNDS, endpoint=True))
