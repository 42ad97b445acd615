"""
Tests for the palette model and randomization
"""

import numpy as np
import pytest

from colorcode.core.palette import (
    DEFAULT_COLORS,
    MAX_LUCKY_ROUNDS,
    SLOT_NAMES,
    Palette,
    PaletteSlot,
    feel_lucky_rounds,
    randomize_palette,
)
from colorcode.utils.color_utils import derive_ambient


class TestPaletteSlot:
    def test_values_masked_to_24_bits(self):
        slot = PaletteSlot('Hat', 0x1FF0000, 0xAB000000)
        assert slot.primary == 0xFF0000
        assert slot.ambient == 0

    def test_get_set_by_field(self):
        slot = PaletteSlot('Hat', 0, 0)
        slot.set('ambient', 0x123456)
        assert slot.get('ambient') == 0x123456
        assert slot.ambient == 0x123456

    def test_unknown_field(self):
        slot = PaletteSlot('Hat', 0, 0)
        with pytest.raises(KeyError):
            slot.get('emissive')
        with pytest.raises(KeyError):
            slot.set('name', 'Hair')

    def test_equality_and_copy(self):
        slot = PaletteSlot('Hat', 1, 2)
        clone = slot.copy()
        assert clone == slot
        assert clone is not slot
        clone.primary = 3
        assert clone != slot


class TestPalette:
    def test_default_has_every_slot(self, default_palette):
        assert len(default_palette) == 6
        for name in SLOT_NAMES:
            assert name in default_palette
            primary, ambient = DEFAULT_COLORS[name]
            assert default_palette[name].primary == primary
            assert default_palette[name].ambient == ambient

    def test_default_hat(self, default_palette):
        assert default_palette['Hat'].primary == 0xFF0000
        assert default_palette['Hat'].ambient == 0x7F0000

    def test_iteration_follows_slot_order(self):
        palette = Palette({'Face': (1, 1), 'Hat': (2, 2), 'Shoes': (3, 3)})
        assert [slot.name for slot in palette] == list(SLOT_NAMES)

    def test_partial_construction_keeps_defaults(self):
        palette = Palette({'Gloves': (0x010101, 0x020202)})
        assert palette['Gloves'].primary == 0x010101
        assert palette['Hat'] == Palette.default()['Hat']

    def test_unknown_slot_rejected(self):
        with pytest.raises(KeyError):
            Palette({'Cape': (0, 0)})

    def test_set_color(self, default_palette):
        default_palette.set_color('Shoes', 'primary', 0xABCDEF)
        assert default_palette.get_color('Shoes', 'primary') == 0xABCDEF

    def test_copy_is_independent(self, custom_palette):
        clone = custom_palette.copy()
        assert clone == custom_palette
        clone.set_color('Hat', 'primary', 0)
        assert clone != custom_palette
        assert custom_palette['Hat'].primary == 0x123456

    def test_not_equal_to_other_types(self, default_palette):
        assert default_palette != {'Hat': (0xFF0000, 0x7F0000)}


class TestRandomize:
    def test_face_skipped_by_default(self, default_palette, rng):
        face = default_palette['Face'].copy()
        randomize_palette(default_palette, rng=rng)
        assert default_palette['Face'] == face

    def test_ambient_is_derived(self, default_palette, rng):
        randomize_palette(default_palette, rng=rng)
        for slot in default_palette:
            if slot.name == 'Face':
                continue
            assert slot.ambient == derive_ambient(slot.primary)
            assert 0 <= slot.primary <= 0xFFFFFF

    def test_deterministic_with_seed(self):
        first = randomize_palette(Palette(), rng=np.random.default_rng(7))
        second = randomize_palette(Palette(), rng=np.random.default_rng(7))
        assert first == second

    def test_custom_skip(self, default_palette, rng):
        randomize_palette(default_palette, rng=rng, skip=SLOT_NAMES)
        assert default_palette == Palette.default()

    def test_empty_skip_randomizes_face(self, rng):
        palette = randomize_palette(Palette(), rng=rng, skip=())
        assert palette['Face'].ambient == derive_ambient(palette['Face'].primary)

    def test_returns_same_palette(self, default_palette, rng):
        assert randomize_palette(default_palette, rng=rng) is default_palette

    def test_feel_lucky_rounds_in_range(self, rng):
        for _ in range(200):
            assert 1 <= feel_lucky_rounds(rng) <= MAX_LUCKY_ROUNDS
