"""
Tests for swatch_png.py
"""

from PIL import Image
import pytest

from colorcode.codec.gameshark_format import encode
from colorcode.codec.swatch_png import (
    CODE_CHUNK_KEY,
    export_swatch,
    image_to_palette,
    import_swatch,
    palette_to_image,
)
from colorcode.core.errors import MalformedLineError
from colorcode.core.palette import Palette


class TestSwatchImage:
    def test_layout(self, custom_palette):
        image = palette_to_image(custom_palette)
        assert image.size == (6, 2)
        assert image.getpixel((0, 0)) == (0x12, 0x34, 0x56, 255)
        assert image.getpixel((0, 1)) == (0x0A, 0x1B, 0x2C, 255)
        assert image.getpixel((5, 0)) == (255, 255, 255, 255)

    def test_image_roundtrip(self, custom_palette):
        assert image_to_palette(palette_to_image(custom_palette)) == custom_palette

    def test_rgb_image_accepted(self, custom_palette):
        image = palette_to_image(custom_palette).convert('RGB')
        assert image_to_palette(image) == custom_palette

    def test_too_small(self):
        with pytest.raises(ValueError):
            image_to_palette(Image.new('RGBA', (3, 2)))


class TestSwatchFiles:
    def test_export_embeds_code(self, custom_palette, temp_dir):
        path = temp_dir / 'swatch.png'
        export_swatch(custom_palette, path)
        with Image.open(path) as image:
            assert image.info[CODE_CHUNK_KEY] == encode(custom_palette)

    def test_file_roundtrip(self, custom_palette, temp_dir):
        path = temp_dir / 'swatch.png'
        export_swatch(custom_palette, path)
        assert import_swatch(path) == custom_palette

    def test_embedded_code_wins_over_pixels(self, custom_palette, temp_dir):
        from PIL.PngImagePlugin import PngInfo

        path = temp_dir / 'mixed.png'
        metadata = PngInfo()
        metadata.add_text(CODE_CHUNK_KEY, encode(custom_palette))
        palette_to_image(Palette.default()).save(path, pnginfo=metadata)

        assert import_swatch(path) == custom_palette

    def test_pixels_used_without_code(self, custom_palette, temp_dir):
        path = temp_dir / 'plain.png'
        palette_to_image(custom_palette).save(path)
        assert import_swatch(path) == custom_palette

    def test_malformed_embedded_code(self, temp_dir):
        from PIL.PngImagePlugin import PngInfo

        path = temp_dir / 'bad.png'
        metadata = PngInfo()
        metadata.add_text(CODE_CHUNK_KEY, 'not a code')
        palette_to_image(Palette.default()).save(path, pnginfo=metadata)

        with pytest.raises(MalformedLineError):
            import_swatch(path)
