"""
Preview Renderer for PyColorCode
Draws the palette as primary, ambient and lit swatches per slot
"""

from PIL import Image, ImageDraw
import numpy as np

from colorcode.core.material_skinner import DEFAULT_EMISSIVE_INTENSITY, describe_material
from colorcode.utils.color_utils import to_channels


class PreviewRenderer:
    """Renders a palette preview image with Pillow and numpy"""

    COLUMNS = 3  # primary, ambient, lit

    def __init__(self, swatch_size=48, padding=4, ambient_light=0.6, point_light=0.8,
                 emissive_intensity=DEFAULT_EMISSIVE_INTENSITY):
        self.swatch_size = swatch_size
        self.padding = padding
        self.ambient_light = ambient_light
        self.point_light = point_light
        self.emissive_intensity = emissive_intensity
        self.show_grid = True
        self.image = None

    def lit_color(self, material, facing=1.0):
        """
        Shade a material like a Lambert surface

        Args:
            material: MaterialDescription
            facing: cosine between the surface normal and the point light (0-1)

        Returns:
            (r, g, b) tuple of ints
        """
        base = np.array(to_channels(material.color), dtype=np.float64)
        emissive = np.array(to_channels(material.emissive), dtype=np.float64)
        light = self.ambient_light + self.point_light * max(0.0, min(1.0, facing))
        shaded = base * light + emissive * material.emissive_intensity
        return tuple(int(c) for c in np.clip(np.rint(shaded), 0, 255))

    def lit_gradient(self, material, width):
        """Horizontal strip of lit colors as the surface turns away from the light"""
        base = np.array(to_channels(material.color), dtype=np.float64)
        emissive = np.array(to_channels(material.emissive), dtype=np.float64)
        facing = np.linspace(1.0, 0.0, width)
        light = self.ambient_light + self.point_light * facing
        shaded = base[np.newaxis, :] * light[:, np.newaxis] + emissive * material.emissive_intensity
        return np.clip(np.rint(shaded), 0, 255).astype(np.uint8)

    def render(self, palette):
        """Render the preview image for a palette and keep it on self.image"""
        size = self.swatch_size
        pad = self.padding
        width = pad + self.COLUMNS * (size + pad)
        height = pad + len(palette) * (size + pad)

        canvas = np.full((height, width, 4), (0xdd, 0xdd, 0xdd, 255), dtype=np.uint8)

        for row, slot in enumerate(palette):
            material = describe_material(slot.name, palette, self.emissive_intensity)
            top = pad + row * (size + pad)

            for column, color in enumerate((slot.primary, slot.ambient)):
                left = pad + column * (size + pad)
                canvas[top:top + size, left:left + size, :3] = to_channels(color)

            left = pad + 2 * (size + pad)
            canvas[top:top + size, left:left + size, :3] = self.lit_gradient(material, size)[np.newaxis, :, :]

        self.image = Image.fromarray(canvas)

        if self.show_grid:
            self._draw_grid(len(palette))

        return self.image

    def _draw_grid(self, rows):
        draw = ImageDraw.Draw(self.image)
        size = self.swatch_size
        pad = self.padding
        for row in range(rows):
            for column in range(self.COLUMNS):
                left = pad + column * (size + pad)
                top = pad + row * (size + pad)
                draw.rectangle([left - 1, top - 1, left + size, top + size], outline=(0x55, 0x55, 0x55, 255))

    def hit_test(self, x, y, zoom_factor=1.0):
        """
        Find the swatch under a point of the displayed preview

        Returns:
            (row, column) with column 0 primary, 1 ambient, 2 lit; None outside swatches
        """
        info = self.get_image_info()
        if info is None:
            return None

        x = int(x / zoom_factor) - self.padding
        y = int(y / zoom_factor) - self.padding
        if x < 0 or y < 0:
            return None

        step = self.swatch_size + self.padding
        column, column_offset = divmod(x, step)
        row, row_offset = divmod(y, step)
        rows = (info['height'] - self.padding) // step

        if column >= self.COLUMNS or row >= rows:
            return None
        if column_offset >= self.swatch_size or row_offset >= self.swatch_size:
            return None
        return row, column

    def get_image_info(self):
        """Get information about the last rendered preview"""
        if self.image is None:
            return None

        return {
            'width': self.image.width,
            'height': self.image.height,
            'mode': self.image.mode,
        }
