"""
Swatch PNG Module - Save and load palettes as small PNG swatches

Swatch layout: 6x2 pixels, one column per slot in SLOT_NAMES order,
row 0 primary colors, row 1 ambient colors. The GameShark code is also
stored in a 'gameshark' text chunk and is preferred when loading.
"""

from PIL import Image
from PIL.PngImagePlugin import PngInfo

from colorcode.codec.gameshark_format import decode, encode
from colorcode.core.palette import FIELDS, SLOT_NAMES, Palette
from colorcode.utils.color_utils import from_channels, to_channels
from colorcode.utils.logging_config import get_logger


logger = get_logger(__name__)

CODE_CHUNK_KEY = 'gameshark'


def palette_to_image(palette):
    """Build the 6x2 RGBA swatch image for a palette"""
    image = Image.new('RGBA', (len(SLOT_NAMES), len(FIELDS)))
    for x, slot in enumerate(palette):
        for y, field in enumerate(FIELDS):
            image.putpixel((x, y), to_channels(slot.get(field)) + (255,))
    return image


def image_to_palette(image):
    """Read a palette back from swatch pixels"""
    if image.width < len(SLOT_NAMES) or image.height < len(FIELDS):
        raise ValueError(f"Swatch too small: {image.width}x{image.height}, "
                         f"expected {len(SLOT_NAMES)}x{len(FIELDS)}")

    if image.mode != 'RGBA':
        image = image.convert('RGBA')

    palette = Palette()
    for x, name in enumerate(SLOT_NAMES):
        for y, field in enumerate(FIELDS):
            r, g, b, _ = image.getpixel((x, y))
            palette.set_color(name, field, from_channels(r, g, b))
    return palette


def export_swatch(palette, filepath):
    """Save a palette as a swatch PNG with the code embedded"""
    metadata = PngInfo()
    metadata.add_text(CODE_CHUNK_KEY, encode(palette))

    palette_to_image(palette).save(filepath, pnginfo=metadata)
    logger.info(f"Exported swatch to {filepath}")


def import_swatch(filepath):
    """
    Load a palette from a swatch PNG

    The embedded GameShark code wins over pixel colors when present.

    Raises:
        FormatError: if the embedded code is malformed
        ValueError: if there is no code and the image is too small
    """
    with Image.open(filepath) as image:
        image.load()
        code = image.info.get(CODE_CHUNK_KEY)
        if code:
            logger.info(f"Importing swatch {filepath} from embedded code")
            return decode(code)

        logger.info(f"Importing swatch {filepath} from pixels")
        return image_to_palette(image)
