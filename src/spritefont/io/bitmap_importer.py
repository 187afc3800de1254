"""Glyph extraction from marker-delimited bitmaps.

Characters are drawn on a grid ordered from top left to bottom right. The
space between cells and around the grid is filled with opaque magenta
(red=255, green=0, blue=255). Monochrome art uses white for solid areas and
black for transparent ones; art that carries its own alpha channel keeps its
colors and uses alpha for coverage.
"""

from PIL import Image

from spritefont.config import ImportConfig
from spritefont.core.bitmap import Bitmap
from spritefont.core.scanner import find_glyph_regions, is_marker_color
from spritefont.core.transforms import convert_grey_to_alpha, matches_alpha
from spritefont.domain.character_region import flatten
from spritefont.domain.glyph import Glyph
from spritefont.exceptions import ImageDecodeError


def load_bitmap(path: str) -> Bitmap:
    """Decode an image file into an ARGB bitmap.

    Raises:
        ImageDecodeError: If the file is missing or not a readable image
    """
    try:
        with Image.open(path) as image:
            return Bitmap.from_image(image)
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise ImageDecodeError(path, str(e)) from e


class BitmapImporter:
    """Imports glyphs from a marker-delimited bitmap.

    Cells are assigned the requested characters in scan order. Cells beyond
    the requested characters get the code points following the last one
    assigned; ``extra_glyph_count`` reports how many were numbered that way.

    Example:
        importer = BitmapImporter()
        importer.import_font(ImportConfig(source_font=Path("font.png")))
        print(len(importer.glyphs), importer.line_spacing)
    """

    def __init__(self) -> None:
        self.glyphs: list[Glyph] = []
        self.line_spacing: float = 0.0
        self.extra_glyph_count = 0
        self.bitmap: Bitmap | None = None

    def import_font(self, options: ImportConfig) -> None:
        """Scan the source bitmap and build one glyph per cell.

        Args:
            options: Import configuration

        Raises:
            ImageDecodeError: If the source image cannot be decoded
        """
        bitmap = load_bitmap(str(options.source_font))
        characters = flatten(options.character_regions)

        glyphs: list[Glyph] = []
        line_spacing = 0
        current_character = 0

        for index, region in enumerate(find_glyph_regions(bitmap, is_marker_color)):
            if index < len(characters):
                current_character = characters[index]
            else:
                # TODO: confirm whether undeclared cells should be rejected instead of numbered.
                current_character += 1

            glyphs.append(Glyph.from_bitmap(current_character, bitmap, region))
            line_spacing = max(line_spacing, region.height)

        # Without a real alpha channel, treat brightness as coverage.
        if matches_alpha(255, bitmap):
            convert_grey_to_alpha(bitmap)

        self.bitmap = bitmap
        self.glyphs = glyphs
        self.line_spacing = float(line_spacing)
        self.extra_glyph_count = max(0, len(glyphs) - len(characters))
