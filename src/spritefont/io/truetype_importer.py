"""Glyph rasterization from TrueType/OpenType fonts.

fontTools reads the character map so characters the font does not define
are skipped; Pillow's FreeType binding draws the rest. Each glyph is drawn
into its own full-height cell and left for the cropper to trim.
"""

import math

from fontTools.ttLib import TTFont, TTLibError
from PIL import Image, ImageDraw, ImageFont

from spritefont.config import FontStyle, ImportConfig
from spritefont.core.bitmap import Bitmap
from spritefont.domain.character_region import flatten
from spritefont.domain.glyph import Glyph
from spritefont.exceptions import FontLoadError

_VARIATION_NAMES = {
    FontStyle.BOLD: "bold",
    FontStyle.ITALIC: "italic",
    FontStyle.BOLD_ITALIC: "bold italic",
}


def read_character_map(path: str) -> dict[int, str]:
    """Return the font's best Unicode cmap (code point to glyph name).

    Raises:
        FontLoadError: If the file is missing or not a font
    """
    try:
        with TTFont(path, lazy=True) as font:
            return dict(font.getBestCmap() or {})
    except (OSError, TTLibError, KeyError) as e:
        raise FontLoadError(path, str(e)) from e


def apply_style(font: ImageFont.FreeTypeFont, style: FontStyle) -> bool:
    """Select the named instance matching ``style`` on a variable font.

    Returns:
        True if the style is regular or a matching instance was selected
    """
    if style is FontStyle.REGULAR:
        return True

    try:
        names = font.get_variation_names()
    except OSError:
        return False

    wanted = _VARIATION_NAMES[style]
    for name in names:
        decoded = name.decode("utf-8", "replace") if isinstance(name, bytes) else str(name)
        if decoded.lower() == wanted:
            font.set_variation_by_name(name)
            return True
    return False


def rasterize_glyph(
    font: ImageFont.FreeTypeFont,
    character: int,
    line_height: int,
    sharp: bool = False,
) -> Glyph:
    """Draw one character into a white, alpha-covered bitmap.

    The cell spans the full line height and the glyph's advance (widened to
    fit any ink that overhangs it). ``offset_x`` and ``advance_x`` are set so
    that ``offset_x + width + advance_x`` equals the font advance.

    Args:
        font: Loaded FreeType font
        character: Code point to draw
        line_height: Ascent plus descent in pixels
        sharp: Draw without antialiasing

    Returns:
        Glyph owning its own bitmap
    """
    text = chr(character)
    left, _top, right, bottom = font.getbbox(text)
    advance = font.getlength(text)

    shift = max(0, -left)
    width = max(right, math.ceil(advance), 1) + shift
    height = max(line_height, bottom, 1)

    coverage = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(coverage)
    if sharp:
        draw.fontmode = "1"
    draw.text((shift, 0), text, font=font, fill=255)

    image = Image.new("RGBA", (width, height), (255, 255, 255, 0))
    image.putalpha(coverage)

    glyph = Glyph.from_bitmap(character, Bitmap.from_image(image))
    glyph.offset_x = float(-shift)
    glyph.advance_x = advance - (width - shift)
    return glyph


class TrueTypeImporter:
    """Imports glyphs by rasterizing a TrueType/OpenType font.

    Example:
        importer = TrueTypeImporter()
        importer.import_font(ImportConfig(source_font=Path("font.ttf"), font_size=16))
    """

    def __init__(self) -> None:
        self.glyphs: list[Glyph] = []
        self.line_spacing: float = 0.0
        self.missing_characters: list[int] = []
        self.style_applied = True

    def import_font(self, options: ImportConfig) -> None:
        """Rasterize every requested character the font defines.

        Args:
            options: Import configuration

        Raises:
            FontLoadError: If the font cannot be read
        """
        path = str(options.source_font)
        character_map = read_character_map(path)

        try:
            font = ImageFont.truetype(path, options.font_size)
        except OSError as e:
            raise FontLoadError(path, str(e)) from e

        self.style_applied = apply_style(font, options.font_style)

        ascent, descent = font.getmetrics()
        line_height = ascent + descent

        glyphs: list[Glyph] = []
        missing: list[int] = []
        for character in flatten(options.character_regions):
            if character not in character_map:
                missing.append(character)
                continue
            glyphs.append(rasterize_glyph(font, character, line_height, options.sharp))

        self.glyphs = glyphs
        self.line_spacing = float(line_height)
        self.missing_characters = missing
