"""Bitmap, marker image and font builders shared by the test modules."""

from pathlib import Path

from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from PIL import Image

from spritefont.core.bitmap import Bitmap, LockMode, PixelAccessor
from spritefont.domain.color import MAGENTA, TRANSPARENT, WHITE

M = MAGENTA
W = WHITE
T = TRANSPARENT


def bitmap_from_rows(rows: list[list[int]], stride: int | None = None) -> Bitmap:
    """Build a bitmap from rows of packed ARGB values."""
    bitmap = Bitmap(len(rows[0]), len(rows), stride=stride)
    with PixelAccessor(bitmap, LockMode.WRITE_ONLY) as pixels:
        for y, row in enumerate(rows):
            for x, color in enumerate(row):
                pixels[x, y] = color
    return bitmap


def bitmap_rows(bitmap: Bitmap) -> list[list[int]]:
    """Read a bitmap back into rows of packed ARGB values."""
    with PixelAccessor(bitmap, LockMode.READ_ONLY) as pixels:
        return [[pixels[x, y] for x in range(bitmap.width)] for y in range(bitmap.height)]


def save_marker_image(
    path: Path,
    cells: list[tuple[int, int, int, int]],
    size: tuple[int, int],
    ink: tuple[int, int, int, int] = (255, 255, 255, 255),
) -> Path:
    """Save an opaque magenta image with black cells, each with one ink pixel at its centre.

    Args:
        path: Output path
        cells: Cell rectangles as (x, y, width, height)
        size: Image size
        ink: RGBA color of the centre pixel
    """
    image = Image.new("RGBA", size, (255, 0, 255, 255))
    for x, y, width, height in cells:
        for cy in range(y, y + height):
            for cx in range(x, x + width):
                image.putpixel((cx, cy), (0, 0, 0, 255))
        image.putpixel((x + width // 2, y + height // 2), ink)
    image.save(path)
    return path


def build_test_font(path: Path) -> Path:
    """Build a tiny TrueType font where 'A' and 'B' are solid squares."""
    builder = FontBuilder(1000, isTTF=True)
    builder.setupGlyphOrder([".notdef", "A", "B"])
    builder.setupCharacterMap({ord("A"): "A", ord("B"): "B"})

    pen = TTGlyphPen(None)
    pen.moveTo((100, 0))
    pen.lineTo((100, 700))
    pen.lineTo((500, 700))
    pen.lineTo((500, 0))
    pen.closePath()
    square = pen.glyph()

    builder.setupGlyf({".notdef": TTGlyphPen(None).glyph(), "A": square, "B": square})
    builder.setupHorizontalMetrics({".notdef": (600, 0), "A": (600, 100), "B": (600, 100)})
    builder.setupHorizontalHeader(ascent=800, descent=-200)
    builder.setupNameTable({"familyName": "Spritefont Test", "styleName": "Regular"})
    builder.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    builder.setupPost()
    builder.save(str(path))
    return path
