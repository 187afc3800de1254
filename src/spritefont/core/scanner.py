"""Marker-delimited glyph region detection.

Source images lay glyphs out on a grid and fill everything between and
around the cells with the marker color. Each cell is assumed to be a solid
rectangle fully enclosed by marker pixels; cells that break this rule are
not detected and produce whatever rectangle their top row and left column
describe.
"""

from collections.abc import Callable, Iterator

from spritefont.core.bitmap import Bitmap, LockMode, PixelAccessor
from spritefont.domain.color import MAGENTA
from spritefont.domain.region import Region

MarkerPredicate = Callable[[int], bool]


def is_marker_color(color: int) -> bool:
    """Check whether a packed ARGB pixel is the opaque magenta marker.

    The whole packed value is compared, so magenta with any alpha other
    than 255 is an ordinary pixel.
    """
    return color == MAGENTA


def find_glyph_regions(bitmap: Bitmap, is_marker: MarkerPredicate = is_marker_color) -> Iterator[Region]:
    """Find glyph cells in a marker-bordered bitmap.

    A pixel starts a cell when it is not a marker while its left and upper
    neighbours are. The cell extends right along that row and down along
    that column until a marker pixel or the bitmap edge.

    Args:
        bitmap: Bitmap to scan
        is_marker: Predicate deciding whether a packed pixel is a marker

    Yields:
        Cell regions in row-major order (top-left to bottom-right)
    """
    with PixelAccessor(bitmap, LockMode.READ_ONLY) as pixels:
        width = bitmap.width
        height = bitmap.height

        for y in range(1, height):
            for x in range(1, width):
                if (
                    is_marker(pixels[x, y])
                    or not is_marker(pixels[x - 1, y])
                    or not is_marker(pixels[x, y - 1])
                ):
                    continue

                glyph_width = 1
                while x + glyph_width < width and not is_marker(pixels[x + glyph_width, y]):
                    glyph_width += 1

                glyph_height = 1
                while y + glyph_height < height and not is_marker(pixels[x, y + glyph_height]):
                    glyph_height += 1

                yield Region(x, y, glyph_width, glyph_height)
