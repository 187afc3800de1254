"""Whole-bitmap pixel operations.

These functions read or rewrite bitmap pixels in place through scoped
PixelAccessors. Channel arithmetic uses integer floor division throughout so
that output matches reference data bit for bit.
"""

from spritefont.core.bitmap import Bitmap, LockMode, PixelAccessor
from spritefont.domain.color import alpha_of, pack_argb, rgb_of, unpack_argb, with_alpha
from spritefont.domain.region import Region


def matches_alpha(expected_alpha: int, bitmap: Bitmap, region: Region | None = None) -> bool:
    """Check whether every pixel in ``region`` has the given alpha.

    Args:
        expected_alpha: Alpha value to compare against (0-255)
        bitmap: Bitmap to inspect
        region: Region to inspect (whole bitmap when omitted)

    Returns:
        True if no pixel in the region has a different alpha
    """
    with PixelAccessor(bitmap, LockMode.READ_ONLY, region) as pixels:
        for y in range(pixels.height):
            for x in range(pixels.width):
                if alpha_of(pixels[x, y]) != expected_alpha:
                    return False
    return True


def matches_rgb(expected_rgb: int, bitmap: Bitmap) -> bool:
    """Check whether every visible pixel has the given RGB color.

    Fully transparent pixels are ignored.

    Args:
        expected_rgb: Packed color to compare against (alpha is ignored)
        bitmap: Bitmap to inspect

    Returns:
        True if every pixel with non-zero alpha has exactly that color
    """
    expected_rgb = rgb_of(expected_rgb)
    with PixelAccessor(bitmap, LockMode.READ_ONLY) as pixels:
        for y in range(pixels.height):
            for x in range(pixels.width):
                color = pixels[x, y]
                if alpha_of(color) == 0:
                    continue
                if rgb_of(color) != expected_rgb:
                    return False
    return True


def copy_region(
    source: Bitmap,
    source_region: Region,
    dest: Bitmap,
    dest_region: Region | None = None,
) -> None:
    """Copy pixels from one bitmap region to another.

    Args:
        source: Bitmap to read from
        source_region: Region of ``source`` to copy
        dest: Bitmap to write to
        dest_region: Region of ``dest`` to fill (same coordinates as
            ``source_region`` when omitted)

    Raises:
        ValueError: If the two regions differ in size
    """
    if dest_region is None:
        dest_region = source_region
    if source_region.width != dest_region.width:
        raise ValueError(
            f"Regions must have the same width: {source_region.width} != {dest_region.width}"
        )
    if source_region.height != dest_region.height:
        raise ValueError(
            f"Regions must have the same height: {source_region.height} != {dest_region.height}"
        )

    with (
        PixelAccessor(source, LockMode.READ_ONLY, source_region) as source_pixels,
        PixelAccessor(dest, LockMode.WRITE_ONLY, dest_region) as dest_pixels,
    ):
        for y in range(source_region.height):
            for x in range(source_region.width):
                dest_pixels[x, y] = source_pixels[x, y]


def convert_grey_to_alpha(bitmap: Bitmap) -> None:
    """Turn greyscale brightness into alpha, leaving every pixel white.

    Monochrome source art (white glyphs on black) becomes translucent glyph
    data: alpha is the floor of the mean of the red, green and blue channels.
    """
    with PixelAccessor(bitmap, LockMode.READ_WRITE) as pixels:
        for y in range(pixels.height):
            for x in range(pixels.width):
                _, red, green, blue = unpack_argb(pixels[x, y])
                alpha = (red + green + blue) // 3
                pixels[x, y] = pack_argb(alpha, 255, 255, 255)


def premultiply_alpha(bitmap: Bitmap) -> None:
    """Scale each color channel by its pixel's alpha (``c * a // 255``).

    Not idempotent: applying it twice darkens translucent pixels further.
    """
    with PixelAccessor(bitmap, LockMode.READ_WRITE) as pixels:
        for y in range(pixels.height):
            for x in range(pixels.width):
                alpha, red, green, blue = unpack_argb(pixels[x, y])
                pixels[x, y] = pack_argb(
                    alpha,
                    red * alpha // 255,
                    green * alpha // 255,
                    blue * alpha // 255,
                )


def _copy_border_pixel(
    pixels: PixelAccessor, source_x: int, source_y: int, dest_x: int, dest_y: int
) -> None:
    pixels[dest_x, dest_y] = with_alpha(pixels[source_x, source_y], 0)


def pad_border_pixels(bitmap: Bitmap, region: Region) -> None:
    """Bleed a region's edge colors into its one-pixel border at zero alpha.

    Texture filtering samples the gutter next to a glyph when the font is
    scaled or rotated; giving those gutter pixels the glyph's own edge color
    (but no coverage) keeps unrelated colors from leaking into the edge.
    The region must have a one-pixel margin inside the bitmap on every side.

    Args:
        bitmap: Atlas bitmap holding the glyph
        region: Glyph region inside ``bitmap``

    Raises:
        IndexError: If the one-pixel border falls outside the bitmap
    """
    with PixelAccessor(bitmap, LockMode.READ_WRITE) as pixels:
        left, top = region.x, region.y
        right, bottom = region.right, region.bottom

        for x in range(left, right):
            _copy_border_pixel(pixels, x, top, x, top - 1)
            _copy_border_pixel(pixels, x, bottom - 1, x, bottom)

        for y in range(top, bottom):
            _copy_border_pixel(pixels, left, y, left - 1, y)
            _copy_border_pixel(pixels, right - 1, y, right, y)

        _copy_border_pixel(pixels, left, top, left - 1, top - 1)
        _copy_border_pixel(pixels, right - 1, top, right, top - 1)
        _copy_border_pixel(pixels, left, bottom - 1, left - 1, bottom)
        _copy_border_pixel(pixels, right - 1, bottom - 1, right, bottom)
