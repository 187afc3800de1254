"""Arrangement of cropped glyphs into a single texture atlas.

Glyphs are placed on horizontal shelves, each surrounded by a one-pixel
gutter that is later filled by border padding. The atlas width is a power
of two and its height a multiple of four, which keeps the result usable as
a block-compressed texture.
"""

import math
from collections.abc import Sequence

from spritefont.core.bitmap import Bitmap
from spritefont.core.transforms import copy_region, pad_border_pixels
from spritefont.domain.glyph import Glyph
from spritefont.domain.region import Region

GUTTER = 1
HEIGHT_ALIGNMENT = 4


def _padded_size(glyph: Glyph) -> tuple[int, int]:
    return glyph.region.width + 2 * GUTTER, glyph.region.height + 2 * GUTTER


def _power_of_two_at_least(value: int) -> int:
    result = 1
    while result < value:
        result *= 2
    return result


def _align_up(value: int, alignment: int) -> int:
    return (value + alignment - 1) // alignment * alignment


class GlyphPacker:
    """Packs glyphs into one atlas bitmap.

    After packing, each glyph's ``bitmap`` is the atlas and its ``region``
    is its placement inside it.
    """

    @staticmethod
    def estimate_width(glyphs: Sequence[Glyph]) -> int:
        """Pick a power-of-two atlas width for a roughly square layout."""
        total_area = 0
        widest = 1
        for glyph in glyphs:
            width, height = _padded_size(glyph)
            total_area += width * height
            widest = max(widest, width)
        side = math.isqrt(total_area)
        if side * side < total_area:
            side += 1
        return _power_of_two_at_least(max(widest, side))

    @classmethod
    def arrange_glyphs(cls, glyphs: Sequence[Glyph]) -> Bitmap:
        """Pack glyphs tightly, tallest first.

        Args:
            glyphs: Cropped glyphs to pack (updated in place)

        Returns:
            Atlas bitmap
        """
        ordered = sorted(glyphs, key=lambda g: (g.region.height, g.region.width), reverse=True)
        return cls._pack(ordered, cls.estimate_width(glyphs))

    @classmethod
    def arrange_glyphs_fast(cls, glyphs: Sequence[Glyph]) -> Bitmap:
        """Pack glyphs in their given order, without sorting.

        Args:
            glyphs: Cropped glyphs to pack (updated in place)

        Returns:
            Atlas bitmap
        """
        return cls._pack(list(glyphs), cls.estimate_width(glyphs))

    @staticmethod
    def _place(glyphs: Sequence[Glyph], atlas_width: int) -> tuple[list[Region], int]:
        placements: list[Region] = []
        cursor_x = 0
        cursor_y = 0
        shelf_height = 0

        for glyph in glyphs:
            width, height = _padded_size(glyph)
            if cursor_x + width > atlas_width:
                cursor_x = 0
                cursor_y += shelf_height
                shelf_height = 0

            placements.append(
                Region(cursor_x + GUTTER, cursor_y + GUTTER, glyph.region.width, glyph.region.height)
            )
            cursor_x += width
            shelf_height = max(shelf_height, height)

        return placements, cursor_y + shelf_height

    @classmethod
    def _pack(cls, glyphs: list[Glyph], atlas_width: int) -> Bitmap:
        placements, used_height = cls._place(glyphs, atlas_width)
        atlas = Bitmap(atlas_width, _align_up(max(used_height, 1), HEIGHT_ALIGNMENT))

        for glyph, placement in zip(glyphs, placements, strict=True):
            copy_region(glyph.bitmap, glyph.region, atlas, placement)
            pad_border_pixels(atlas, placement)
            glyph.bitmap = atlas
            glyph.region = placement

        return atlas
