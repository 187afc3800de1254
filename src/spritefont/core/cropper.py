"""Trimming of transparent space around glyphs."""

from spritefont.core.transforms import matches_alpha
from spritefont.domain.glyph import Glyph
from spritefont.domain.region import Region


def _is_transparent(glyph: Glyph, x: int, y: int, width: int, height: int) -> bool:
    return matches_alpha(0, glyph.bitmap, Region(x, y, width, height))


def crop_glyph(glyph: Glyph) -> int:
    """Shrink a glyph's region to its non-transparent bounding box, in place.

    Edges are trimmed top, bottom, left, right, each until it holds a visible
    pixel or the region is one pixel thick. Pixels trimmed from the top and
    left move into ``offset_y`` and ``offset_x`` so the glyph keeps its
    on-screen position; pixels trimmed from the right move into
    ``advance_x`` so the pen still advances by the original width. Bottom
    trims need no compensation. Cropping an already cropped glyph is a
    no-op.

    Args:
        glyph: Glyph to crop

    Returns:
        Number of rows and columns removed
    """
    region = glyph.region
    removed = 0

    while region.height > 1 and _is_transparent(glyph, region.x, region.y, region.width, 1):
        region.y += 1
        region.height -= 1
        glyph.offset_y += 1
        removed += 1

    while region.height > 1 and _is_transparent(glyph, region.x, region.bottom - 1, region.width, 1):
        region.height -= 1
        removed += 1

    while region.width > 1 and _is_transparent(glyph, region.x, region.y, 1, region.height):
        region.x += 1
        region.width -= 1
        glyph.offset_x += 1
        removed += 1

    while region.width > 1 and _is_transparent(glyph, region.right - 1, region.y, 1, region.height):
        region.width -= 1
        glyph.advance_x += 1
        removed += 1

    return removed


class GlyphCropper:
    """Crops a batch of glyphs and keeps a tally of the trimmed space.

    Example:
        cropper = GlyphCropper()
        for glyph in glyphs:
            cropper.crop(glyph)
    """

    def __init__(self) -> None:
        self.cropped_count = 0
        self.lines_removed = 0

    def crop(self, glyph: Glyph) -> None:
        """Crop one glyph in place."""
        removed = crop_glyph(glyph)
        if removed:
            self.cropped_count += 1
            self.lines_removed += removed

    def crop_all(self, glyphs: list[Glyph]) -> None:
        """Crop every glyph in place."""
        for glyph in glyphs:
            self.crop(glyph)
