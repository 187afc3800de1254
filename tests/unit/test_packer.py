"""Unit tests for atlas packing."""

from helpers import W, bitmap_rows
from spritefont.core.bitmap import Bitmap
from spritefont.core.packer import GUTTER, HEIGHT_ALIGNMENT, GlyphPacker
from spritefont.domain.color import with_alpha
from spritefont.domain.glyph import Glyph


def _solid_glyph(character: int, width: int, height: int) -> Glyph:
    return Glyph.from_bitmap(character, Bitmap(width, height, fill=W))


def _overlaps(glyphs: list[Glyph]) -> bool:
    for i, first in enumerate(glyphs):
        for second in glyphs[i + 1 :]:
            if first.region.intersects(second.region):
                return True
    return False


class TestEstimateWidth:
    """Tests for atlas width estimation."""

    def test_power_of_two(self):
        """Test the width is always a power of two."""
        glyphs = [_solid_glyph(65 + i, 5, 7) for i in range(20)]
        width = GlyphPacker.estimate_width(glyphs)
        assert width & (width - 1) == 0

    def test_fits_widest_glyph(self):
        """Test one wide glyph forces a wider atlas."""
        width = GlyphPacker.estimate_width([_solid_glyph(65, 40, 1)])
        assert width == 64

    def test_single_pixel(self):
        """Test a 1x1 glyph with its gutter needs a 4 pixel wide atlas."""
        assert GlyphPacker.estimate_width([_solid_glyph(65, 1, 1)]) == 4


class TestArrangeGlyphs:
    """Tests for tight and fast packing."""

    def test_glyphs_point_into_atlas(self):
        """Test every glyph is rebased onto the shared atlas."""
        glyphs = [_solid_glyph(65, 3, 4), _solid_glyph(66, 2, 2)]
        atlas = GlyphPacker.arrange_glyphs(glyphs)

        assert all(glyph.bitmap is atlas for glyph in glyphs)
        assert glyphs[0].region.width == 3
        assert glyphs[0].region.height == 4
        assert glyphs[1].region.width == 2

    def test_no_overlap_and_gutter(self):
        """Test placements never overlap and keep a one pixel margin."""
        glyphs = [_solid_glyph(65 + i, 1 + i % 4, 2 + i % 3) for i in range(12)]
        atlas = GlyphPacker.arrange_glyphs(glyphs)

        assert not _overlaps(glyphs)
        for glyph in glyphs:
            assert glyph.region.x >= GUTTER
            assert glyph.region.y >= GUTTER
            assert glyph.region.right + GUTTER <= atlas.width
            assert glyph.region.bottom + GUTTER <= atlas.height

    def test_atlas_dimensions(self):
        """Test the atlas is power-of-two wide and four-aligned high."""
        glyphs = [_solid_glyph(65 + i, 3, 5) for i in range(7)]
        atlas = GlyphPacker.arrange_glyphs(glyphs)
        assert atlas.width & (atlas.width - 1) == 0
        assert atlas.height % HEIGHT_ALIGNMENT == 0

    def test_pixels_copied_and_padded(self):
        """Test glyph pixels are copied and the gutter holds clear edge color."""
        glyph = _solid_glyph(65, 1, 1)
        atlas = GlyphPacker.arrange_glyphs([glyph])

        assert (atlas.width, atlas.height) == (4, 4)
        rows = bitmap_rows(atlas)
        assert rows[1][1] == W
        assert rows[0][0] == with_alpha(W, 0)
        assert rows[2][2] == with_alpha(W, 0)
        assert rows[3][3] == 0

    def test_tight_packing_sorts_by_height(self):
        """Test the tallest glyph is placed first."""
        short = _solid_glyph(65, 2, 2)
        tall = _solid_glyph(66, 2, 6)
        GlyphPacker.arrange_glyphs([short, tall])
        assert (tall.region.x, tall.region.y) == (GUTTER, GUTTER)

    def test_fast_packing_keeps_order(self):
        """Test fast packing places glyphs in the given order."""
        short = _solid_glyph(65, 2, 2)
        tall = _solid_glyph(66, 2, 6)
        GlyphPacker.arrange_glyphs_fast([short, tall])
        assert (short.region.x, short.region.y) == (GUTTER, GUTTER)
        assert tall.region.x > short.region.x

    def test_shared_source_bitmap(self):
        """Test glyphs cut from one source bitmap pack correctly."""
        source = Bitmap(6, 2, fill=W)
        glyphs = [
            Glyph.from_bitmap(65, source, source.bounds.copy()),
        ]
        glyphs[0].region.width = 3
        glyphs.append(Glyph.from_bitmap(66, source, source.bounds.copy()))
        glyphs[1].region.x = 3
        glyphs[1].region.width = 3

        atlas = GlyphPacker.arrange_glyphs_fast(glyphs)
        rows = bitmap_rows(atlas)
        for glyph in glyphs:
            assert rows[glyph.region.y][glyph.region.x] == W
        assert not source.is_locked
        assert not atlas.is_locked
