"""Glyph representation and layout metadata.

A glyph pairs a character with the rectangle of a bitmap that holds its
pixels, plus the layout offsets a renderer needs to place it. The cropper
trims the rectangle and records what it removed in the offsets, so that
``offset_x + region.width + advance_x`` stays equal to the glyph's full
horizontal advance.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from spritefont.domain.region import Region

if TYPE_CHECKING:
    from spritefont.core.bitmap import Bitmap


@dataclass
class Glyph:
    """A single character's image data and layout metrics.

    Attributes:
        character: Unicode code point
        bitmap: Bitmap that owns the glyph pixels
        region: Rectangle of ``bitmap`` covered by the glyph
        offset_x: Horizontal distance from the pen position to the region
        offset_y: Vertical distance from the line top to the region
        advance_x: Extra horizontal advance after the region
    """

    character: int
    bitmap: "Bitmap"
    region: Region
    offset_x: float = 0.0
    offset_y: float = 0.0
    advance_x: float = 0.0

    @classmethod
    def from_bitmap(
        cls, character: int, bitmap: "Bitmap", region: Region | None = None
    ) -> "Glyph":
        """Create a glyph covering ``region``, or the whole bitmap when omitted."""
        if region is None:
            region = bitmap.bounds
        return cls(character=character, bitmap=bitmap, region=region)

    @property
    def char(self) -> str:
        """The glyph's character as a string."""
        return chr(self.character)

    @property
    def total_advance(self) -> float:
        """Horizontal pen movement after drawing this glyph."""
        return self.offset_x + self.region.width + self.advance_x

    def metrics(self) -> dict[str, Any]:
        """Layout metadata without pixel data."""
        return {
            "character": self.character,
            "region": self.region.to_dict(),
            "offset_x": self.offset_x,
            "offset_y": self.offset_y,
            "advance_x": self.advance_x,
        }
