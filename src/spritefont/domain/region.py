"""Axis-aligned pixel rectangles."""

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class Region:
    """A rectangle of pixels inside a bitmap.

    Regions are mutable: the glyph cropper shrinks them in place and the
    packer moves them into the atlas.

    Attributes:
        x: Left edge (inclusive)
        y: Top edge (inclusive)
        width: Width in pixels
        height: Height in pixels
    """

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        """Right edge (exclusive)."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """Bottom edge (exclusive)."""
        return self.y + self.height

    @property
    def area(self) -> int:
        """Number of pixels covered."""
        return self.width * self.height

    def contains(self, x: int, y: int) -> bool:
        """Check whether a pixel lies inside the region."""
        return self.x <= x < self.right and self.y <= y < self.bottom

    def intersects(self, other: "Region") -> bool:
        """Check whether two regions share at least one pixel."""
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )

    def fits_within(self, width: int, height: int) -> bool:
        """Check whether the region lies inside a ``width`` x ``height`` buffer."""
        return (
            self.x >= 0
            and self.y >= 0
            and self.width >= 0
            and self.height >= 0
            and self.right <= width
            and self.bottom <= height
        )

    def copy(self) -> "Region":
        """Return an independent copy of this region."""
        return Region(self.x, self.y, self.width, self.height)

    def to_tuple(self) -> tuple[int, int, int, int]:
        """Convert to an ``(x, y, width, height)`` tuple."""
        return (self.x, self.y, self.width, self.height)

    def to_box(self) -> tuple[int, int, int, int]:
        """Convert to a Pillow ``(left, top, right, bottom)`` box."""
        return (self.x, self.y, self.right, self.bottom)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}
