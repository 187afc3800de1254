"""Common importer interface and importer selection."""

from pathlib import Path
from typing import Protocol

from spritefont.config import ImportConfig
from spritefont.domain.glyph import Glyph

BITMAP_EXTENSIONS = frozenset({".bmp", ".png", ".gif"})


class FontImporter(Protocol):
    """Produces glyphs and a line spacing from a source font.

    Attributes:
        glyphs: Imported glyphs, in import order
        line_spacing: Distance between baselines in pixels
    """

    glyphs: list[Glyph]
    line_spacing: float

    def import_font(self, options: ImportConfig) -> None:
        """Read the source named by ``options`` and fill ``glyphs`` and ``line_spacing``."""
        ...


def is_bitmap_source(path: Path) -> bool:
    """Check whether a source path names a marker bitmap rather than a TrueType font."""
    return path.suffix.lower() in BITMAP_EXTENSIONS


def create_importer(path: Path) -> FontImporter:
    """Pick the importer for a source path by its file extension.

    Args:
        path: Source font path

    Returns:
        BitmapImporter for ``.bmp``, ``.png`` and ``.gif`` files,
        TrueTypeImporter for everything else
    """
    if is_bitmap_source(path):
        from spritefont.io.bitmap_importer import BitmapImporter

        return BitmapImporter()

    from spritefont.io.truetype_importer import TrueTypeImporter

    return TrueTypeImporter()
