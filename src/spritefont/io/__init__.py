"""Font I/O layer for spritefont.

This module handles reading source fonts and writing sprite fonts. It
provides a clean boundary between the file formats (Pillow images,
fontTools fonts, the binary sprite font layout) and the domain models.

Key responsibilities:
- Decode marker bitmaps and extract glyph cells
- Rasterize TrueType/OpenType fonts
- Select the importer by file extension
- Write and read binary sprite fonts

Key classes:
- BitmapImporter: Marker bitmap glyph extraction
- TrueTypeImporter: TrueType rasterization
- SpriteFontWriter: Binary sprite font output
"""

from spritefont.io.bitmap_importer import BitmapImporter
from spritefont.io.importer import FontImporter, create_importer, is_bitmap_source
from spritefont.io.reader import SpriteFontData, read_sprite_font
from spritefont.io.truetype_importer import TrueTypeImporter
from spritefont.io.writer import SpriteFontWriter, save_debug_spritesheet

__all__ = [
    "BitmapImporter",
    "FontImporter",
    "SpriteFontData",
    "SpriteFontWriter",
    "TrueTypeImporter",
    "create_importer",
    "is_bitmap_source",
    "read_sprite_font",
    "save_debug_spritesheet",
]
