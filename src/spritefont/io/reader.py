"""Binary sprite font reader.

Reads files produced by SpriteFontWriter back into plain data, mainly for
inspection and tests.
"""

from dataclasses import dataclass, field
from pathlib import Path

from spritefont.domain.region import Region
from spritefont.io.writer import (
    FOOTER_STRUCT,
    GLYPH_STRUCT,
    HEADER_STRUCT,
    MAGIC,
    TEXTURE_STRUCT,
    DxgiFormat,
)


@dataclass
class GlyphRecord:
    """One glyph entry of a sprite font file."""

    character: int
    region: Region
    offset_x: float
    offset_y: float
    advance_x: float


@dataclass
class SpriteFontData:
    """Decoded contents of a sprite font file."""

    glyphs: list[GlyphRecord] = field(default_factory=list)
    line_spacing: float = 0.0
    default_character: int = 0
    texture_width: int = 0
    texture_height: int = 0
    texture_format: DxgiFormat = DxgiFormat.R8G8B8A8_UNORM
    row_pitch: int = 0
    pixel_data: bytes = b""

    def glyph(self, character: int | str) -> GlyphRecord | None:
        """Look up a glyph by code point or character."""
        if isinstance(character, str):
            character = ord(character)
        return next((g for g in self.glyphs if g.character == character), None)


def read_sprite_font(path: Path) -> SpriteFontData:
    """Read a sprite font file.

    Raises:
        ValueError: If the file does not start with the sprite font magic or is truncated
    """
    data = path.read_bytes()
    if not data.startswith(MAGIC):
        raise ValueError(f"'{path}' is not a sprite font file")

    offset = len(MAGIC)

    def take(layout):
        nonlocal offset
        if offset + layout.size > len(data):
            raise ValueError(f"'{path}' is truncated")
        values = layout.unpack_from(data, offset)
        offset += layout.size
        return values

    (count,) = take(HEADER_STRUCT)
    result = SpriteFontData()
    for _ in range(count):
        character, left, top, right, bottom, offset_x, offset_y, advance_x = take(GLYPH_STRUCT)
        result.glyphs.append(
            GlyphRecord(
                character=character,
                region=Region(left, top, right - left, bottom - top),
                offset_x=offset_x,
                offset_y=offset_y,
                advance_x=advance_x,
            )
        )

    result.line_spacing, result.default_character = take(FOOTER_STRUCT)
    width, height, dxgi_format, pitch, rows = take(TEXTURE_STRUCT)
    result.texture_width = width
    result.texture_height = height
    result.texture_format = DxgiFormat(dxgi_format)
    result.row_pitch = pitch
    result.pixel_data = data[offset : offset + pitch * rows]
    if len(result.pixel_data) != pitch * rows:
        raise ValueError(f"'{path}' is truncated")
    return result
