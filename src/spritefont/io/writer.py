"""Binary sprite font writer.

File layout (little-endian)::

    char[8]   magic "DXTKfont"
    uint32    glyph count
    glyph[]   uint32 character
              int32  left, top, right, bottom   (atlas rectangle)
              float  offset_x, offset_y, advance_x
    float     line spacing
    uint32    default character
    uint32    texture width, height
    uint32    DXGI pixel format
    uint32    row pitch in bytes
    uint32    row count
    byte[]    pixel rows
"""

import struct
from collections.abc import Sequence
from enum import IntEnum
from pathlib import Path

from spritefont.config import TextureFormat
from spritefont.core.bitmap import Bitmap, LockMode, PixelAccessor
from spritefont.domain.color import unpack_argb
from spritefont.domain.glyph import Glyph
from spritefont.exceptions import FontSaveError

MAGIC = b"DXTKfont"

GLYPH_STRUCT = struct.Struct("<I4i3f")
HEADER_STRUCT = struct.Struct("<I")
FOOTER_STRUCT = struct.Struct("<fI")
TEXTURE_STRUCT = struct.Struct("<5I")


class DxgiFormat(IntEnum):
    """DXGI pixel format identifiers used in the texture header."""

    R8G8B8A8_UNORM = 28
    A8_UNORM = 65
    B4G4R4A4_UNORM = 115


_TEXTURE_FORMATS = {
    TextureFormat.RGBA32: (DxgiFormat.R8G8B8A8_UNORM, 4),
    TextureFormat.BGRA4444: (DxgiFormat.B4G4R4A4_UNORM, 2),
    TextureFormat.COMPRESSED_MONO: (DxgiFormat.A8_UNORM, 1),
}


def _encode_pixel(color: int, texture_format: TextureFormat) -> bytes:
    alpha, red, green, blue = unpack_argb(color)
    if texture_format is TextureFormat.RGBA32:
        return bytes((red, green, blue, alpha))
    if texture_format is TextureFormat.BGRA4444:
        packed = (alpha >> 4) << 12 | (red >> 4) << 8 | (green >> 4) << 4 | (blue >> 4)
        return packed.to_bytes(2, "little")
    return bytes((alpha,))


def encode_texture(atlas: Bitmap, texture_format: TextureFormat) -> tuple[DxgiFormat, int, bytes]:
    """Encode atlas pixels in the given texture format.

    Monochrome textures keep only the alpha channel; block compression is
    not performed.

    Args:
        atlas: Packed atlas
        texture_format: Resolved (non-auto) texture format

    Returns:
        Tuple of (DXGI format, row pitch, pixel data)

    Raises:
        ValueError: If ``texture_format`` is AUTO
    """
    if texture_format is TextureFormat.AUTO:
        raise ValueError("Texture format must be resolved before encoding")

    dxgi_format, bytes_per_pixel = _TEXTURE_FORMATS[texture_format]
    data = bytearray()
    with PixelAccessor(atlas, LockMode.READ_ONLY) as pixels:
        for y in range(pixels.height):
            for x in range(pixels.width):
                data += _encode_pixel(pixels[x, y], texture_format)

    return dxgi_format, atlas.width * bytes_per_pixel, bytes(data)


class SpriteFontWriter:
    """Writes glyph metadata and the atlas texture to a binary sprite font.

    Example:
        writer = SpriteFontWriter(Path("font.spritefont"))
        writer.write(glyphs, line_spacing, 0, atlas, TextureFormat.RGBA32)
    """

    def __init__(self, output_path: Path) -> None:
        """Initialize the writer.

        Args:
            output_path: Path where the sprite font will be saved
        """
        self._output_path = output_path

    def write(
        self,
        glyphs: Sequence[Glyph],
        line_spacing: float,
        default_character: int,
        atlas: Bitmap,
        texture_format: TextureFormat,
    ) -> None:
        """Write the sprite font file.

        Args:
            glyphs: Packed glyphs, ordered by character
            line_spacing: Adjusted line spacing
            default_character: Fallback code point (0 = none)
            atlas: Atlas bitmap the glyph regions refer to
            texture_format: Resolved texture format

        Raises:
            FontSaveError: If the file cannot be written
        """
        dxgi_format, pitch, pixel_data = encode_texture(atlas, texture_format)

        try:
            with open(self._output_path, "wb") as stream:
                stream.write(MAGIC)
                stream.write(HEADER_STRUCT.pack(len(glyphs)))
                for glyph in glyphs:
                    region = glyph.region
                    stream.write(
                        GLYPH_STRUCT.pack(
                            glyph.character,
                            region.x,
                            region.y,
                            region.right,
                            region.bottom,
                            glyph.offset_x,
                            glyph.offset_y,
                            glyph.advance_x,
                        )
                    )
                stream.write(FOOTER_STRUCT.pack(line_spacing, default_character))
                stream.write(
                    TEXTURE_STRUCT.pack(atlas.width, atlas.height, dxgi_format, pitch, atlas.height)
                )
                stream.write(pixel_data)
        except OSError as e:
            raise FontSaveError(str(self._output_path), str(e)) from e


def save_debug_spritesheet(atlas: Bitmap, path: Path) -> None:
    """Save the atlas as an ordinary image for inspection.

    Raises:
        FontSaveError: If the image cannot be written
    """
    try:
        atlas.to_image().save(path)
    except (OSError, ValueError) as e:
        raise FontSaveError(str(path), str(e)) from e
