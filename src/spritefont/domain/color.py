"""Packed 32-bit ARGB color helpers.

Pixels travel through the pipeline as plain ``int`` values laid out as
``0xAARRGGBB``. These helpers build and take apart such values.
"""

ALPHA_SHIFT = 24
RED_SHIFT = 16
GREEN_SHIFT = 8
BLUE_SHIFT = 0

OPAQUE = 255

# Fully opaque bright magenta, reserved for glyph cell borders.
MAGENTA = 0xFFFF00FF
WHITE = 0xFFFFFFFF
TRANSPARENT = 0x00000000


def pack_argb(alpha: int, red: int, green: int, blue: int) -> int:
    """Pack four 8-bit channels into one ARGB value.

    Args:
        alpha: Alpha channel (0-255)
        red: Red channel (0-255)
        green: Green channel (0-255)
        blue: Blue channel (0-255)

    Returns:
        Packed ``0xAARRGGBB`` value
    """
    return (
        (alpha & 0xFF) << ALPHA_SHIFT
        | (red & 0xFF) << RED_SHIFT
        | (green & 0xFF) << GREEN_SHIFT
        | (blue & 0xFF) << BLUE_SHIFT
    )


def unpack_argb(color: int) -> tuple[int, int, int, int]:
    """Split a packed ARGB value into ``(alpha, red, green, blue)``."""
    return (
        (color >> ALPHA_SHIFT) & 0xFF,
        (color >> RED_SHIFT) & 0xFF,
        (color >> GREEN_SHIFT) & 0xFF,
        (color >> BLUE_SHIFT) & 0xFF,
    )


def alpha_of(color: int) -> int:
    """Return the alpha channel of a packed ARGB value."""
    return (color >> ALPHA_SHIFT) & 0xFF


def rgb_of(color: int) -> int:
    """Return the packed color with the alpha channel cleared."""
    return color & 0x00FFFFFF


def with_alpha(color: int, alpha: int) -> int:
    """Return the same color with its alpha channel replaced."""
    return ((alpha & 0xFF) << ALPHA_SHIFT) | (color & 0x00FFFFFF)
