"""Domain models for spritefont.

This module contains the plain data types shared by every pipeline stage:

- Packed ARGB color helpers and the magenta marker constant
- Region: a mutable pixel rectangle
- Glyph: a character with its bitmap region and layout offsets
- CharacterRegion: a closed code point range requested for the font
"""

from spritefont.domain.character_region import (
    DEFAULT_CHARACTER_REGION,
    CharacterRegion,
    flatten,
    parse_character_region,
    parse_codepoint,
)
from spritefont.domain.color import (
    MAGENTA,
    TRANSPARENT,
    WHITE,
    alpha_of,
    pack_argb,
    rgb_of,
    unpack_argb,
    with_alpha,
)
from spritefont.domain.glyph import Glyph
from spritefont.domain.region import Region

__all__: list[str] = [
    # Constants
    "DEFAULT_CHARACTER_REGION",
    "MAGENTA",
    "TRANSPARENT",
    "WHITE",
    # Core types
    "CharacterRegion",
    "Glyph",
    "Region",
    # Functions
    "alpha_of",
    "flatten",
    "pack_argb",
    "parse_character_region",
    "parse_codepoint",
    "rgb_of",
    "unpack_argb",
    "with_alpha",
]
