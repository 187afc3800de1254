"""Configuration settings for Spritefont."""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from spritefont.domain.character_region import (
    CharacterRegion,
    parse_character_region,
    parse_codepoint,
)


class TextureFormat(str, Enum):
    """Pixel format of the written atlas texture."""

    AUTO = "auto"
    RGBA32 = "rgba32"
    BGRA4444 = "bgra4444"
    COMPRESSED_MONO = "compressed_mono"


class FeatureLevel(str, Enum):
    """Minimum graphics feature level the font must load on.

    Only used to warn about atlas sizes the target cannot sample.
    """

    FL9_1 = "9_1"
    FL9_2 = "9_2"
    FL9_3 = "9_3"
    FL10_0 = "10_0"
    FL10_1 = "10_1"
    FL11_0 = "11_0"
    FL11_1 = "11_1"
    FL12_0 = "12_0"
    FL12_1 = "12_1"

    @property
    def rank(self) -> int:
        """Position in ascending capability order."""
        return list(FeatureLevel).index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, FeatureLevel):
            return NotImplemented
        return self.rank < other.rank


class FontStyle(str, Enum):
    """Style requested from a TrueType source."""

    REGULAR = "regular"
    BOLD = "bold"
    ITALIC = "italic"
    BOLD_ITALIC = "bold_italic"


class ImportConfig(BaseModel):
    """Configuration for reading the source font."""

    source_font: Path = Field(
        description="Marker bitmap (.bmp, .png, .gif) or TrueType font",
    )
    character_regions: list[CharacterRegion] = Field(
        default_factory=list,
        description="Characters to include (empty = printable ASCII)",
    )
    default_character: int = Field(
        default=0,
        ge=0,
        le=0x10FFFF,
        description="Fallback code point for missing characters (0 = none)",
    )
    font_size: float = Field(
        default=23.0,
        gt=0.0,
        le=1024.0,
        description="TrueType rasterization size in pixels",
    )
    font_style: FontStyle = Field(
        default=FontStyle.REGULAR,
        description="TrueType style",
    )
    sharp: bool = Field(
        default=False,
        description="Rasterize TrueType glyphs without antialiasing",
    )

    @field_validator("character_regions", mode="before")
    @classmethod
    def _parse_regions(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [parse_character_region(item) if isinstance(item, str) else item for item in value]
        return value

    @field_validator("default_character", mode="before")
    @classmethod
    def _parse_default_character(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_codepoint(value)
        return value


class LayoutConfig(BaseModel):
    """Spacing adjustments applied after packing."""

    line_spacing: float = Field(
        default=0.0,
        description="Added to the line spacing (negative = tighter)",
    )
    character_spacing: float = Field(
        default=0.0,
        description="Added to every glyph's advance (negative = tighter)",
    )


class OutputConfig(BaseModel):
    """Configuration for the written sprite font."""

    output_file: Path = Field(
        description="Binary sprite font output path",
    )
    texture_format: TextureFormat = Field(
        default=TextureFormat.AUTO,
        description="Atlas pixel format (auto = mono when all glyphs are white)",
    )
    feature_level: FeatureLevel = Field(
        default=FeatureLevel.FL9_1,
        description="Feature level used for texture size warnings",
    )
    no_premultiply: bool = Field(
        default=False,
        description="Keep straight alpha instead of premultiplying",
    )
    fast_pack: bool = Field(
        default=False,
        description="Pack glyphs in code point order without sorting",
    )
    debug_output_spritesheet: Path | None = Field(
        default=None,
        description="Also save the atlas as an image here",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class SpriteFontSettings(BaseModel):
    """Main application settings."""

    source: ImportConfig
    output: OutputConfig
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings(source_font: Path, output_file: Path) -> SpriteFontSettings:
    """Get default settings for converting ``source_font`` into ``output_file``."""
    return SpriteFontSettings(
        source=ImportConfig(source_font=source_font),
        output=OutputConfig(output_file=output_file),
    )
