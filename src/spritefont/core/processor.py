"""Conversion pipeline orchestration.

This module runs a full conversion from a source font to a sprite font:

1. Import glyphs (marker bitmap or TrueType, chosen by file extension)
2. Order glyphs by code point and validate them
3. Crop transparent borders
4. Pack glyphs into one atlas and check its size
5. Apply spacing adjustments
6. Resolve the texture format and premultiply alpha
7. Write the sprite font (and optionally a debug spritesheet)

Every failure aborts the run; nothing is retried or partially written.
"""

import time
from collections import Counter
from collections.abc import Callable

from spritefont.config import FeatureLevel, ImportConfig, SpriteFontSettings, TextureFormat
from spritefont.core.bitmap import Bitmap
from spritefont.core.cropper import GlyphCropper
from spritefont.core.packer import GlyphPacker
from spritefont.core.transforms import matches_rgb, premultiply_alpha
from spritefont.domain.color import WHITE
from spritefont.domain.glyph import Glyph
from spritefont.exceptions import FontValidationError
from spritefont.io.importer import FontImporter, create_importer
from spritefont.io.writer import SpriteFontWriter, save_debug_spritesheet
from spritefont.utils import ProcessingLogger, ProcessingStats, configure_logging

MAX_TEXTURE_SIZE = 16384

# (size exceeded, minimum feature level able to sample it), largest first
TEXTURE_SIZE_LIMITS: list[tuple[int, FeatureLevel]] = [
    (8192, FeatureLevel.FL11_0),
    (4096, FeatureLevel.FL10_0),
    (2048, FeatureLevel.FL9_3),
]


def validate_glyphs(glyphs: list[Glyph], default_character: int) -> None:
    """Check imported glyphs before they are processed further.

    Args:
        glyphs: Imported glyphs
        default_character: Configured fallback code point (0 = none)

    Raises:
        FontValidationError: If there are no glyphs, or the default character
            is not among them
    """
    if not glyphs:
        raise FontValidationError("Font does not contain any glyphs.")

    if default_character != 0 and not any(g.character == default_character for g in glyphs):
        raise FontValidationError(
            f"The specified default character U+{default_character:04X} is not part of this font."
        )


def import_glyphs(options: ImportConfig) -> tuple[list[Glyph], float, FontImporter]:
    """Import glyphs with the importer matching the source extension.

    Args:
        options: Import configuration

    Returns:
        Tuple of (glyphs ordered by code point, line spacing, importer)
    """
    importer = create_importer(options.source_font)
    importer.import_font(options)
    glyphs = sorted(importer.glyphs, key=lambda glyph: glyph.character)
    return glyphs, importer.line_spacing, importer


def check_texture_size(feature_level: FeatureLevel, width: int, height: int) -> str | None:
    """Describe why an atlas is too large for the target, if it is.

    Returns:
        Warning message, or None if the atlas size is fine
    """
    size = max(width, height)
    if size > MAX_TEXTURE_SIZE:
        return "Resulting texture is too large for all known feature levels (9.1 - 12.1)"

    for limit, required in TEXTURE_SIZE_LIMITS:
        if size > limit:
            if feature_level < required:
                level = required.value.replace("_", ".")
                return f"Resulting texture requires a feature level {level} or later device"
            return None
    return None


def resolve_texture_format(texture_format: TextureFormat, atlas: Bitmap) -> TextureFormat:
    """Pick a concrete texture format.

    AUTO becomes COMPRESSED_MONO when every visible atlas pixel is white,
    RGBA32 otherwise. Explicit formats are returned unchanged.
    """
    if texture_format is not TextureFormat.AUTO:
        return texture_format
    if matches_rgb(WHITE, atlas):
        return TextureFormat.COMPRESSED_MONO
    return TextureFormat.RGBA32


def adjust_spacing(glyphs: list[Glyph], line_spacing: float, line_delta: float, character_delta: float) -> float:
    """Add the configured spacing deltas.

    Returns:
        Adjusted line spacing
    """
    for glyph in glyphs:
        glyph.advance_x += character_delta
    return line_spacing + line_delta


class SpriteFontProcessor:
    """Orchestrates a sprite font conversion.

    Example:
        settings = get_default_settings(Path("font.png"), Path("font.spritefont"))
        stats = SpriteFontProcessor(settings).process()
    """

    def __init__(self, config: SpriteFontSettings, quiet: bool = False) -> None:
        """Initialize the processor with configuration.

        Args:
            config: Conversion settings
            quiet: Suppress console log output except errors
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=quiet,
        )
        self.processing_logger = ProcessingLogger(self.logger)

    def process(self, step_callback: Callable[[str], None] | None = None) -> ProcessingStats:
        """Run the whole conversion.

        Args:
            step_callback: Optional callback receiving a description of each step

        Returns:
            ProcessingStats describing the run

        Raises:
            SpriteFontError: On any import, validation or output failure
        """
        source = self.config.source
        output = self.config.output
        layout = self.config.layout
        stats = self.processing_logger.stats
        stats.start_time = time.time()

        def step(message: str) -> None:
            self.logger.debug("Step", step=message)
            if step_callback is not None:
                step_callback(message)

        self.logger.info(
            "Starting conversion",
            input=str(source.source_font),
            output=str(output.output_file),
        )

        step(f"Importing {source.source_font}")
        glyphs, line_spacing, importer = import_glyphs(source)
        self.processing_logger.log_import(
            source=str(source.source_font),
            importer=type(importer).__name__,
            glyph_count=len(glyphs),
            line_spacing=line_spacing,
        )
        self._report_import_details(importer, glyphs)
        validate_glyphs(glyphs, source.default_character)

        step("Cropping glyph borders")
        cropper = GlyphCropper()
        cropper.crop_all(glyphs)
        self.processing_logger.log_crop(cropper.cropped_count, cropper.lines_removed)

        step("Packing glyphs into sprite sheet")
        if output.fast_pack:
            atlas = GlyphPacker.arrange_glyphs_fast(glyphs)
        else:
            atlas = GlyphPacker.arrange_glyphs(glyphs)
        self.processing_logger.log_pack(atlas.width, atlas.height, output.fast_pack)

        warning = check_texture_size(output.feature_level, atlas.width, atlas.height)
        if warning is not None:
            self.processing_logger.log_warning(warning)

        line_spacing = adjust_spacing(
            glyphs, line_spacing, layout.line_spacing, layout.character_spacing
        )
        stats.line_spacing = line_spacing

        texture_format = resolve_texture_format(output.texture_format, atlas)
        if not output.no_premultiply:
            step("Premultiplying alpha")
            premultiply_alpha(atlas)
        self.processing_logger.log_format(texture_format.value, not output.no_premultiply)

        if output.debug_output_spritesheet is not None:
            step(f"Saving debug output spritesheet {output.debug_output_spritesheet}")
            save_debug_spritesheet(atlas, output.debug_output_spritesheet)

        step(f"Writing {output.output_file} ({texture_format.value} format)")
        SpriteFontWriter(output.output_file).write(
            glyphs=glyphs,
            line_spacing=line_spacing,
            default_character=source.default_character,
            atlas=atlas,
            texture_format=texture_format,
        )

        stats.end_time = time.time()
        self.logger.info(
            "Conversion complete",
            glyphs=len(glyphs),
            atlas=f"{atlas.width}x{atlas.height}",
            format=texture_format.value,
            duration_seconds=round(stats.duration_seconds, 2),
        )
        return stats

    def _report_import_details(self, importer: FontImporter, glyphs: list[Glyph]) -> None:
        from spritefont.io.bitmap_importer import BitmapImporter
        from spritefont.io.truetype_importer import TrueTypeImporter

        if isinstance(importer, BitmapImporter) and importer.extra_glyph_count:
            self.processing_logger.log_warning(
                f"{importer.extra_glyph_count} glyph cells beyond the requested characters "
                "were numbered sequentially"
            )

        if isinstance(importer, TrueTypeImporter):
            if importer.missing_characters:
                self.logger.info("Characters not in font", count=len(importer.missing_characters))
            if not importer.style_applied:
                self.processing_logger.log_warning(
                    f"Font style '{self.config.source.font_style.value}' is not available; using regular"
                )

        duplicates = [c for c, n in Counter(g.character for g in glyphs).items() if n > 1]
        if duplicates:
            self.processing_logger.log_warning(
                f"{len(duplicates)} characters were assigned to more than one glyph"
            )
