"""CLI application entry point for spritefont.

This module provides the main CLI interface using Typer.
"""

from enum import Enum
from pathlib import Path
from typing import Annotated, TypeVar

import typer
from pydantic import ValidationError

from spritefont import __version__
from spritefont.cli.output import (
    console,
    print_error,
    print_header,
    print_step,
    print_success,
    print_warning,
)
from spritefont.config import (
    FeatureLevel,
    FontStyle,
    ImportConfig,
    LayoutConfig,
    LoggingConfig,
    OutputConfig,
    SpriteFontSettings,
    TextureFormat,
)
from spritefont.core import SpriteFontProcessor
from spritefont.domain import parse_character_region, parse_codepoint
from spritefont.exceptions import (
    CharacterRegionFormatError,
    FontSaveError,
    SourceError,
    SpriteFontError,
)

EnumT = TypeVar("EnumT", bound=Enum)

# Create the Typer app
app = typer.Typer(
    name="spritefont",
    help="Build a packed sprite font from a marker bitmap or a TrueType font.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Spritefont[/bold blue] v{__version__}")
        raise typer.Exit()


def _parse_choice(enum_type: type[EnumT], value: str, option: str) -> EnumT:
    """Convert an option string to an enum member or exit with an error."""
    try:
        return enum_type(value.lower())
    except ValueError:
        valid = ", ".join(member.value for member in enum_type)
        print_error(f"Invalid {option}: {value}", details=f"Valid values: {valid}")
        raise typer.Exit(code=1) from None


@app.command()
def convert(
    source_font: Annotated[
        Path,
        typer.Argument(
            help="Marker bitmap (.bmp, .png, .gif) or TrueType/OpenType font",
            show_default=False,
        ),
    ],
    output_file: Annotated[
        Path,
        typer.Argument(
            help="Output sprite font path",
            show_default=False,
        ),
    ],
    character_region: Annotated[
        list[str] | None,
        typer.Option(
            "--character-region",
            "-c",
            help="Characters to include: A, A-Z, 32-127 or 0x20-0x7F (repeatable, default: printable ASCII)",
        ),
    ] = None,
    default_character: Annotated[
        str,
        typer.Option(
            "--default-character",
            "-d",
            help="Fallback character for missing glyphs (0 = none)",
        ),
    ] = "0",
    font_size: Annotated[
        float,
        typer.Option(
            "--font-size",
            "-s",
            help="TrueType rasterization size in pixels",
            min=1.0,
        ),
    ] = 23.0,
    font_style: Annotated[
        str,
        typer.Option(
            "--font-style",
            help="TrueType style (regular|bold|italic|bold_italic)",
        ),
    ] = "regular",
    sharp: Annotated[
        bool,
        typer.Option(
            "--sharp",
            help="Rasterize TrueType glyphs without antialiasing",
        ),
    ] = False,
    line_spacing: Annotated[
        float,
        typer.Option(
            "--line-spacing",
            help="Added to the line spacing (negative = tighter)",
        ),
    ] = 0.0,
    character_spacing: Annotated[
        float,
        typer.Option(
            "--character-spacing",
            help="Added to every glyph's advance (negative = tighter)",
        ),
    ] = 0.0,
    texture_format: Annotated[
        str,
        typer.Option(
            "--texture-format",
            "-f",
            help="Atlas format (auto|rgba32|bgra4444|compressed_mono)",
        ),
    ] = "auto",
    feature_level: Annotated[
        str,
        typer.Option(
            "--feature-level",
            help="Target feature level for texture size warnings (9_1 ... 12_1)",
        ),
    ] = "9_1",
    no_premultiply: Annotated[
        bool,
        typer.Option(
            "--no-premultiply",
            help="Keep straight alpha instead of premultiplying",
        ),
    ] = False,
    fast_pack: Annotated[
        bool,
        typer.Option(
            "--fast-pack",
            help="Pack glyphs in code point order (faster for large fonts)",
        ),
    ] = False,
    debug_output_spritesheet: Annotated[
        Path | None,
        typer.Option(
            "--debug-output-spritesheet",
            help="Also save the atlas as an image",
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Convert a font into a sprite font with a packed glyph atlas.

    Bitmap sources must surround every glyph cell with opaque magenta
    (255, 0, 255); cells are matched to the requested characters from top
    left to bottom right.

    Example:
        spritefont arial-16.png arial-16.spritefont -c 0x20-0x7F
    """
    if not source_font.exists():
        print_error(
            f"Input file not found: {source_font}",
            details=f"The file '{source_font}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not source_font.is_file():
        print_error(
            f"Input path is not a file: {source_font}",
            details="Please provide a path to a bitmap or TrueType font file.",
        )
        raise typer.Exit(code=1)

    style = _parse_choice(FontStyle, font_style, "font style")
    texture = _parse_choice(TextureFormat, texture_format, "texture format")
    level = _parse_choice(FeatureLevel, feature_level.replace(".", "_"), "feature level")

    try:
        regions = [parse_character_region(text) for text in character_region or []]
        default = parse_codepoint(default_character)
    except CharacterRegionFormatError as e:
        print_error(str(e), details="Expected A, A-Z, 32-127 or 0x20-0x7F")
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    try:
        settings = SpriteFontSettings(
            source=ImportConfig(
                source_font=source_font,
                character_regions=regions,
                default_character=default,
                font_size=font_size,
                font_style=style,
                sharp=sharp,
            ),
            output=OutputConfig(
                output_file=output_file,
                texture_format=texture,
                feature_level=level,
                no_premultiply=no_premultiply,
                fast_pack=fast_pack,
                debug_output_spritesheet=debug_output_spritesheet,
            ),
            layout=LayoutConfig(
                line_spacing=line_spacing,
                character_spacing=character_spacing,
            ),
            logging=LoggingConfig(
                log_file=log_file,
                log_level=log_level if not quiet else "ERROR",
            ),
        )
        processor = SpriteFontProcessor(settings, quiet=quiet)
        stats = processor.process(step_callback=None if quiet else print_step)

        if not quiet:
            for warning in stats.warnings:
                print_warning(warning)
            print_success(
                output_path=str(output_file),
                file_size=_format_file_size(output_file),
                total_time_s=stats.duration_seconds,
                glyphs=stats.imported_count,
                atlas_width=stats.atlas_width,
                atlas_height=stats.atlas_height,
                texture_format=stats.texture_format or "unknown",
                line_spacing=stats.line_spacing,
            )

    except SourceError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except FontSaveError as e:
        print_error(f"Could not save output: {e.reason}")
        raise typer.Exit(code=1)
    except SpriteFontError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        print_error(f"Invalid option {field}: {error['msg']}")
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "428 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"

    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
