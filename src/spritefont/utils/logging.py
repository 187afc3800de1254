"""Logging utilities for Spritefont."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

_HANDLER_NAME = "spritefont"


@dataclass
class ProcessingStats:
    """Statistics from a conversion run."""

    imported_count: int = 0
    cropped_count: int = 0
    lines_cropped: int = 0
    atlas_width: int = 0
    atlas_height: int = 0
    line_spacing: float = 0.0
    texture_format: str | None = None
    premultiplied: bool = False
    warnings: list[str] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Handlers installed by an earlier call are replaced, so the function can
    be called once per conversion.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in list(root_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.set_name(_HANDLER_NAME)
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.set_name(_HANDLER_NAME)
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("spritefont")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class ProcessingLogger:
    """Logger for tracking conversion progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_import(self, source: str, importer: str, glyph_count: int, line_spacing: float) -> None:
        """Log imported glyph data."""
        self._logger.info(
            "Glyphs imported",
            source=source,
            importer=importer,
            glyphs=glyph_count,
            line_spacing=line_spacing,
        )
        self._stats.imported_count = glyph_count
        self._stats.line_spacing = line_spacing

    def log_crop(self, cropped_count: int, lines_removed: int) -> None:
        """Log glyph cropping totals."""
        self._logger.info(
            "Glyph borders cropped",
            cropped=cropped_count,
            lines_removed=lines_removed,
        )
        self._stats.cropped_count = cropped_count
        self._stats.lines_cropped = lines_removed

    def log_pack(self, width: int, height: int, fast: bool) -> None:
        """Log atlas dimensions."""
        self._logger.info("Glyphs packed", width=width, height=height, fast=fast)
        self._stats.atlas_width = width
        self._stats.atlas_height = height

    def log_warning(self, message: str) -> None:
        """Log a non-fatal problem with the output."""
        self._logger.warning(message)
        self._stats.warnings.append(message)

    def log_format(self, texture_format: str, premultiplied: bool) -> None:
        """Log the resolved texture format."""
        self._logger.info(
            "Texture format resolved",
            format=texture_format,
            premultiplied=premultiplied,
        )
        self._stats.texture_format = texture_format
        self._stats.premultiplied = premultiplied

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
