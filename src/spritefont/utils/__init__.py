"""Utility functions for spritefont.

This module provides logging setup and run statistics.
"""

from spritefont.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
]
