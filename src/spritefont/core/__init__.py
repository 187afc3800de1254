"""Core processing algorithms for spritefont.

This module contains the pixel-level algorithms of the pipeline:

- Scoped pixel access to ARGB bitmaps
- Marker-delimited glyph cell detection
- Glyph cropping
- Pixel transforms (grey to alpha, premultiplied alpha, border padding)
- Atlas packing
- Pipeline orchestration

Key functions:
- find_glyph_regions: Scan a bitmap for marker-bordered cells
- crop_glyph: Trim transparent rows and columns from a glyph
- convert_grey_to_alpha: Turn brightness into coverage
- premultiply_alpha: Scale colors by alpha
- pad_border_pixels: Bleed edge colors into a glyph's gutter

Key classes:
- Bitmap: ARGB pixel buffer
- PixelAccessor: Scoped lock on a bitmap region
- GlyphCropper: Batch cropping with statistics
- GlyphPacker: Atlas arrangement
- SpriteFontProcessor: Full conversion pipeline
"""

from spritefont.core.bitmap import Bitmap, BitmapLockError, LockMode, PixelAccessor
from spritefont.core.cropper import GlyphCropper, crop_glyph
from spritefont.core.packer import GlyphPacker
from spritefont.core.scanner import find_glyph_regions, is_marker_color
from spritefont.core.transforms import (
    convert_grey_to_alpha,
    copy_region,
    matches_alpha,
    matches_rgb,
    pad_border_pixels,
    premultiply_alpha,
)
from spritefont.core.processor import SpriteFontProcessor

__all__ = [
    # Pixel access
    "Bitmap",
    "BitmapLockError",
    "LockMode",
    "PixelAccessor",
    # Cropping and packing
    "GlyphCropper",
    "GlyphPacker",
    # Processor classes
    "SpriteFontProcessor",
    # Functions
    "convert_grey_to_alpha",
    "copy_region",
    "crop_glyph",
    "find_glyph_regions",
    "is_marker_color",
    "matches_alpha",
    "matches_rgb",
    "pad_border_pixels",
    "premultiply_alpha",
]
