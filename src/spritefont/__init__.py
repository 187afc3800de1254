"""Spritefont - Build packed glyph atlases from bitmap or TrueType fonts.

Spritefont is a CLI tool that extracts glyphs from a source image whose glyph
cells are separated by bright magenta marker pixels (or rasterizes them from a
TrueType font), crops each glyph to its visible pixels, packs them into a
single texture atlas and writes a binary sprite font.

Example:
    $ spritefont arial-16.png arial-16.spritefont

This will scan arial-16.png for marker-delimited cells, map them onto the
printable ASCII range and write arial-16.spritefont.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
