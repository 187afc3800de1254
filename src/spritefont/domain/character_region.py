"""Character regions: closed ranges of code points to include in a font.

Regions are parsed from command-line text in any of these forms::

    A           a single literal character
    A-Z         a range of literal characters
    32-127      a decimal code point range
    0x20-0x7F   a hexadecimal code point range
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from spritefont.exceptions import CharacterRegionFormatError

MAX_CODEPOINT = 0x10FFFF


@dataclass(frozen=True, slots=True)
class CharacterRegion:
    """Closed interval of Unicode code points.

    Attributes:
        start: First code point (inclusive)
        end: Last code point (inclusive)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(
                f"Region start {self.start:#x} is greater than end {self.end:#x}"
            )

    @property
    def characters(self) -> Iterator[int]:
        """Code points of the region in ascending order."""
        return iter(range(self.start, self.end + 1))

    def __len__(self) -> int:
        return self.end - self.start + 1

    def __str__(self) -> str:
        if self.start == self.end:
            return f"{self.start:#x}"
        return f"{self.start:#x}-{self.end:#x}"


# Printable ASCII, used when no regions are requested.
DEFAULT_CHARACTER_REGION = CharacterRegion(ord(" "), ord("~"))


def flatten(regions: Iterable[CharacterRegion]) -> list[int]:
    """Flatten regions into a distinct list of code points.

    Code points keep their first-seen order: regions are walked in the given
    order and each region ascending. An empty sequence yields the default
    printable ASCII region.

    Args:
        regions: Character regions to combine

    Returns:
        Ordered list of distinct code points
    """
    regions = list(regions)
    if not regions:
        return list(DEFAULT_CHARACTER_REGION.characters)

    seen: set[int] = set()
    result: list[int] = []
    for region in regions:
        for character in region.characters:
            if character not in seen:
                seen.add(character)
                result.append(character)
    return result


def _parse_character(text: str, token: str) -> int:
    if len(token) == 1:
        return ord(token)
    if not token.isascii():
        raise CharacterRegionFormatError(text, f"'{token}' is not an ASCII number")

    try:
        value = int(token, 16) if token.lower().startswith("0x") else int(token, 10)
    except ValueError:
        raise CharacterRegionFormatError(
            text, f"'{token}' is neither a single character nor an integer"
        ) from None

    if not 0 <= value <= MAX_CODEPOINT:
        raise CharacterRegionFormatError(text, f"code point {value} is out of range")
    return value


def parse_codepoint(text: str) -> int:
    """Parse a single code point such as a default character.

    Unlike region bounds, ASCII digit text is read as an integer first, so
    ``"0"`` means "no character" rather than the digit zero. Other Unicode
    digits (``"²"``, ``"٣"``) are taken literally.

    Raises:
        CharacterRegionFormatError: If the text is neither an integer nor a
            single character
    """
    if not text:
        raise CharacterRegionFormatError(text, "empty character")
    if text.isascii() and text.isdigit():
        return _parse_character(text, text) if len(text) > 1 else int(text)
    return _parse_character(text, text)


def parse_character_region(text: str) -> CharacterRegion:
    """Parse a character region from its text form.

    Args:
        text: Region text such as ``"A"``, ``"A-Z"``, ``"32-127"`` or ``"0x20-0x7F"``

    Returns:
        Parsed CharacterRegion

    Raises:
        CharacterRegionFormatError: If the text has any other shape, or the
            range start is greater than its end
    """
    if not text:
        raise CharacterRegionFormatError(text, "empty region")

    parts = text.split("-")
    if len(parts) > 2:
        raise CharacterRegionFormatError(text, "expected a character or a range")

    bounds = [_parse_character(text, part) for part in parts]
    start, end = bounds[0], bounds[-1]
    if start > end:
        raise CharacterRegionFormatError(text, "range start is greater than range end")

    return CharacterRegion(start, end)
