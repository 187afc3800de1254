"""Exception hierarchy for Spritefont."""


class SpriteFontError(Exception):
    """Base exception for all Spritefont errors."""

    pass


class SourceError(SpriteFontError):
    """Errors related to loading the source image or font."""

    pass


class ImageDecodeError(SourceError):
    """Error decoding a source bitmap."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Unable to load '{path}': {reason}")


class FontLoadError(SourceError):
    """Error loading a TrueType source font."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class CharacterRegionFormatError(SpriteFontError):
    """Malformed character region text."""

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"Invalid character region '{text}': {reason}")


class FontValidationError(SpriteFontError):
    """Imported glyph data failed validation."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class FontSaveError(SpriteFontError):
    """Error writing the sprite font or debug spritesheet."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save '{path}': {reason}")
