"""Pixel buffers and scoped pixel access.

A Bitmap stores packed ARGB pixels in a flat byte buffer whose rows may be
padded beyond ``width * 4`` bytes. Pixels are never touched directly: callers
lock a region through a PixelAccessor, read and write through it, and release
it (normally by leaving a ``with`` block), at which point staged writes are
flushed into the buffer.

Example:
    with PixelAccessor(bitmap, LockMode.READ_WRITE, Region(2, 2, 4, 4)) as pixels:
        pixels[0, 0] = pixels[1, 1]
"""

import struct
from enum import Enum
from types import TracebackType

from PIL import Image

from spritefont.domain.color import TRANSPARENT
from spritefont.domain.region import Region

BYTES_PER_PIXEL = 4

# Little-endian 0xAARRGGBB, i.e. B, G, R, A in memory.
_PIXEL = struct.Struct("<I")


class BitmapLockError(RuntimeError):
    """A pixel accessor was used in a way its lock does not allow."""


class LockMode(Enum):
    """Access requested when locking a bitmap region."""

    READ_ONLY = "read_only"
    WRITE_ONLY = "write_only"
    READ_WRITE = "read_write"

    @property
    def can_read(self) -> bool:
        """Whether pixels may be read under this mode."""
        return self is not LockMode.WRITE_ONLY

    @property
    def can_write(self) -> bool:
        """Whether pixels may be written under this mode."""
        return self is not LockMode.READ_ONLY


class Bitmap:
    """A rectangular grid of packed 32-bit ARGB pixels.

    Attributes:
        width: Width in pixels
        height: Height in pixels
        stride: Distance in bytes between the starts of consecutive rows
    """

    def __init__(
        self,
        width: int,
        height: int,
        stride: int | None = None,
        fill: int = TRANSPARENT,
    ) -> None:
        """Create a bitmap filled with a single color.

        Args:
            width: Width in pixels (at least 1)
            height: Height in pixels (at least 1)
            stride: Row pitch in bytes (defaults to ``width * 4``)
            fill: Packed ARGB color of every pixel

        Raises:
            ValueError: If a dimension is not positive or the stride is too small
        """
        if width < 1 or height < 1:
            raise ValueError(f"Bitmap dimensions must be positive, got {width}x{height}")
        if stride is None:
            stride = width * BYTES_PER_PIXEL
        if stride < width * BYTES_PER_PIXEL:
            raise ValueError(f"Stride {stride} is too small for width {width}")

        self.width = width
        self.height = height
        self.stride = stride
        self._buffer = bytearray(stride * height)
        self._locks: list["PixelAccessor"] = []

        if fill != TRANSPARENT:
            row = _PIXEL.pack(fill) * width
            for y in range(height):
                start = y * stride
                self._buffer[start : start + len(row)] = row

    @classmethod
    def from_image(cls, image: Image.Image) -> "Bitmap":
        """Create a bitmap from a Pillow image, converting it to RGBA first.

        Args:
            image: Any Pillow image

        Returns:
            Bitmap holding a copy of the image pixels
        """
        if image.mode != "RGBA":
            image = image.convert("RGBA")

        bitmap = cls(image.width, image.height)
        bitmap._buffer[:] = image.tobytes("raw", "BGRA")
        return bitmap

    def to_image(self) -> Image.Image:
        """Convert to a Pillow RGBA image.

        Raises:
            BitmapLockError: If a write lock is still held on the bitmap
        """
        if any(lock.mode.can_write for lock in self._locks):
            raise BitmapLockError("Cannot export a bitmap while it is locked for writing")

        return Image.frombuffer(
            "RGBA",
            (self.width, self.height),
            bytes(self._buffer),
            "raw",
            "BGRA",
            self.stride,
            1,
        )

    @property
    def bounds(self) -> Region:
        """Region covering the whole bitmap."""
        return Region(0, 0, self.width, self.height)

    @property
    def is_locked(self) -> bool:
        """Whether any accessor currently holds a lock on this bitmap."""
        return bool(self._locks)

    def lock(self, mode: LockMode = LockMode.READ_ONLY, region: Region | None = None) -> "PixelAccessor":
        """Lock a region of the bitmap. Shorthand for ``PixelAccessor(self, mode, region)``."""
        return PixelAccessor(self, mode, region)

    def _acquire(self, accessor: "PixelAccessor") -> None:
        for held in self._locks:
            if not held.region.intersects(accessor.region):
                continue
            if held.mode.can_write or accessor.mode.can_write:
                raise BitmapLockError(
                    f"Region {accessor.region.to_tuple()} is already locked "
                    f"({held.mode.value} on {held.region.to_tuple()})"
                )
        self._locks.append(accessor)

    def _release(self, accessor: "PixelAccessor") -> None:
        self._locks.remove(accessor)

    def __repr__(self) -> str:
        return f"Bitmap({self.width}x{self.height}, stride={self.stride})"


class PixelAccessor:
    """Scoped read/write access to a region of a Bitmap.

    Coordinates are relative to the locked region's origin. Several read-only
    accessors may overlap; a writable accessor requires that no other live
    accessor overlaps its region. Writes are staged and flushed when the
    accessor is released, after which any further access raises.

    Example:
        with PixelAccessor(bitmap, LockMode.READ_ONLY) as pixels:
            color = pixels[3, 4]
    """

    def __init__(
        self,
        bitmap: Bitmap,
        mode: LockMode = LockMode.READ_ONLY,
        region: Region | None = None,
    ) -> None:
        """Lock ``region`` of ``bitmap`` (the whole bitmap when omitted).

        Raises:
            IndexError: If the region does not lie inside the bitmap
            BitmapLockError: If the region conflicts with a live lock
        """
        region = bitmap.bounds if region is None else region.copy()
        if not region.fits_within(bitmap.width, bitmap.height):
            raise IndexError(
                f"Region {region.to_tuple()} is outside bitmap "
                f"{bitmap.width}x{bitmap.height}"
            )

        self._bitmap = bitmap
        self._mode = mode
        self._region = region
        self._staging = self._copy_rows() if mode.can_write else None
        self._released = False
        bitmap._acquire(self)

    @property
    def region(self) -> Region:
        """Locked region in bitmap coordinates."""
        return self._region

    @property
    def mode(self) -> LockMode:
        """Lock mode."""
        return self._mode

    @property
    def width(self) -> int:
        """Width of the locked region."""
        return self._region.width

    @property
    def height(self) -> int:
        """Height of the locked region."""
        return self._region.height

    @property
    def released(self) -> bool:
        """Whether the lock has been released."""
        return self._released

    def _copy_rows(self) -> bytearray:
        # Staged pixels are kept packed, one row of the region after another.
        buffer = memoryview(self._bitmap._buffer)
        row_bytes = self._region.width * BYTES_PER_PIXEL
        staging = bytearray(row_bytes * self._region.height)
        for row in range(self._region.height):
            start = self._row_start(row)
            staging[row * row_bytes : (row + 1) * row_bytes] = buffer[start : start + row_bytes]
        return staging

    def _row_start(self, row: int) -> int:
        return (self._region.y + row) * self._bitmap.stride + self._region.x * BYTES_PER_PIXEL

    def _staged_offset(self, x: int, y: int) -> int:
        return (y * self._region.width + x) * BYTES_PER_PIXEL

    def _check(self, x: int, y: int) -> None:
        if self._released:
            raise BitmapLockError("Pixel accessor used after release")
        if not (0 <= x < self._region.width and 0 <= y < self._region.height):
            raise IndexError(
                f"Pixel ({x}, {y}) is outside locked region "
                f"{self._region.width}x{self._region.height}"
            )

    def __getitem__(self, position: tuple[int, int]) -> int:
        x, y = position
        self._check(x, y)
        if not self._mode.can_read:
            raise BitmapLockError("Cannot read through a write-only accessor")

        if self._staging is not None:
            return _PIXEL.unpack_from(self._staging, self._staged_offset(x, y))[0]
        return _PIXEL.unpack_from(self._bitmap._buffer, self._row_start(y) + x * BYTES_PER_PIXEL)[0]

    def __setitem__(self, position: tuple[int, int], color: int) -> None:
        x, y = position
        self._check(x, y)
        if self._staging is None:
            raise BitmapLockError("Cannot write through a read-only accessor")

        _PIXEL.pack_into(self._staging, self._staged_offset(x, y), color & 0xFFFFFFFF)

    def flush(self) -> None:
        """Write staged pixels into the bitmap buffer."""
        if self._staging is None:
            return
        buffer = self._bitmap._buffer
        staging = memoryview(self._staging)
        row_bytes = self._region.width * BYTES_PER_PIXEL
        for row in range(self._region.height):
            start = self._row_start(row)
            buffer[start : start + row_bytes] = staging[row * row_bytes : (row + 1) * row_bytes]

    def release(self) -> None:
        """Flush staged writes and give the lock back. Safe to call twice."""
        if self._released:
            return
        try:
            self.flush()
        finally:
            self._released = True
            self._bitmap._release(self)

    def __enter__(self) -> "PixelAccessor":
        """Context manager entry."""
        return self

    def __exit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: TracebackType | None,
    ) -> None:
        """Context manager exit."""
        self.release()
