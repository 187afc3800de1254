"""Unit tests for Bitmap and PixelAccessor."""

import tracemalloc

import pytest
from PIL import Image

from helpers import bitmap_from_rows, bitmap_rows
from spritefont.core.bitmap import Bitmap, BitmapLockError, LockMode, PixelAccessor
from spritefont.core.transforms import premultiply_alpha
from spritefont.domain.color import MAGENTA, WHITE, pack_argb
from spritefont.domain.region import Region


class TestBitmap:
    """Tests for Bitmap construction and conversion."""

    def test_init_defaults(self):
        """Test a new bitmap is transparent with a packed stride."""
        bitmap = Bitmap(3, 2)
        assert bitmap.width == 3
        assert bitmap.height == 2
        assert bitmap.stride == 12
        assert bitmap_rows(bitmap) == [[0, 0, 0], [0, 0, 0]]

    def test_fill(self):
        """Test the fill color is applied to every pixel."""
        bitmap = Bitmap(2, 2, fill=MAGENTA)
        assert bitmap_rows(bitmap) == [[MAGENTA, MAGENTA], [MAGENTA, MAGENTA]]

    def test_invalid_dimensions(self):
        """Test non-positive sizes and short strides are rejected."""
        with pytest.raises(ValueError):
            Bitmap(0, 4)
        with pytest.raises(ValueError):
            Bitmap(4, 4, stride=8)

    def test_from_image_converts_to_rgba(self):
        """Test RGB images gain an opaque alpha channel."""
        image = Image.new("RGB", (2, 1), (10, 20, 30))
        bitmap = Bitmap.from_image(image)
        assert bitmap_rows(bitmap) == [[pack_argb(255, 10, 20, 30)] * 2]

    def test_to_image(self):
        """Test export keeps channel order, including padded rows."""
        bitmap = bitmap_from_rows([[pack_argb(128, 1, 2, 3), WHITE]], stride=16)
        image = bitmap.to_image()
        assert image.mode == "RGBA"
        assert image.size == (2, 1)
        assert image.getpixel((0, 0)) == (1, 2, 3, 128)
        assert image.getpixel((1, 0)) == (255, 255, 255, 255)

    def test_to_image_while_write_locked(self):
        """Test export refuses while a writer holds a lock."""
        bitmap = Bitmap(2, 2)
        with PixelAccessor(bitmap, LockMode.WRITE_ONLY):
            with pytest.raises(BitmapLockError):
                bitmap.to_image()


class TestPixelAccessor:
    """Tests for scoped pixel access."""

    def test_coordinates_relative_to_region(self):
        """Test addressing is offset by the region origin."""
        bitmap = bitmap_from_rows([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
        with PixelAccessor(bitmap, LockMode.READ_ONLY, Region(1, 1, 2, 2)) as pixels:
            assert pixels[0, 0] == 5
            assert pixels[1, 1] == 9
            assert pixels.width == 2
            assert pixels.height == 2

    def test_padded_stride(self):
        """Test rows wider than the bitmap are addressed by stride."""
        bitmap = bitmap_from_rows([[1, 2], [3, 4], [5, 6]], stride=64)
        with PixelAccessor(bitmap, LockMode.READ_ONLY, Region(1, 1, 1, 2)) as pixels:
            assert pixels[0, 0] == 4
            assert pixels[0, 1] == 6

    def test_writes_flushed_on_release(self):
        """Test staged writes reach the buffer only when released."""
        bitmap = Bitmap(2, 2)
        writer = PixelAccessor(bitmap, LockMode.READ_WRITE)
        writer[1, 1] = WHITE
        assert writer[1, 1] == WHITE
        assert bitmap._buffer == bytearray(16)

        writer.release()
        assert bitmap_rows(bitmap) == [[0, 0], [0, WHITE]]

    def test_writes_flushed_when_block_raises(self):
        """Test the lock is released and flushed on an error path."""
        bitmap = Bitmap(2, 1)
        with pytest.raises(KeyError):
            with PixelAccessor(bitmap, LockMode.WRITE_ONLY) as pixels:
                pixels[0, 0] = WHITE
                raise KeyError("boom")

        assert not bitmap.is_locked
        assert bitmap_rows(bitmap) == [[WHITE, 0]]

    def test_region_flush_keeps_surroundings(self):
        """Test flushing a sub-region leaves pixels and row padding outside it alone."""
        bitmap = Bitmap(3, 3, stride=16, fill=MAGENTA)
        bitmap._buffer[12:16] = b"\x01\x02\x03\x04"
        with PixelAccessor(bitmap, LockMode.READ_WRITE, Region(1, 1, 2, 1)) as pixels:
            assert pixels[0, 0] == MAGENTA
            pixels[1, 0] = WHITE

        assert bitmap_rows(bitmap) == [
            [MAGENTA, MAGENTA, MAGENTA],
            [MAGENTA, MAGENTA, WHITE],
            [MAGENTA, MAGENTA, MAGENTA],
        ]
        assert bitmap._buffer[12:16] == b"\x01\x02\x03\x04"

    def test_staged_writes_stay_compact(self):
        """Test rewriting every pixel stages no more than a packed copy of the region."""
        bitmap = Bitmap(256, 256, fill=pack_argb(128, 200, 100, 50))

        tracemalloc.start()
        try:
            premultiply_alpha(bitmap)
            _, peak = tracemalloc.get_traced_memory()
        finally:
            tracemalloc.stop()

        assert peak < 2 * len(bitmap._buffer)
        with bitmap.lock() as pixels:
            assert pixels[255, 255] == pack_argb(128, 100, 50, 25)

    def test_use_after_release(self):
        """Test a released accessor refuses access."""
        bitmap = Bitmap(1, 1)
        with PixelAccessor(bitmap) as pixels:
            pass
        assert pixels.released
        with pytest.raises(BitmapLockError):
            _ = pixels[0, 0]

    def test_release_twice(self):
        """Test release is idempotent."""
        pixels = PixelAccessor(Bitmap(1, 1))
        pixels.release()
        pixels.release()
        assert pixels.released

    def test_out_of_bounds(self):
        """Test addressing outside the region raises IndexError."""
        bitmap = Bitmap(4, 4)
        with PixelAccessor(bitmap, LockMode.READ_ONLY, Region(0, 0, 2, 2)) as pixels:
            with pytest.raises(IndexError):
                _ = pixels[2, 0]
            with pytest.raises(IndexError):
                _ = pixels[0, -1]

    def test_region_outside_bitmap(self):
        """Test locking a region beyond the bitmap raises IndexError."""
        with pytest.raises(IndexError):
            PixelAccessor(Bitmap(4, 4), LockMode.READ_ONLY, Region(3, 3, 2, 2))

    def test_mode_enforced(self):
        """Test reads through write-only and writes through read-only fail."""
        bitmap = Bitmap(2, 2)
        with PixelAccessor(bitmap, LockMode.WRITE_ONLY, Region(0, 0, 1, 1)) as pixels:
            with pytest.raises(BitmapLockError):
                _ = pixels[0, 0]
        with PixelAccessor(bitmap, LockMode.READ_ONLY) as pixels:
            with pytest.raises(BitmapLockError):
                pixels[0, 0] = WHITE

    def test_overlapping_readers_allowed(self):
        """Test read-only locks may overlap."""
        bitmap = Bitmap(4, 4)
        with PixelAccessor(bitmap), PixelAccessor(bitmap, LockMode.READ_ONLY, Region(1, 1, 2, 2)):
            assert bitmap.is_locked
        assert not bitmap.is_locked

    def test_writer_requires_exclusive_region(self):
        """Test a writer conflicts with any overlapping lock."""
        bitmap = Bitmap(4, 4)
        with PixelAccessor(bitmap, LockMode.READ_ONLY, Region(0, 0, 2, 2)):
            with pytest.raises(BitmapLockError):
                PixelAccessor(bitmap, LockMode.READ_WRITE, Region(1, 1, 2, 2))

    def test_disjoint_writers_allowed(self):
        """Test writers on separate regions coexist."""
        bitmap = Bitmap(4, 4)
        with (
            PixelAccessor(bitmap, LockMode.WRITE_ONLY, Region(0, 0, 2, 4)) as left,
            PixelAccessor(bitmap, LockMode.WRITE_ONLY, Region(2, 0, 2, 4)) as right,
        ):
            left[0, 0] = WHITE
            right[0, 0] = MAGENTA

        rows = bitmap_rows(bitmap)
        assert rows[0][0] == WHITE
        assert rows[0][2] == MAGENTA

    def test_lock_shorthand(self):
        """Test Bitmap.lock returns a working accessor."""
        bitmap = bitmap_from_rows([[7]])
        with bitmap.lock() as pixels:
            assert pixels[0, 0] == 7
            assert pixels.mode is LockMode.READ_ONLY
