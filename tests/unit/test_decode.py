"""Unit tests for img2wt.image.decode module."""

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from img2wt.image import DecodeError, load_pixel_buffer
from img2wt.image.decode import narrow_gray, target_mode


class TestLoadPixelBuffer:
    """Test decoding image files into pixel buffers."""

    @pytest.mark.parametrize(
        ("mode", "channels"),
        [("L", 1), ("LA", 2), ("RGB", 3), ("RGBA", 4)],
    )
    def test_native_modes(self, tmp_path: Path, mode: str, channels: int) -> None:
        """Test that 8-bit modes keep their channel count."""
        path = tmp_path / f"image_{mode}.png"
        Image.new(mode, (5, 3)).save(path)

        pixels = load_pixel_buffer(path)

        assert pixels.width == 5
        assert pixels.height == 3
        assert pixels.channels == channels

    def test_pixel_values(self, tmp_path: Path) -> None:
        """Test that decoded samples match the source image."""
        source = np.zeros((2, 3, 3), dtype=np.uint8)
        source[0, 1] = [255, 0, 0]
        source[1, 2] = [10, 20, 30]
        path = tmp_path / "rgb.png"
        Image.fromarray(source).save(path)

        pixels = load_pixel_buffer(path)

        np.testing.assert_array_equal(pixels.data, source)

    def test_palette_image_becomes_rgb(self, tmp_path: Path) -> None:
        """Test that palette images are expanded to RGB."""
        path = tmp_path / "palette.png"
        image = Image.new("RGB", (4, 4), (200, 100, 50))
        image.convert("P", palette=Image.Palette.ADAPTIVE).save(path)

        pixels = load_pixel_buffer(path)

        assert pixels.channels == 3
        assert list(pixels.data[0, 0]) == [200, 100, 50]

    def test_bilevel_image_becomes_gray(self, tmp_path: Path) -> None:
        """Test that 1-bit images decode as 8-bit gray."""
        path = tmp_path / "bilevel.png"
        Image.new("1", (4, 4), 1).save(path)

        pixels = load_pixel_buffer(path)

        assert pixels.channels == 1
        assert int(pixels.data[0, 0, 0]) == 255

    def test_sixteen_bit_gray_keeps_ramp(self, tmp_path: Path) -> None:
        """Test that 16-bit gray images are scaled down rather than clipped."""
        ramp = np.tile(np.linspace(0, 65535, 256).astype(np.uint16), (4, 1))
        path = tmp_path / "ramp16.png"
        Image.fromarray(ramp).save(path)

        pixels = load_pixel_buffer(path)

        assert pixels.channels == 1
        row = pixels.data[0, :, 0]
        assert int(row[0]) == 0
        assert int(row[128]) == 128
        assert int(row[255]) == 255
        assert np.all(np.diff(row.astype(np.int16)) >= 0)

    def test_float_gray_image(self, tmp_path: Path) -> None:
        """Test that float images in [0, 1] map onto the 8-bit range."""
        values = np.tile(np.array([0.0, 0.25, 0.5, 1.0], dtype=np.float32), (2, 1))
        path = tmp_path / "float.tiff"
        Image.fromarray(values).save(path)

        pixels = load_pixel_buffer(path)

        assert list(pixels.data[0, :, 0]) == [0, 64, 128, 255]

    def test_decompression_bomb(self, tmp_path: Path, monkeypatch) -> None:
        """Test that oversized images raise DecodeError."""
        path = tmp_path / "large.png"
        Image.new("L", (64, 64)).save(path)
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)

        with pytest.raises(DecodeError, match="Cannot decode image"):
            load_pixel_buffer(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing file raises DecodeError."""
        with pytest.raises(DecodeError, match="File not found"):
            load_pixel_buffer(tmp_path / "missing.png")

    def test_directory_path(self, tmp_path: Path) -> None:
        """Test that a directory raises DecodeError."""
        with pytest.raises(DecodeError):
            load_pixel_buffer(tmp_path)

    def test_not_an_image(self, tmp_path: Path) -> None:
        """Test that non-image data raises DecodeError."""
        path = tmp_path / "garbage.png"
        path.write_bytes(b"this is not an image")

        with pytest.raises(DecodeError, match="Unrecognized image format"):
            load_pixel_buffer(path)

    def test_truncated_image(self, tmp_path: Path) -> None:
        """Test that a truncated image raises DecodeError."""
        source = tmp_path / "full.png"
        rng = np.random.default_rng(0)
        Image.fromarray(rng.integers(0, 256, (64, 64, 3), dtype=np.uint8)).save(source)

        truncated = tmp_path / "truncated.png"
        truncated.write_bytes(source.read_bytes()[:200])

        with pytest.raises(DecodeError):
            load_pixel_buffer(truncated)


class TestTargetMode:
    """Test conversion mode selection."""

    @pytest.mark.parametrize("mode", ["L", "LA", "RGB", "RGBA"])
    def test_native_modes_unchanged(self, mode: str) -> None:
        assert target_mode(Image.new(mode, (1, 1))) == mode

    @pytest.mark.parametrize("mode", ["1", "I", "F"])
    def test_gray_modes(self, mode: str) -> None:
        assert target_mode(Image.new(mode, (1, 1))) == "L"

    def test_cmyk_becomes_rgb(self) -> None:
        assert target_mode(Image.new("CMYK", (1, 1))) == "RGB"

    def test_transparent_palette_becomes_rgba(self) -> None:
        image = Image.new("P", (1, 1))
        image.info["transparency"] = 0

        assert target_mode(image) == "RGBA"


class TestNarrowGray:
    """Test rescaling of wide gray images to 8 bits."""

    def test_sixteen_bit(self) -> None:
        values = np.array([[0, 257, 32896, 65535]], dtype=np.uint16)
        np.testing.assert_array_equal(narrow_gray(Image.fromarray(values)), [[0, 1, 128, 255]])

    def test_float_unit_range(self) -> None:
        values = np.array([[0.0, 0.5, 1.0]], dtype=np.float32)
        np.testing.assert_array_equal(narrow_gray(Image.fromarray(values)), [[0, 128, 255]])

    def test_float_outside_unit_range(self) -> None:
        """Test that float images outside [0, 1] are scaled by their own range."""
        values = np.array([[-10.0, 0.0, 10.0]], dtype=np.float32)
        np.testing.assert_array_equal(narrow_gray(Image.fromarray(values)), [[0, 128, 255]])

    def test_constant_float_outside_unit_range(self) -> None:
        values = np.full((2, 2), 7.5, dtype=np.float32)
        np.testing.assert_array_equal(narrow_gray(Image.fromarray(values)), np.zeros((2, 2)))
