"""Image file decoding.

Images are decoded with Pillow into 8-bit interleaved pixel data with one to
four channels. Modes outside that set are converted first:

- ``1`` becomes 8-bit gray (``L``)
- 16-bit gray (``I;16*`` and ``I``) keeps its top 8 bits
- float gray (``F``) is scaled from [0, 1], or from its own min-max range when
  values fall outside [0, 1]
- everything else (palette, CMYK, YCbCr, ...) becomes ``RGBA`` when the image
  carries transparency and ``RGB`` otherwise
"""

from pathlib import Path

import numpy as np
from numpy.typing import NDArray
from PIL import Image, UnidentifiedImageError

from img2wt.types import PixelBuffer

NATIVE_MODES = {"L": 1, "LA": 2, "RGB": 3, "RGBA": 4}
GRAY_MODES = {"1", "I", "I;16", "I;16B", "I;16L", "F"}
WIDE_GRAY_MODES = {"I", "I;16", "I;16B", "I;16L", "F"}


class DecodeError(Exception):
    """Error reading or decoding an image file."""


def target_mode(image: Image.Image) -> str:
    """Return the Pillow mode an image must be converted to before decoding."""
    if image.mode in NATIVE_MODES:
        return image.mode
    if image.mode in GRAY_MODES:
        return "L"
    if image.mode in {"PA", "RGBa", "La"} or "transparency" in image.info:
        return "RGBA"
    return "RGB"


def narrow_gray(image: Image.Image) -> NDArray[np.uint8]:
    """Rescale a 16-bit or float gray image to 8-bit samples."""
    values = np.asarray(image)

    if image.mode == "F":
        values = values.astype(np.float64)
        lo, hi = float(values.min()), float(values.max())
        if lo < 0.0 or hi > 1.0:
            span = hi - lo
            values = (values - lo) / span if span > 0 else np.zeros_like(values)
        return np.rint(values * 255.0).astype(np.uint8)

    # I;16 and I images hold 16-bit samples
    values = np.clip(values.astype(np.int64), 0, 65535)
    return (values >> 8).astype(np.uint8)


def load_pixel_buffer(path: Path | str) -> PixelBuffer:
    """Decode an image file into a pixel buffer.

    Args:
        path: Path to any image Pillow can read.

    Returns:
        PixelBuffer holding a private copy of the decoded pixels.

    Raises:
        DecodeError: If the file is missing, unreadable, or not a valid image.
    """
    path = Path(path)

    if not path.is_file():
        raise DecodeError(f"File not found: {path}")

    try:
        with Image.open(path) as image:
            mode = target_mode(image)
            if image.mode in WIDE_GRAY_MODES:
                pixels = narrow_gray(image)
            else:
                converted = image if image.mode == mode else image.convert(mode)
                pixels = np.asarray(converted, dtype=np.uint8)
    except UnidentifiedImageError as e:
        raise DecodeError(f"Unrecognized image format: {path}") from e
    except (OSError, SyntaxError, Image.DecompressionBombError) as e:
        raise DecodeError(f"Cannot decode image: {path}") from e

    if pixels.ndim == 2:
        pixels = pixels[:, :, np.newaxis]

    if pixels.shape[2] != NATIVE_MODES[mode]:
        raise DecodeError(
            f"Decoded {pixels.shape[2]} channels from {path}, expected {NATIVE_MODES[mode]}"
        )

    return PixelBuffer(pixels)
