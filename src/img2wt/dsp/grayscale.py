import numpy as np

from img2wt.types import LuminanceField, PixelBuffer, ResampledField

# ITU-R BT.601 luma weights
LUMA_WEIGHTS = np.array([0.2989, 0.587, 0.114], dtype=np.float32)


class ImageTooSmallError(Exception):
    """Image has fewer rows than the wavetable needs."""

    def __init__(self, height: int, table_rows: int) -> None:
        self.height = height
        self.table_rows = table_rows
        super().__init__(
            f"Image height ({height}) is smaller than the requested table rows ({table_rows})"
        )


def luminance(pixels: PixelBuffer) -> LuminanceField:
    """Convert interleaved pixels to a normalized luminance field.

    One and two channel images use channel 0 for R, G and B. Three and four
    channel images use channels 0-2; any alpha channel is ignored.

    Args:
        pixels: Decoded pixel buffer

    Returns:
        Array of shape (height, width) with values in [0, 1]
    """
    data = pixels.data.astype(np.float32)

    if pixels.channels < 3:
        rgb = np.repeat(data[:, :, :1], 3, axis=2)
    else:
        rgb = data[:, :, :3]

    return (rgb @ LUMA_WEIGHTS / 255.0).astype(np.float32)


def resample_width(field: LuminanceField, frame_size: int) -> ResampledField:
    """Nearest-neighbour resample of every row to ``frame_size`` columns.

    Destination column x reads source column floor(x * width / frame_size), so
    narrow images are stretched and wide images are decimated without filtering.

    Args:
        field: 2D array of shape (height, width)
        frame_size: Number of output columns

    Returns:
        Array of shape (height, frame_size)
    """
    if frame_size <= 0:
        raise ValueError(f"frame_size must be positive, got {frame_size}")

    width = field.shape[1]
    columns = np.arange(frame_size, dtype=np.int64) * width // frame_size
    return field[:, columns]


def grayscale_resample(pixels: PixelBuffer, frame_size: int, table_rows: int) -> ResampledField:
    """Build the resampled luminance field for a wavetable of ``table_rows`` rows.

    Raises:
        ImageTooSmallError: If the image has fewer than ``table_rows`` rows.
    """
    if pixels.height < table_rows:
        raise ImageTooSmallError(pixels.height, table_rows)

    return resample_width(luminance(pixels), frame_size)
