import numpy as np
from numpy.typing import NDArray

from img2wt.dsp.grayscale import grayscale_resample
from img2wt.types import INT16_PEAK, PixelBuffer, ResampledField, WavetableData


def select_rows(height: int, table_rows: int) -> list[int]:
    """Pick the source rows that make up the wavetable, in table order.

    Rows are sampled with a fixed stride of ``height // table_rows`` walking
    from the bottom of the image upwards, since Ableton draws frame 0 at the
    bottom of its wavetable display. Rows left over when the height is not a
    multiple of ``table_rows`` are never sampled, and eligible rows past
    ``table_rows`` are dropped.

    Args:
        height: Number of rows in the source image
        table_rows: Maximum number of wavetable rows

    Returns:
        Source row indices; element r is the source of wavetable row r
    """
    if table_rows <= 0:
        raise ValueError(f"table_rows must be positive, got {table_rows}")
    if height < table_rows:
        raise ValueError(f"height ({height}) must be >= table_rows ({table_rows})")

    stride = height // table_rows
    rows = [row for row in range(height - 1, -1, -1) if row % stride == 0]
    return rows[:table_rows]


def to_int16(values: NDArray[np.floating]) -> WavetableData:
    """Map luminance in [0, 1] onto the symmetric int16 range [-32767, 32767]."""
    scaled = np.rint((np.asarray(values, dtype=np.float64) * 2.0 - 1.0) * INT16_PEAK)
    return np.clip(scaled, -INT16_PEAK, INT16_PEAK).astype(np.int16)


def assemble_wavetable(field: ResampledField, table_rows: int) -> WavetableData:
    """Select rows from a resampled field and convert them to int16 samples.

    Args:
        field: Array of shape (height, frame_size) with values in [0, 1]
        table_rows: Number of wavetable rows to produce

    Returns:
        Array of shape (table_rows, frame_size)
    """
    rows = select_rows(field.shape[0], table_rows)
    return to_int16(field[rows])


def image_to_wavetable(pixels: PixelBuffer, frame_size: int, table_rows: int) -> WavetableData:
    """Run the full image transform, producing an untrimmed wavetable."""
    field = grayscale_resample(pixels, frame_size, table_rows)
    return assemble_wavetable(field, table_rows)


def invert_wavetable(table: WavetableData) -> WavetableData:
    """Return a polarity-inverted copy of ``table``.

    Samples are saturated to [-32767, 32767] so -32768 never overflows.
    """
    negated = -np.asarray(table, dtype=np.int32)
    return np.clip(negated, -INT16_PEAK, INT16_PEAK).astype(np.int16)
