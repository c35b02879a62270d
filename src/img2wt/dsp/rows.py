"""Per-row analysis of assembled wavetables.

A wavetable is a 2D int16 array of shape (rows, frame_size). Row ``r`` covers
flat samples ``r * frame_size`` to ``(r + 1) * frame_size``.
"""

import numpy as np
from numpy.typing import NDArray

from img2wt.types import RowStats, WavetableData


def row_view(table: WavetableData, row: int) -> WavetableData:
    """Return a read-only view of one wavetable row.

    Args:
        table: Wavetable of shape (rows, frame_size)
        row: Row index, negative values count from the end

    Returns:
        1D array of frame_size samples sharing memory with ``table``
    """
    view = table[row]
    view.flags.writeable = False
    return view


def row_extrema(table: WavetableData) -> tuple[NDArray[np.int32], NDArray[np.int32]]:
    """Return per-row (minimum, maximum) arrays, widened to int32."""
    if table.shape[0] == 0:
        empty = np.zeros(0, dtype=np.int32)
        return empty, empty
    return table.min(axis=1).astype(np.int32), table.max(axis=1).astype(np.int32)


def row_variance(table: WavetableData) -> NDArray[np.int32]:
    """Peak-to-peak span (max - min) of every row."""
    minimum, maximum = row_extrema(table)
    return maximum - minimum


def row_stats(table: WavetableData) -> list[RowStats]:
    """Report minimum, maximum and variance for every row."""
    minimum, maximum = row_extrema(table)
    return [
        RowStats(row=i, minimum=int(lo), maximum=int(hi))
        for i, (lo, hi) in enumerate(zip(minimum, maximum, strict=True))
    ]


def trim_rows(table: WavetableData, threshold: int) -> tuple[WavetableData, int]:
    """Drop rows whose variance does not exceed ``threshold``.

    Remaining rows keep their relative order. The input table is not modified.

    Args:
        table: Wavetable of shape (rows, frame_size)
        threshold: Minimum variance a row must exceed to be kept

    Returns:
        Tuple of (trimmed table, number of removed rows)
    """
    if threshold < 0:
        raise ValueError(f"threshold must be >= 0, got {threshold}")

    keep = row_variance(table) > threshold
    trimmed = table[keep]
    return trimmed, int(table.shape[0] - trimmed.shape[0])
