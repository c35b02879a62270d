"""Wavetable file reader.

Loads wavetables written by :mod:`img2wt.format.writer` (or any mono 16-bit
WAV holding whole frames) back into a (rows, frame_size) int16 array.
"""

from pathlib import Path

import numpy as np
import soundfile as sf

from img2wt.types import WavetableData


def load_wavetable_wav(path: Path | str, frame_size: int) -> WavetableData:
    """Load a WAV file as a wavetable.

    Args:
        path: Path to the WAV file.
        frame_size: Samples per wavetable row.

    Returns:
        Array of shape (rows, frame_size).

    Raises:
        ValueError: If the sample count is not a multiple of ``frame_size``.
        FileNotFoundError: If the file doesn't exist.
    """
    path = Path(path)
    if frame_size <= 0:
        raise ValueError(f"frame_size must be positive, got {frame_size}")
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    data, _ = sf.read(path, dtype="int16", always_2d=True)

    # Take the first channel of multichannel files
    samples = data[:, 0]

    if len(samples) % frame_size != 0:
        raise ValueError(
            f"Total samples ({len(samples)}) is not evenly divisible "
            f"by frame_size ({frame_size})"
        )

    return np.ascontiguousarray(samples.reshape(-1, frame_size))
