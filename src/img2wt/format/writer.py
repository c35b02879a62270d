"""Wavetable file writer.

Serializes an int16 wavetable as a canonical mono 16-bit PCM WAV file, rows
concatenated in order.
"""

from pathlib import Path

import numpy as np

from img2wt.dsp.assemble import invert_wavetable
from img2wt.format.riff import build_pcm16_wav
from img2wt.types import SAMPLE_RATE, WavetableData


class WriteError(Exception):
    """Error writing a wavetable file."""

    def __init__(self, message: str, path: Path) -> None:
        self.path = path
        super().__init__(message)


def encode_wavetable(
    table: WavetableData,
    *,
    invert: bool = False,
    sample_rate: int = SAMPLE_RATE,
) -> bytes:
    """Encode a wavetable as WAV file bytes.

    Args:
        table: Wavetable of shape (rows, frame_size).
        invert: Negate every sample before encoding. ``table`` is left untouched.
        sample_rate: Sample rate written to the header.

    Returns:
        The complete WAV file as bytes.
    """
    table = np.asarray(table)
    if table.ndim != 2:
        raise ValueError(f"Wavetable should be 2D (rows, frame_size), got shape {table.shape}")
    if table.dtype != np.int16:
        raise ValueError(f"Wavetable should be int16, got {table.dtype}")

    if invert:
        table = invert_wavetable(table)

    samples = np.ascontiguousarray(table, dtype="<i2").tobytes()
    return build_pcm16_wav(samples, sample_rate)


def save_wavetable_wav(
    path: Path | str,
    table: WavetableData,
    *,
    invert: bool = False,
    sample_rate: int = SAMPLE_RATE,
) -> None:
    """Save a wavetable to a WAV file.

    Args:
        path: Output file path. Missing parent directories are created.
        table: Wavetable of shape (rows, frame_size).
        invert: Write the polarity-inverted table.
        sample_rate: Sample rate written to the header.

    Raises:
        WriteError: If the destination cannot be created or written.
        ValueError: If ``table`` is not a 2D int16 array.
    """
    path = Path(path)
    wav_bytes = encode_wavetable(table, invert=invert, sample_rate=sample_rate)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(wav_bytes)
    except OSError as e:
        raise WriteError(f"Cannot write WAV file: {path} ({e.strerror or e})", path) from e
