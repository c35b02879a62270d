from pathlib import Path

import numpy as np
from scipy.io import wavfile

from img2wt.types import SAMPLE_RATE, WavetableData


def save_frames_as_wav(
    output_dir: Path | str,
    table: WavetableData,
    sample_rate: int = SAMPLE_RATE,
) -> list[Path]:
    """
    Save each wavetable row as an individual single-cycle .wav file.

    Args:
        output_dir: Directory to save .wav files
        table: Wavetable of shape (rows, frame_size)
        sample_rate: Sample rate for .wav files (default 44100 Hz)

    Returns:
        Paths of the written files, in row order
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    table = np.asarray(table, dtype=np.int16)
    width = max(3, len(str(max(table.shape[0] - 1, 0))))

    paths = []
    for row, frame in enumerate(table):
        filepath = output_dir / f"frame_{row:0{width}d}.wav"
        wavfile.write(str(filepath), sample_rate, np.ascontiguousarray(frame))
        paths.append(filepath)

    return paths
