"""Wavetable WAV file format.

Wavetables are stored as plain mono 16-bit PCM WAV files with a canonical
44-byte header, every row of the table concatenated in order:

    +----------------------------------------+
    | RIFF Header ("WAVE")                   |
    +----------------------------------------+
    | fmt  chunk (PCM, mono, 16-bit, 44.1k)  |
    +----------------------------------------+
    | data chunk                             |
    |   - row 0 samples                      |
    |   - row 1 samples                      |
    |   - ...                                |
    +----------------------------------------+

Example Usage
-------------
>>> from img2wt.format import save_wavetable_wav, load_wavetable_wav
>>> save_wavetable_wav("table.wav", table)
>>> save_wavetable_wav("table_inverted.wav", table, invert=True)
>>> restored = load_wavetable_wav("table.wav", frame_size=1024)
"""

from img2wt.format.reader import load_wavetable_wav
from img2wt.format.riff import RiffError, WavHeader, read_wav_header
from img2wt.format.writer import WriteError, encode_wavetable, save_wavetable_wav

__all__ = [
    # Header
    "WavHeader",
    "RiffError",
    "read_wav_header",
    # Reader
    "load_wavetable_wav",
    # Writer
    "encode_wavetable",
    "save_wavetable_wav",
    "WriteError",
]
