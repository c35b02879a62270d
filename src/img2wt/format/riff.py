"""Canonical RIFF/WAVE header utilities.

Wavetables are stored as the simplest possible WAV file: a 44-byte header
followed by one data chunk of little-endian signed 16-bit mono samples.

    offset  size  field
    0       4     "RIFF"
    4       4     riff_size = 36 + data_size
    8       4     "WAVE"
    12      4     "fmt "
    16      4     16 (fmt chunk size)
    20      2     1 (PCM)
    22      2     1 (mono)
    24      4     sample_rate
    28      4     byte_rate = sample_rate * block_align
    32      2     block_align = 2
    34      2     16 (bits per sample)
    36      4     "data"
    40      4     data_size = sample_count * 2
"""

import struct
from dataclasses import dataclass
from pathlib import Path

# FourCC identifiers
RIFF_ID = b"RIFF"
WAVE_ID = b"WAVE"
FMT_ID = b"fmt "
DATA_ID = b"data"

WAVE_FORMAT_PCM = 1
FMT_CHUNK_SIZE = 16
HEADER_SIZE = 44
NUM_CHANNELS = 1
BITS_PER_SAMPLE = 16

_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")


class RiffError(Exception):
    """Error reading or writing RIFF files."""


@dataclass(frozen=True)
class WavHeader:
    riff_size: int
    audio_format: int
    num_channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int
    data_size: int

    @property
    def sample_count(self) -> int:
        return self.data_size // self.block_align if self.block_align else 0


def pack_header(sample_count: int, sample_rate: int) -> bytes:
    """Build the 44-byte header for ``sample_count`` mono 16-bit samples."""
    block_align = NUM_CHANNELS * BITS_PER_SAMPLE // 8
    byte_rate = sample_rate * block_align
    data_size = sample_count * block_align
    riff_size = 36 + data_size

    return _HEADER.pack(
        RIFF_ID,
        riff_size,
        WAVE_ID,
        FMT_ID,
        FMT_CHUNK_SIZE,
        WAVE_FORMAT_PCM,
        NUM_CHANNELS,
        sample_rate,
        byte_rate,
        block_align,
        BITS_PER_SAMPLE,
        DATA_ID,
        data_size,
    )


def unpack_header(data: bytes) -> WavHeader:
    """Parse a canonical 44-byte header.

    Raises:
        RiffError: If the bytes are not a canonical mono PCM WAV header.
    """
    if len(data) < HEADER_SIZE:
        raise RiffError("File too small to be a valid WAV file")

    (
        riff_id,
        riff_size,
        wave_id,
        fmt_id,
        fmt_size,
        audio_format,
        num_channels,
        sample_rate,
        byte_rate,
        block_align,
        bits_per_sample,
        data_id,
        data_size,
    ) = _HEADER.unpack(data[:HEADER_SIZE])

    if riff_id != RIFF_ID:
        raise RiffError("Not a RIFF file")
    if wave_id != WAVE_ID:
        raise RiffError("Not a WAVE file")
    if fmt_id != FMT_ID or fmt_size != FMT_CHUNK_SIZE:
        raise RiffError("Expected a 16-byte fmt chunk directly after the RIFF header")
    if data_id != DATA_ID:
        raise RiffError("Expected the data chunk directly after the fmt chunk")
    if audio_format != WAVE_FORMAT_PCM:
        raise RiffError(f"Expected PCM audio (format 1), got format {audio_format}")
    if num_channels != NUM_CHANNELS:
        raise RiffError(f"Expected mono audio, got {num_channels} channels")
    if bits_per_sample != BITS_PER_SAMPLE:
        raise RiffError(f"Expected 16-bit samples, got {bits_per_sample}-bit")

    return WavHeader(
        riff_size=riff_size,
        audio_format=audio_format,
        num_channels=num_channels,
        sample_rate=sample_rate,
        byte_rate=byte_rate,
        block_align=block_align,
        bits_per_sample=bits_per_sample,
        data_size=data_size,
    )


def build_pcm16_wav(samples: bytes, sample_rate: int) -> bytes:
    """Build a complete WAV file from raw little-endian int16 sample bytes."""
    if len(samples) % 2:
        raise RiffError(f"Sample data must be whole 16-bit samples, got {len(samples)} bytes")
    return pack_header(len(samples) // 2, sample_rate) + samples


def read_wav_header(file_path: Path | str) -> WavHeader:
    """Read and parse the header of a wavetable file.

    Raises:
        RiffError: If the file cannot be opened or its header is invalid.
    """
    file_path = Path(file_path)

    try:
        with open(file_path, "rb") as f:
            data = f.read(HEADER_SIZE)
    except FileNotFoundError as e:
        raise RiffError(f"File not found: {file_path}") from e
    except OSError as e:
        raise RiffError(f"Cannot open file: {file_path}") from e

    return unpack_header(data)
