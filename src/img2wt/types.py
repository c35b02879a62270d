from dataclasses import dataclass
from typing import TypeAlias

import numpy as np
from numpy.typing import NDArray

LuminanceField: TypeAlias = NDArray[np.float32]
ResampledField: TypeAlias = NDArray[np.float32]
WavetableData: TypeAlias = NDArray[np.int16]

SAMPLE_RATE = 44100
INT16_PEAK = 32767

# Largest user wavetable accepted by Ableton's Wavetable instrument
MAX_TABLE_ROWS = 256


@dataclass(frozen=True)
class PixelBuffer:
    """Decoded 8-bit raster image.

    ``data`` has shape (height, width, channels). The buffer keeps a private,
    read-only copy of the array it is given.
    """

    data: NDArray[np.uint8]

    def __post_init__(self) -> None:
        if self.data.ndim != 3:
            raise ValueError(f"Pixel data must be 3D (height, width, channels), got {self.data.shape}")
        if not 1 <= self.data.shape[2] <= 4:
            raise ValueError(f"Channel count must be between 1 and 4, got {self.data.shape[2]}")
        if self.data.dtype != np.uint8:
            raise ValueError(f"Pixel data must be uint8, got {self.data.dtype}")
        data = np.array(self.data, copy=True)
        data.flags.writeable = False
        object.__setattr__(self, "data", data)

    @classmethod
    def from_bytes(cls, width: int, height: int, channels: int, data: bytes) -> "PixelBuffer":
        """Build a buffer from row-major interleaved 8-bit samples."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        if not 1 <= channels <= 4:
            raise ValueError(f"Channel count must be between 1 and 4, got {channels}")
        expected = width * height * channels
        if len(data) != expected:
            raise ValueError(f"Expected {expected} bytes for {width}x{height}x{channels}, got {len(data)}")
        array = np.frombuffer(data, dtype=np.uint8).reshape(height, width, channels)
        return cls(array)

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def channels(self) -> int:
        return int(self.data.shape[2])


@dataclass(frozen=True)
class ConversionParams:
    frame_size: int = 1024
    table_rows: int = MAX_TABLE_ROWS
    trim_threshold: int | None = 3000
    invert: bool = True
    sample_rate: int = SAMPLE_RATE

    def __post_init__(self) -> None:
        if self.frame_size <= 0:
            raise ValueError(f"frame_size must be positive, got {self.frame_size}")
        if self.table_rows <= 0:
            raise ValueError(f"table_rows must be positive, got {self.table_rows}")
        if self.trim_threshold is not None and self.trim_threshold < 0:
            raise ValueError(f"trim_threshold must be >= 0, got {self.trim_threshold}")


@dataclass(frozen=True)
class RowStats:
    row: int
    minimum: int
    maximum: int

    @property
    def variance(self) -> int:
        """Peak-to-peak span of the row, used as a proxy for waveform content."""
        return self.maximum - self.minimum
