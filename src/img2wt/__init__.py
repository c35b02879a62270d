"""img2wt - Image to wavetable converter.

This package turns raster images into 16-bit mono WAV wavetables in the
layout Ableton's Wavetable instrument imports: a stack of fixed-size frames,
one per sampled image row, with the bottom of the image as frame 0.

Pipeline
--------
decode -> grayscale -> resample width -> select rows -> int16 -> trim -> write

Example Usage
-------------
>>> from img2wt import ConversionParams, convert_image, save_wavetable_wav
>>>
>>> params = ConversionParams(frame_size=1024, table_rows=256, trim_threshold=3000)
>>> result = convert_image("image.png", params)
>>> print(f"Trimmed {result.removed_rows} rows")
>>>
>>> save_wavetable_wav("wavetable.wav", result.table)
>>> save_wavetable_wav("wavetable_inverted.wav", result.table, invert=True)
"""

from img2wt.convert import (
    ConversionResult,
    OutputResult,
    convert_image,
    write_outputs,
)
from img2wt.dsp.assemble import image_to_wavetable, invert_wavetable
from img2wt.dsp.grayscale import ImageTooSmallError
from img2wt.dsp.rows import row_stats, trim_rows
from img2wt.format import (
    RiffError,
    WriteError,
    load_wavetable_wav,
    read_wav_header,
    save_wavetable_wav,
)
from img2wt.image import DecodeError, load_pixel_buffer
from img2wt.types import ConversionParams, PixelBuffer, RowStats

__all__ = [
    # Types
    "PixelBuffer",
    "ConversionParams",
    "RowStats",
    # Conversion
    "convert_image",
    "write_outputs",
    "ConversionResult",
    "OutputResult",
    "load_pixel_buffer",
    "image_to_wavetable",
    "invert_wavetable",
    "trim_rows",
    "row_stats",
    # File format
    "save_wavetable_wav",
    "load_wavetable_wav",
    "read_wav_header",
    # Errors
    "DecodeError",
    "ImageTooSmallError",
    "RiffError",
    "WriteError",
]
