"""Image decoding.

This subpackage turns image files into ``PixelBuffer`` objects that the
wavetable transform consumes.
"""

from img2wt.image.decode import DecodeError, load_pixel_buffer

__all__ = [
    "DecodeError",
    "load_pixel_buffer",
]
