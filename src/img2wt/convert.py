"""Image to wavetable conversion jobs.

A job decodes one image, transforms it into a wavetable, optionally trims
low-variance rows, and writes the forward and inverted WAV files.
"""

from dataclasses import dataclass
from pathlib import Path

from img2wt.dsp.assemble import image_to_wavetable
from img2wt.dsp.rows import trim_rows
from img2wt.format.writer import WriteError, save_wavetable_wav
from img2wt.image.decode import load_pixel_buffer
from img2wt.types import ConversionParams, WavetableData


@dataclass
class ConversionResult:
    """Wavetable produced from one image."""

    table: WavetableData
    """Trimmed wavetable of shape (rows, frame_size)."""

    assembled: WavetableData
    """Wavetable as assembled, before trimming."""

    source: Path
    source_width: int
    source_height: int
    source_channels: int

    removed_rows: int = 0

    @property
    def num_rows(self) -> int:
        return int(self.table.shape[0])

    @property
    def frame_size(self) -> int:
        return int(self.table.shape[1])


@dataclass
class OutputResult:
    path: Path
    inverted: bool
    error: WriteError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def inverted_path(output: Path) -> Path:
    """Return the sibling path used for the inverted table."""
    return output.with_name(f"{output.stem}_inverted{output.suffix}")


def convert_image(path: Path | str, params: ConversionParams) -> ConversionResult:
    """Convert an image file into a wavetable.

    Args:
        path: Image file to convert.
        params: Conversion settings.

    Returns:
        ConversionResult holding the (possibly trimmed) table.

    Raises:
        DecodeError: If the image cannot be read.
        ImageTooSmallError: If the image has fewer rows than ``params.table_rows``.
    """
    path = Path(path)
    pixels = load_pixel_buffer(path)

    table = image_to_wavetable(pixels, params.frame_size, params.table_rows)
    result = ConversionResult(
        table=table,
        assembled=table,
        source=path,
        source_width=pixels.width,
        source_height=pixels.height,
        source_channels=pixels.channels,
    )

    if params.trim_threshold is not None:
        result.table, result.removed_rows = trim_rows(table, params.trim_threshold)

    return result


def write_outputs(
    result: ConversionResult,
    output: Path | str,
    params: ConversionParams,
) -> list[OutputResult]:
    """Write the forward table and, if requested, its inverted sibling.

    A failed write is recorded on its OutputResult and does not prevent the
    other file from being written.
    """
    output = Path(output)
    targets = [(output, False)]
    if params.invert:
        targets.append((inverted_path(output), True))

    outputs = []
    for target, invert in targets:
        outcome = OutputResult(path=target, inverted=invert)
        try:
            save_wavetable_wav(target, result.table, invert=invert, sample_rate=params.sample_rate)
        except WriteError as e:
            outcome.error = e
        outputs.append(outcome)

    return outputs
