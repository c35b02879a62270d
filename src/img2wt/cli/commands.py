import sys
from pathlib import Path
from typing import Annotated

import numpy as np
from cyclopts import App, Parameter
from rich.console import Console
from rich.table import Table

from img2wt.cli.validators import (
    validate_non_negative_integer,
    validate_positive_integer,
    validate_table_rows,
)
from img2wt.convert import convert_image, write_outputs
from img2wt.dsp.grayscale import ImageTooSmallError
from img2wt.dsp.rows import row_stats
from img2wt.export import save_frames_as_wav
from img2wt.format import RiffError, load_wavetable_wav, read_wav_header
from img2wt.image import DecodeError
from img2wt.types import MAX_TABLE_ROWS, ConversionParams, RowStats

app = App(name="img2wt", help="Convert images into Ableton-style wavetables")
console = Console()


def print_error(message: str) -> None:
    """Print an error message in red."""
    console.print(message, style="bold red")


def print_success(message: str) -> None:
    """Print a success message in green."""
    console.print(message, style="bold green")


def print_warning(message: str) -> None:
    """Print a warning message in yellow."""
    console.print(message, style="bold yellow")


def build_row_table(stats: list[RowStats], kept: set[int] | None = None) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Row", justify="right")
    table.add_column("Min", justify="right")
    table.add_column("Max", justify="right")
    table.add_column("Variance", justify="right")
    if kept is not None:
        table.add_column("Kept", justify="center")

    for stat in stats:
        cells = [str(stat.row), str(stat.minimum), str(stat.maximum), str(stat.variance)]
        if kept is not None:
            cells.append("[green]Yes[/green]" if stat.row in kept else "[yellow]No[/yellow]")
        table.add_row(*cells)

    return table


def kept_rows(stats: list[RowStats], threshold: int | None) -> set[int]:
    if threshold is None:
        return {stat.row for stat in stats}
    return {stat.row for stat in stats if stat.variance > threshold}


@app.command
def convert(
    image: Path,
    output: Path = Path("wavetable.wav"),
    frame_size: Annotated[int, Parameter(validator=validate_positive_integer)] = 1024,
    table_rows: Annotated[int, Parameter(validator=validate_table_rows)] = MAX_TABLE_ROWS,
    trim_threshold: Annotated[int, Parameter(validator=validate_non_negative_integer)] = 3000,
    no_trim: bool = False,
    invert: bool = True,
    report: bool = False,
    export_frames: Path | None = None,
) -> int:
    """
    Convert an image into a 16-bit mono wavetable WAV file.

    Parameters
    ----------
    image: Path
        The source image (PNG, JPEG, BMP, ...)
    output: Path
        The output destination for the wavetable .wav file
    frame_size: int
        Samples per wavetable frame (one image row)
    table_rows: int
        Number of frames sampled from the image
    trim_threshold: int
        Frames whose max-min span does not exceed this value are removed
    no_trim: bool
        Keep every frame, including flat ones
    invert: bool
        Also write a polarity-inverted copy next to the output
    report: bool
        Print the min, max and variance of every frame before trimming
    export_frames: Path | None
        Directory to also export each frame as a single-cycle .wav file
    """
    params = ConversionParams(
        frame_size=frame_size,
        table_rows=table_rows,
        trim_threshold=None if no_trim else trim_threshold,
        invert=invert,
    )

    console.print(f"Converting {image}...")

    try:
        result = convert_image(image, params)
    except DecodeError as e:
        print_error(f"Error: {e}")
        return 1
    except ImageTooSmallError as e:
        print_error(f"Error: {e}")
        console.print(f"  Suggestion: Use an image at least {e.table_rows} pixels tall")
        console.print(f"    or lower --table-rows to {e.height} or less.")
        return 1

    console.print(
        f"Loaded {result.source_width}x{result.source_height} image "
        f"with {result.source_channels} channel(s)"
    )

    if report:
        stats = row_stats(result.assembled)
        console.print(build_row_table(stats, kept_rows(stats, params.trim_threshold)))

    if params.trim_threshold is not None:
        console.print(
            f"Trimmed {result.removed_rows} rows under {params.trim_threshold} variance."
        )
        if result.num_rows == 0:
            print_warning("Every row was trimmed; the output will contain no samples.")

    failed = False
    for outcome in write_outputs(result, output, params):
        if outcome.ok:
            print_success(
                f"Created WAV file with {result.num_rows} rows of "
                f"{result.frame_size} samples each: {outcome.path}"
            )
        else:
            print_error(f"Error: {outcome.error}")
            failed = True

    if export_frames is not None:
        paths = save_frames_as_wav(export_frames, result.table, params.sample_rate)
        console.print(f"Exported {len(paths)} frames to {export_frames}")

    return 1 if failed else 0


@app.command
def info(
    file: Path,
    frame_size: Annotated[int, Parameter(validator=validate_positive_integer)] = 1024,
    output_json: Annotated[bool, Parameter(name=["--json"])] = False,
) -> int:
    """
    Display information about a wavetable file.

    Parameters
    ----------
    file: Path
        The path to the wavetable .wav file
    frame_size: int
        Samples per wavetable frame
    output_json: bool
        Output results as JSON (default: False)
    """
    if not file.exists():
        print_error(f"Error: File not found: {file}")
        return 1

    try:
        header = read_wav_header(file)
        table = load_wavetable_wav(file, frame_size)
    except (RiffError, ValueError) as e:
        print_error(f"Error reading {file}: {e}")
        return 1

    stats = row_stats(table)

    if output_json:
        console.print_json(
            data={
                "file": str(file),
                "sample_rate": header.sample_rate,
                "bits_per_sample": header.bits_per_sample,
                "channels": header.num_channels,
                "data_size": header.data_size,
                "riff_size": header.riff_size,
                "frame_size": frame_size,
                "rows": len(stats),
                "row_stats": [
                    {
                        "row": stat.row,
                        "min": stat.minimum,
                        "max": stat.maximum,
                        "variance": stat.variance,
                    }
                    for stat in stats
                ],
            }
        )
        return 0

    console.print(f"Wavetable: {file}")
    console.print(f"  Sample rate: {header.sample_rate} Hz")
    console.print(f"  Bit depth: {header.bits_per_sample}-bit")
    console.print(f"  Channels: {header.num_channels}")
    console.print(f"  Data size: {header.data_size} bytes")
    console.print(f"  Frames: {table.shape[0]}")
    console.print(f"  Frame size: {frame_size}")

    if table.size:
        rms = np.sqrt(np.mean((table.astype(np.float64) / 32767.0) ** 2))
        console.print(f"  RMS: {rms:.3f}")
        console.print(build_row_table(stats))

    return 0


if __name__ == "__main__":
    sys.exit(app())
