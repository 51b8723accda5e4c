import logging
import sys
from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console
from rich.table import Table

from riffwav.cli.formats import parse_format_name
from riffwav.cli.validators import validate_format_name, validate_positive_integer
from riffwav.format import (
    RiffError,
    ValidationError,
    Wav,
    load_wav,
    save_wav,
    validate_wav,
    walk_chunks,
)

app = App(name="riffwav", help="Inspect and convert RIFF/WAVE audio files")
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


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command
def info(file: Path, verbose: bool = False) -> int:
    """
    Display the format and metadata of a WAV file.

    Parameters
    ----------
    file: Path
        The path to the .wav file
    verbose: bool
        Log every chunk as it is decoded
    """
    configure_logging(verbose)

    try:
        wav = load_wav(file)
    except RiffError as e:
        print_error(f"Error: {e}")
        return 1

    table = Table(title=str(file), show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Format", wav.format.display_name)
    table.add_row("Channels", str(wav.num_channels))
    table.add_row("Sample rate", f"{wav.sample_rate} Hz")
    table.add_row("Frames", str(wav.num_samples))
    table.add_row("Duration", f"{wav.duration:.3f} s")

    if wav.acid is not None:
        table.add_row("Tempo", f"{wav.acid.bpm:.2f} BPM")
    if wav.sampler is not None:
        table.add_row("Root note", str(wav.sampler.root_note))
        table.add_row("Sample loops", str(wav.sampler.number_of_sample_loops))
    if wav.info is not None:
        for chunk in wav.info.chunks:
            table.add_row(chunk.tag, chunk.text)

    console.print(table)

    for warning in validate_wav(wav).warnings:
        print_warning(f"  [WARN] {warning}")

    return 0


@app.command
def chunks(file: Path) -> int:
    """
    List the top-level RIFF chunks of a WAV file with their offsets and sizes.

    Parameters
    ----------
    file: Path
        The path to the .wav file
    """
    if not file.exists():
        print_error(f"Error: File {file} does not exist")
        return 1

    try:
        found = walk_chunks(file.read_bytes())
    except RiffError as e:
        print_error(f"Error: {e}")
        return 1

    table = Table(title=str(file))
    table.add_column("Chunk", style="cyan")
    table.add_column("Offset", justify="right")
    table.add_column("Size", justify="right")
    for chunk in found:
        table.add_row(repr(chunk.tag), str(chunk.offset), str(chunk.size))
    console.print(table)
    return 0


@app.command
def convert(
    source: Path,
    output: Path,
    format: Annotated[str | None, Parameter(validator=validate_format_name)] = None,
    sample_rate: Annotated[int | None, Parameter(validator=validate_positive_integer)] = None,
    mono: bool = False,
    strict: bool = False,
    verbose: bool = False,
) -> int:
    """
    Re-encode a WAV file, keeping its sampler, tempo and INFO metadata.

    Parameters
    ----------
    source: Path
        The .wav file to read
    output: Path
        The destination .wav file
    format: str | None
        Target sample format: pcm8, pcm16, pcm24, pcm32, float32 or float64.
        Defaults to the source format.
    sample_rate: int | None
        Sample rate to record in the output header. Samples are not resampled.
    mono: bool
        Mix all channels down to one
    strict: bool
        Refuse to write when validation reports warnings (default: False)
    verbose: bool
        Log every chunk as it is decoded
    """
    configure_logging(verbose)

    try:
        wav = load_wav(source)
    except RiffError as e:
        print_error(f"Error reading {source}: {e}")
        return 1

    converted = Wav(
        channels=[wav.to_mono()] if mono else wav.channels,
        sample_rate=sample_rate or wav.sample_rate,
        format=parse_format_name(format) if format else wav.format,
        info=wav.info,
        sampler=wav.sampler,
        acid=wav.acid,
    )

    result = validate_wav(converted)
    try:
        result.raise_for_errors()
        if strict and result.warnings:
            raise ValidationError(f"Strict mode: {result.warnings}")
    except ValidationError as e:
        print_error(f"[FAIL] {e}")
        return 1

    for warning in result.warnings:
        print_warning(f"  [WARN] {warning}")

    save_wav(output, converted)

    print_success(f"Converted {source} -> {output}")
    console.print(f"  Format: {converted.format.display_name}")
    console.print(f"  Channels: {converted.num_channels}")
    console.print(f"  Sample rate: {converted.sample_rate} Hz")
    return 0


if __name__ == "__main__":
    sys.exit(app())
