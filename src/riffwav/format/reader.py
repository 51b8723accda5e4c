"""WAV reader.

This module decodes RIFF/WAVE byte buffers into :class:`Wav` values. Only the
``fmt ``, ``data``, ``LIST``/``INFO``, ``smpl`` and ``acid`` chunks are
decoded; every other chunk is skipped.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from riffwav.format.riff import (
    ACID_ID,
    DATA_ID,
    FMT_ID,
    INFO_ID,
    LIST_ID,
    RIFF_ID,
    SMPL_ID,
    WAVE_ID,
    BytesReader,
    MalformedHeaderError,
    MissingChunkError,
    RiffError,
    round_up_to_even,
)
from riffwav.format.samples import decode_samples
from riffwav.format.types import SampleFormat, Wav, WavAcid, WavList, WavSampler

logger = logging.getLogger(__name__)

FMT_CHUNK_SIZE = 16


@dataclass
class FmtChunk:
    """Fields of the basic 16-byte ``fmt `` chunk."""

    format_code: int
    num_channels: int
    sample_rate: int
    bytes_per_second: int
    block_align: int
    bits_per_sample: int


@dataclass
class ChunkInfo:
    """Location of one top-level chunk in a RIFF buffer."""

    tag: str
    offset: int
    """Offset of the chunk header from the start of the buffer."""
    size: int
    """Declared payload size, excluding header and pad byte."""


def _read_riff_header(reader: BytesReader) -> None:
    reader.assert_string(RIFF_ID)
    reader.read_uint32()  # File size, not checked
    reader.assert_string(WAVE_ID)


def _read_fmt_chunk(reader: BytesReader) -> FmtChunk:
    reader.find_chunk(FMT_ID)
    fmt_size = round_up_to_even(reader.read_uint32())
    fmt = FmtChunk(
        format_code=reader.read_uint16(),
        num_channels=reader.read_uint16(),
        sample_rate=reader.read_uint32(),
        bytes_per_second=reader.read_uint32(),
        block_align=reader.read_uint16(),
        bits_per_sample=reader.read_uint16(),
    )
    if fmt_size > FMT_CHUNK_SIZE:
        reader.skip(fmt_size - FMT_CHUNK_SIZE)
    return fmt


def _skip_rest(reader: BytesReader, tag: str, start: int, size: int) -> None:
    """Skip whatever a chunk parser left unread, then the pad byte.

    A pad byte missing at the very end of the buffer is tolerated.
    """
    leftover = size - (reader.position - start)
    if leftover > 0:
        logger.debug("Skipping %d unread bytes of %r chunk", leftover, tag)
        reader.skip(leftover)
    if size % 2 and reader.has_data:
        reader.skip(1)


def _read_data_chunk(
    reader: BytesReader, fmt: FmtChunk, size: int
) -> tuple[SampleFormat, list[NDArray[np.float64]]]:
    sample_format = SampleFormat.from_fmt(fmt.format_code, fmt.bits_per_sample)
    num_channels = fmt.num_channels
    if fmt.block_align == 0 or num_channels == 0:
        return sample_format, [np.zeros(0, dtype=np.float64) for _ in range(num_channels)]

    # A trailing partial frame is dropped
    num_samples = size // fmt.block_align
    frame_size = sample_format.bytes_per_sample * num_channels
    if fmt.block_align < frame_size:
        raise MalformedHeaderError(
            f"Block align {fmt.block_align} is too small for {num_channels} channels "
            f"of {sample_format.display_name} audio"
        )
    raw = reader.read_bytes(num_samples * fmt.block_align)

    if fmt.block_align > frame_size and raw:
        # Frames carry bytes beyond the samples we decode; keep the leading samples
        frames = np.frombuffer(raw, dtype=np.uint8).reshape(num_samples, fmt.block_align)
        raw = frames[:, :frame_size].tobytes()

    interleaved = decode_samples(raw, sample_format).reshape(num_samples, num_channels)
    channels = [interleaved[:, i].copy() for i in range(num_channels)]
    return sample_format, channels


def read_wav(data: bytes | bytearray | memoryview) -> Wav:
    """Decode a complete WAV file held in memory.

    Args:
        data: The file contents.

    Returns:
        The decoded audio with any ``LIST``/``INFO``, ``smpl`` and ``acid``
        metadata.

    Raises:
        MalformedHeaderError: If the RIFF/WAVE literals do not match or the
            ``fmt `` chunk is missing.
        MissingChunkError: If there is no ``data`` chunk.
        UnsupportedFormatError: If the format code and bit depth are not one
            of the supported pairings.
        BufferUnderrunError: If the data is truncated.
    """
    reader = BytesReader(data)
    _read_riff_header(reader)
    fmt = _read_fmt_chunk(reader)

    # Format stays unresolved until the data chunk is seen
    sample_format: SampleFormat | None = None
    channels: list[NDArray[np.float64]] = []
    info: WavList | None = None
    sampler: WavSampler | None = None
    acid: WavAcid | None = None

    while reader.has_data:
        tag = reader.read_string(4)
        size = reader.read_uint32()
        start = reader.position
        logger.debug("Chunk %r at offset %d, size=%d", tag, start - 8, size)

        if tag == DATA_ID:
            sample_format, channels = _read_data_chunk(reader, fmt, size)
        elif tag == LIST_ID:
            list_type = reader.read_string(4)
            if list_type == INFO_ID:
                info = WavList.parse(reader.read_bytes(size - 4))
            else:
                logger.debug("Skipping LIST chunk of type %r", list_type)
        elif tag == SMPL_ID:
            sampler = WavSampler.parse(reader)
        elif tag == ACID_ID:
            acid = WavAcid.parse(reader)
        else:
            logger.debug("Skipping unsupported chunk %r", tag)

        _skip_rest(reader, tag, start, size)

    if sample_format is None:
        raise MissingChunkError(DATA_ID)

    return Wav(
        channels=channels,
        sample_rate=fmt.sample_rate,
        format=sample_format,
        info=info,
        sampler=sampler,
        acid=acid,
    )


def walk_chunks(data: bytes | bytearray | memoryview) -> list[ChunkInfo]:
    """List the top-level chunks of a RIFF/WAVE buffer without decoding them.

    Raises:
        MalformedHeaderError: If the RIFF/WAVE literals do not match.
    """
    reader = BytesReader(data)
    _read_riff_header(reader)

    chunks = []
    while reader.remaining >= 8:
        offset = reader.position
        tag = reader.read_string(4)
        size = reader.read_uint32()
        chunks.append(ChunkInfo(tag=tag, offset=offset, size=size))
        reader.skip(min(round_up_to_even(size), reader.remaining))
    return chunks


def load_wav(path: Path | str) -> Wav:
    """Load a WAV file from disk.

    Args:
        path: Path to the WAV file.

    Returns:
        The decoded :class:`Wav`.

    Raises:
        RiffError: If the file cannot be read or is not a valid WAV file.
    """
    path = Path(path)

    try:
        data = path.read_bytes()
    except FileNotFoundError as e:
        raise RiffError(f"File not found: {path}") from e
    except OSError as e:
        raise RiffError(f"Cannot open file: {path}") from e

    return read_wav(data)
