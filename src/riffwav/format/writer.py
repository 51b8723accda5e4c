"""WAV writer.

This module encodes :class:`Wav` values as RIFF/WAVE byte buffers. Chunks are
written in a fixed order: ``fmt ``, ``fact`` (float formats only), ``smpl``,
``acid``, ``LIST`` and finally ``data``.
"""

from pathlib import Path

import numpy as np

from riffwav.format.riff import (
    ACID_ID,
    DATA_ID,
    FACT_ID,
    FMT_ID,
    RIFF_ID,
    SMPL_ID,
    WAVE_ID,
    BytesWriter,
    round_up_to_even,
)
from riffwav.format.samples import encode_samples
from riffwav.format.types import Wav

FMT_CHUNK_SIZE = 16
FACT_CHUNK_SIZE = 4

# "WAVE" + fmt header and body + data header
_SIZE_WITHOUT_DATA = 4 + (8 + FMT_CHUNK_SIZE) + 8
_FACT_CHUNK_TOTAL = 8 + FACT_CHUNK_SIZE


def write_wav(wav: Wav) -> bytes:
    """Encode a :class:`Wav` as a complete WAV file.

    Channels of different lengths are padded with zeros to the longest one.
    Integer formats clamp samples outside ``[-1, 1]``; float formats store
    them unchanged.

    Args:
        wav: The audio and metadata to encode.

    Returns:
        The WAV file contents.
    """
    fmt = wav.format
    num_channels = wav.num_channels
    num_samples = wav.num_samples
    block_align = fmt.bytes_per_sample * num_channels
    data_size = num_samples * block_align
    bytes_per_second = block_align * wav.sample_rate

    sampler_bytes = wav.sampler.to_bytes() if wav.sampler is not None else b""
    acid_bytes = wav.acid.to_bytes() if wav.acid is not None else b""
    list_bytes = wav.info.to_bytes() if wav.info is not None else b""

    # RIFF size counts everything after the RIFF tag and size field
    riff_size = _SIZE_WITHOUT_DATA + round_up_to_even(data_size)
    if fmt.is_float:
        riff_size += _FACT_CHUNK_TOTAL
    if wav.sampler is not None:
        riff_size += 8 + len(sampler_bytes)
    if acid_bytes:
        riff_size += 8 + len(acid_bytes)
    riff_size += len(list_bytes)

    writer = BytesWriter()
    writer.write_string(RIFF_ID)
    writer.write_uint32(riff_size)
    writer.write_string(WAVE_ID)

    writer.write_string(FMT_ID)
    writer.write_uint32(FMT_CHUNK_SIZE)
    writer.write_uint16(fmt.format_code)
    writer.write_uint16(num_channels)
    writer.write_uint32(wav.sample_rate)
    writer.write_uint32(bytes_per_second)
    writer.write_uint16(block_align)
    writer.write_uint16(fmt.bits_per_sample)

    if fmt.is_float:
        writer.write_string(FACT_ID)
        writer.write_uint32(FACT_CHUNK_SIZE)
        writer.write_uint32(num_samples)

    if wav.sampler is not None:
        writer.write_string(SMPL_ID)
        writer.write_uint32(len(sampler_bytes))
        writer.write_bytes(sampler_bytes)

    if acid_bytes:
        writer.write_string(ACID_ID)
        writer.write_uint32(len(acid_bytes))
        writer.write_bytes(acid_bytes)

    writer.write_bytes(list_bytes)

    writer.write_string(DATA_ID)
    writer.write_uint32(data_size)

    # Interleave frame by frame; missing samples are silence
    frames = np.zeros((num_samples, num_channels), dtype=np.float64)
    for i, channel in enumerate(wav.channels):
        frames[: len(channel), i] = channel
    writer.write_bytes(encode_samples(frames, fmt))

    if data_size % 2:
        writer.write_uint8(0)

    return writer.take_bytes()


def save_wav(path: Path | str, wav: Wav) -> None:
    """Write a :class:`Wav` to disk, creating parent directories as needed.

    Args:
        path: Output file path.
        wav: The audio and metadata to write.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(write_wav(wav))
