"""RIFF/WAVE codec.

This module reads and writes WAV audio held in memory, along with the
``smpl``, ``acid`` and ``LIST``/``INFO`` metadata chunks.

Format Overview
---------------
A WAV file is a RIFF container of tagged chunks, each padded to an even length:

    +----------------------------------------+
    | RIFF Header ("WAVE")                   |
    +----------------------------------------+
    | fmt  chunk (format code, channels,     |
    |             rate, block align, bits)   |
    +----------------------------------------+
    | fact chunk (float formats only)        |
    +----------------------------------------+
    | smpl chunk (optional sampler header)   |
    +----------------------------------------+
    | acid chunk (optional tempo)            |
    +----------------------------------------+
    | LIST/INFO chunk (optional tags)        |
    +----------------------------------------+
    | data chunk (interleaved samples)       |
    +----------------------------------------+

Unknown chunks are skipped on read and never written.

Example Usage
-------------
>>> import numpy as np
>>> from riffwav.format import SampleFormat, Wav, read_wav, write_wav
>>> wav = Wav([np.zeros(4), np.ones(4) * 0.5], 48000, format=SampleFormat.PCM_24)
>>> data = write_wav(wav)
>>> read_wav(data).num_samples
4
"""

from riffwav.format.reader import ChunkInfo, load_wav, read_wav, walk_chunks
from riffwav.format.riff import (
    BufferUnderrunError,
    MalformedHeaderError,
    MissingChunkError,
    RiffError,
    UnsupportedFormatError,
)
from riffwav.format.types import (
    DEFAULT_FORMAT,
    SampleFormat,
    Wav,
    WavAcid,
    WavList,
    WavListChunk,
    WavSampler,
)
from riffwav.format.validation import (
    ValidationError,
    ValidationResult,
    validate_audio_data,
    validate_metadata,
    validate_wav,
)
from riffwav.format.writer import save_wav, write_wav

__all__ = [
    # Types
    "SampleFormat",
    "DEFAULT_FORMAT",
    "Wav",
    "WavAcid",
    "WavList",
    "WavListChunk",
    "WavSampler",
    # Reader
    "read_wav",
    "load_wav",
    "walk_chunks",
    "ChunkInfo",
    # Writer
    "write_wav",
    "save_wav",
    # Errors
    "RiffError",
    "MalformedHeaderError",
    "MissingChunkError",
    "UnsupportedFormatError",
    "BufferUnderrunError",
    # Validation
    "validate_wav",
    "validate_metadata",
    "validate_audio_data",
    "ValidationResult",
    "ValidationError",
]
