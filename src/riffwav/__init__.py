"""riffwav - RIFF/WAVE audio reader and writer.

This package decodes WAV files into normalised float64 channels and encodes
them back, preserving sampler (``smpl``), tempo (``acid``) and ``LIST``/``INFO``
metadata.

Example Usage
-------------
>>> from riffwav import SampleFormat, Wav, WavAcid, load_wav, save_wav
>>> import numpy as np
>>>
>>> # Two seconds of a 440 Hz tone
>>> t = np.arange(88200) / 44100
>>> tone = 0.5 * np.sin(2 * np.pi * 440 * t)
>>>
>>> save_wav(
...     "tone.wav",
...     Wav([tone, tone], 44100, format=SampleFormat.FLOAT_32, acid=WavAcid(bpm=120.0)),
... )
>>>
>>> wav = load_wav("tone.wav")
>>> print(f"{wav.num_channels} channels, {wav.duration:.1f} s at {wav.acid.bpm} BPM")
"""

# Re-export format module for convenience
from riffwav.format import (
    DEFAULT_FORMAT,
    BufferUnderrunError,
    ChunkInfo,
    MalformedHeaderError,
    MissingChunkError,
    RiffError,
    SampleFormat,
    UnsupportedFormatError,
    ValidationError,
    ValidationResult,
    Wav,
    WavAcid,
    WavList,
    WavListChunk,
    WavSampler,
    load_wav,
    read_wav,
    save_wav,
    validate_audio_data,
    validate_metadata,
    validate_wav,
    walk_chunks,
    write_wav,
)

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
