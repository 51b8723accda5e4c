"""Sample encoding and decoding for every supported :class:`SampleFormat`.

Samples are normalised to float64 in ``[-1, 1]``. Integer formats are scaled
by ``2 ** (bits - 1)``; on encode they are rounded to the nearest integer and
clamped to the representable range. Float formats are stored unscaled and
unclamped.

Each format has one :class:`SampleCodec` entry holding a per-sample
reader/writer pair for :class:`BytesReader`/:class:`BytesWriter` and a
vectorised pair for whole ``data`` chunks. Both pairs share the same scaling
constant.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from riffwav.format.riff import BytesReader, BytesWriter
from riffwav.format.types import SampleFormat


@dataclass(frozen=True)
class SampleCodec:
    """Encode/decode functions for one sample format."""

    read: Callable[[BytesReader], float]
    write: Callable[[BytesWriter, float], None]
    decode: Callable[[bytes], NDArray[np.float64]]
    encode: Callable[[NDArray[np.float64]], bytes]


def _clamp(value: float, lo: int, hi: int) -> int:
    if math.isnan(value):
        return 0
    return round(min(max(value, lo), hi))


def _quantize(values: NDArray[np.float64], scale: int, lo: int, hi: int) -> NDArray[np.int64]:
    scaled = np.clip(np.rint(values * scale), lo, hi)
    return np.nan_to_num(scaled, nan=0.0).astype(np.int64)


def _pcm8_codec() -> SampleCodec:
    # 8-bit WAV data is unsigned with silence at 128
    def read(reader: BytesReader) -> float:
        return (reader.read_uint8() - 128) / 128.0

    def write(writer: BytesWriter, value: float) -> None:
        writer.write_uint8(_clamp(value * 128.0, -128, 127) + 128)

    def decode(raw: bytes) -> NDArray[np.float64]:
        return (np.frombuffer(raw, dtype=np.uint8).astype(np.float64) - 128.0) / 128.0

    def encode(values: NDArray[np.float64]) -> bytes:
        return (_quantize(values, 128, -128, 127) + 128).astype(np.uint8).tobytes()

    return SampleCodec(read=read, write=write, decode=decode, encode=encode)


def _pcm_codec(bits: int) -> SampleCodec:
    width = bits // 8
    scale = 1 << (bits - 1)
    lo, hi = -scale, scale - 1

    def read(reader: BytesReader) -> float:
        return int.from_bytes(reader.read_bytes(width), "little", signed=True) / scale

    def write(writer: BytesWriter, value: float) -> None:
        writer.write_bytes(_clamp(value * scale, lo, hi).to_bytes(width, "little", signed=True))

    if bits == 24:

        def decode(raw: bytes) -> NDArray[np.float64]:
            triples = np.frombuffer(raw, dtype=np.uint8).reshape(-1, 3).astype(np.int32)
            ints = triples[:, 0] | (triples[:, 1] << 8) | (triples[:, 2] << 16)
            ints = np.where(ints & 0x800000, ints - 0x1000000, ints)
            return ints.astype(np.float64) / scale

        def encode(values: NDArray[np.float64]) -> bytes:
            ints = _quantize(values, scale, lo, hi)
            triples = np.stack([ints & 0xFF, (ints >> 8) & 0xFF, (ints >> 16) & 0xFF], axis=-1)
            return triples.astype(np.uint8).tobytes()

    else:
        dtype = np.dtype(f"<i{width}")

        def decode(raw: bytes) -> NDArray[np.float64]:
            return np.frombuffer(raw, dtype=dtype).astype(np.float64) / scale

        def encode(values: NDArray[np.float64]) -> bytes:
            return _quantize(values, scale, lo, hi).astype(dtype).tobytes()

    return SampleCodec(read=read, write=write, decode=decode, encode=encode)


def _float_codec(bits: int) -> SampleCodec:
    dtype = np.dtype(f"<f{bits // 8}")

    if bits == 32:
        read = BytesReader.read_float32

        def write(writer: BytesWriter, value: float) -> None:
            # Values beyond float32 range become +/-inf, as in the block encoder
            with np.errstate(over="ignore"):
                writer.write_float32(float(np.float64(value).astype(np.float32)))

    else:
        read, write = BytesReader.read_float64, BytesWriter.write_float64

    def decode(raw: bytes) -> NDArray[np.float64]:
        return np.frombuffer(raw, dtype=dtype).astype(np.float64)

    def encode(values: NDArray[np.float64]) -> bytes:
        with np.errstate(over="ignore"):
            return values.astype(dtype).tobytes()

    return SampleCodec(read=read, write=write, decode=decode, encode=encode)


CODECS: dict[SampleFormat, SampleCodec] = {
    SampleFormat.PCM_8: _pcm8_codec(),
    SampleFormat.PCM_16: _pcm_codec(16),
    SampleFormat.PCM_24: _pcm_codec(24),
    SampleFormat.PCM_32: _pcm_codec(32),
    SampleFormat.FLOAT_32: _float_codec(32),
    SampleFormat.FLOAT_64: _float_codec(64),
}


def sample_reader(reader: BytesReader, fmt: SampleFormat) -> Callable[[], float]:
    """Return a function reading one normalised sample per call.

    Each call consumes exactly ``fmt.bytes_per_sample`` bytes.
    """
    read = CODECS[fmt].read
    return lambda: read(reader)


def sample_writer(writer: BytesWriter, fmt: SampleFormat) -> Callable[[float], None]:
    """Return a function writing one normalised sample per call."""
    write = CODECS[fmt].write
    return lambda value: write(writer, value)


def decode_samples(raw: bytes, fmt: SampleFormat) -> NDArray[np.float64]:
    """Decode a run of samples into a flat float64 array.

    Args:
        raw: Sample bytes; length must be a multiple of ``fmt.bytes_per_sample``.
        fmt: Encoding of ``raw``.

    Returns:
        Normalised samples in file order.
    """
    if not raw:
        return np.zeros(0, dtype=np.float64)
    return CODECS[fmt].decode(raw)


def encode_samples(values: ArrayLike, fmt: SampleFormat) -> bytes:
    """Encode samples to their on-disk representation.

    Args:
        values: Normalised samples. Integer formats clamp out-of-range values.
        fmt: Target encoding.

    Returns:
        The encoded bytes, ``fmt.bytes_per_sample`` per sample.
    """
    return CODECS[fmt].encode(np.asarray(values, dtype=np.float64).ravel())
