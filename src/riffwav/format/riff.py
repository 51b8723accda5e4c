"""RIFF byte cursor primitives.

This module provides the sequential, bounds-checked reader and the growable
writer that every chunk codec in :mod:`riffwav.format` is built on, together
with the FourCC constants and the error hierarchy raised while decoding.
"""

import struct

# FourCC identifiers
RIFF_ID = "RIFF"
WAVE_ID = "WAVE"
FMT_ID = "fmt "
FACT_ID = "fact"
DATA_ID = "data"
SMPL_ID = "smpl"
ACID_ID = "acid"
LIST_ID = "LIST"
INFO_ID = "INFO"

# Audio format codes
WAVE_FORMAT_PCM = 1
WAVE_FORMAT_IEEE_FLOAT = 3

_UINT8 = struct.Struct("<B")
_UINT16 = struct.Struct("<H")
_UINT32 = struct.Struct("<I")
_FLOAT32 = struct.Struct("<f")
_FLOAT64 = struct.Struct("<d")


class RiffError(Exception):
    """Error reading or writing RIFF files."""


class MalformedHeaderError(RiffError):
    """A literal tag did not match, or a required chunk is missing."""


class MissingChunkError(MalformedHeaderError):
    """A required chunk was not found before the buffer ran out."""

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f"{tag!r} chunk not found in WAV data")


class UnsupportedFormatError(RiffError):
    """The fmt chunk describes a format/bit-depth pairing we cannot decode."""

    def __init__(self, format_code: int, bits_per_sample: int) -> None:
        self.format_code = format_code
        self.bits_per_sample = bits_per_sample
        super().__init__(
            f"Unsupported audio format: format={format_code}, bits={bits_per_sample}"
        )


class BufferUnderrunError(RiffError):
    """A read would run past the end of the buffer."""

    def __init__(self, position: int, requested: int, available: int) -> None:
        self.position = position
        self.requested = requested
        self.available = available
        super().__init__(
            f"Unexpected end of data at offset {position}: "
            f"needed {requested} bytes, {available} available"
        )


def round_up_to_even(n: int) -> int:
    """Round a chunk size up to the RIFF word boundary."""
    return n + (n % 2)


class BytesReader:
    """Sequential little-endian reader over an immutable byte buffer."""

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._data = bytes(data)
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    @property
    def has_data(self) -> bool:
        """Whether the cursor has not yet reached the end of the buffer."""
        return self._pos < len(self._data)

    def _take(self, n: int) -> bytes:
        if n < 0 or n > self.remaining:
            raise BufferUnderrunError(self._pos, n, self.remaining)
        chunk = self._data[self._pos : self._pos + n]
        self._pos += n
        return chunk

    def _unpack(self, fmt: struct.Struct) -> int | float:
        return fmt.unpack(self._take(fmt.size))[0]

    def read_uint8(self) -> int:
        return int(self._unpack(_UINT8))

    def read_uint16(self) -> int:
        return int(self._unpack(_UINT16))

    def read_uint32(self) -> int:
        return int(self._unpack(_UINT32))

    def read_float32(self) -> float:
        return float(self._unpack(_FLOAT32))

    def read_float64(self) -> float:
        return float(self._unpack(_FLOAT64))

    def read_string(self, n: int) -> str:
        """Read ``n`` bytes as text, one character per byte (Latin-1).

        Every byte value maps to a character, so tags that are not ASCII still
        survive a read and write unchanged.
        """
        return self._take(n).decode("latin-1")

    def read_bytes(self, n: int) -> bytes:
        return self._take(n)

    def skip(self, n: int) -> None:
        self._take(n)

    def assert_string(self, expected: str) -> None:
        """Consume ``len(expected)`` bytes and require them to match exactly.

        Raises:
            MalformedHeaderError: If the bytes differ from ``expected``.
            BufferUnderrunError: If the buffer is too short.
        """
        start = self._pos
        actual = self._take(len(expected))
        if actual != expected.encode("ascii"):
            raise MalformedHeaderError(
                f"Expected {expected!r} at offset {start}, found {actual!r}"
            )

    def find_chunk(self, tag: str) -> None:
        """Advance past the next chunk tag equal to ``tag``.

        Chunks with other tags are skipped along with their pad byte. On
        return the cursor sits on the matching chunk's size field.

        Raises:
            MissingChunkError: If the buffer is exhausted without a match.
        """
        while self.has_data:
            try:
                chunk_id = self.read_string(4)
                if chunk_id == tag:
                    return
                self.skip(round_up_to_even(self.read_uint32()))
            except BufferUnderrunError as e:
                raise MissingChunkError(tag) from e
        raise MissingChunkError(tag)


class BytesWriter:
    """Little-endian writer accumulating into a growable buffer."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def __len__(self) -> int:
        return len(self._buffer)

    def write_uint8(self, value: int) -> None:
        self._buffer += _UINT8.pack(value)

    def write_uint16(self, value: int) -> None:
        self._buffer += _UINT16.pack(value)

    def write_uint32(self, value: int) -> None:
        self._buffer += _UINT32.pack(value)

    def write_float32(self, value: float) -> None:
        self._buffer += _FLOAT32.pack(value)

    def write_float64(self, value: float) -> None:
        self._buffer += _FLOAT64.pack(value)

    def write_string(self, value: str) -> None:
        """Write ``value`` one byte per character (Latin-1)."""
        self._buffer += value.encode("latin-1")

    def write_bytes(self, value: bytes | bytearray | memoryview) -> None:
        self._buffer += value

    def take_bytes(self) -> bytes:
        """Return the accumulated bytes and reset the writer."""
        data = bytes(self._buffer)
        self._buffer = bytearray()
        return data
