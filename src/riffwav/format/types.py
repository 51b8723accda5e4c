"""Python types for WAV audio and its metadata chunks.

The metadata records convert to and from their chunk payloads with
``to_bytes``/``parse``, mirroring how the container codec emits and consumes
them.
"""

from dataclasses import dataclass, field
from enum import Enum

import numpy as np
from numpy.typing import NDArray

from riffwav.format.riff import (
    INFO_ID,
    LIST_ID,
    WAVE_FORMAT_IEEE_FLOAT,
    WAVE_FORMAT_PCM,
    BytesReader,
    BytesWriter,
    UnsupportedFormatError,
)


class SampleFormat(Enum):
    """Supported on-disk sample encodings.

    Each member is a ``(format_code, bits_per_sample)`` pair taken from the
    ``fmt `` chunk. Any pairing not listed here is unsupported.
    """

    PCM_8 = (WAVE_FORMAT_PCM, 8)
    """Unsigned 8-bit PCM, offset by 128."""

    PCM_16 = (WAVE_FORMAT_PCM, 16)
    """Signed 16-bit PCM."""

    PCM_24 = (WAVE_FORMAT_PCM, 24)
    """Signed 24-bit PCM, packed into 3 bytes."""

    PCM_32 = (WAVE_FORMAT_PCM, 32)
    """Signed 32-bit PCM."""

    FLOAT_32 = (WAVE_FORMAT_IEEE_FLOAT, 32)
    """IEEE-754 single precision."""

    FLOAT_64 = (WAVE_FORMAT_IEEE_FLOAT, 64)
    """IEEE-754 double precision."""

    @classmethod
    def from_fmt(cls, format_code: int, bits_per_sample: int) -> "SampleFormat":
        """Resolve the format described by a ``fmt `` chunk.

        Raises:
            UnsupportedFormatError: If the pairing is not one of the members.
        """
        try:
            return cls((format_code, bits_per_sample))
        except ValueError:
            raise UnsupportedFormatError(format_code, bits_per_sample) from None

    @property
    def format_code(self) -> int:
        return self.value[0]

    @property
    def bits_per_sample(self) -> int:
        return self.value[1]

    @property
    def bytes_per_sample(self) -> int:
        return self.value[1] // 8

    @property
    def is_float(self) -> bool:
        return self.value[0] == WAVE_FORMAT_IEEE_FLOAT

    @property
    def display_name(self) -> str:
        """Human-readable name for this format."""
        kind = "float" if self.is_float else "PCM"
        return f"{self.bits_per_sample}-bit {kind}"


DEFAULT_FORMAT = SampleFormat.PCM_16


@dataclass
class WavSampler:
    """The fixed header of a ``smpl`` chunk.

    Loop records that may follow the header are not modelled.
    """

    manufacturer: int = 0
    product: int = 0
    sample_period: int = 0
    """Sample period in nanoseconds."""
    root_note: int = 0
    """MIDI unity note."""
    pitch_fraction: int = 0
    smpte_format: int = 0
    smpte_offset: int = 0
    number_of_sample_loops: int = 0
    sample_data: int = 0

    SIZE = 36

    def to_bytes(self) -> bytes:
        """Encode the chunk payload (without tag or size)."""
        writer = BytesWriter()
        writer.write_uint32(self.manufacturer)
        writer.write_uint32(self.product)
        writer.write_uint32(self.sample_period)
        writer.write_uint32(self.root_note)
        writer.write_uint32(self.pitch_fraction)
        writer.write_uint32(self.smpte_format)
        writer.write_uint32(self.smpte_offset)
        writer.write_uint32(self.number_of_sample_loops)
        writer.write_uint32(self.sample_data)
        return writer.take_bytes()

    @classmethod
    def parse(cls, reader: BytesReader) -> "WavSampler":
        """Read the 9 header fields from the reader."""
        return cls(
            manufacturer=reader.read_uint32(),
            product=reader.read_uint32(),
            sample_period=reader.read_uint32(),
            root_note=reader.read_uint32(),
            pitch_fraction=reader.read_uint32(),
            smpte_format=reader.read_uint32(),
            smpte_offset=reader.read_uint32(),
            number_of_sample_loops=reader.read_uint32(),
            sample_data=reader.read_uint32(),
        )


@dataclass
class WavAcid:
    """Tempo information from an ``acid`` chunk.

    The five leading fields of the chunk (type flags, root note, two reserved
    values, number of beats and meter) are dropped on read and written as
    zero.
    """

    bpm: float = 0.0

    SIZE = 24

    def to_bytes(self) -> bytes:
        writer = BytesWriter()
        for _ in range(5):
            writer.write_uint32(0)
        writer.write_float32(self.bpm)
        return writer.take_bytes()

    @classmethod
    def parse(cls, reader: BytesReader) -> "WavAcid":
        reader.skip(5 * 4)
        return cls(bpm=reader.read_float32())


@dataclass
class WavListChunk:
    """One tagged entry of a ``LIST``/``INFO`` chunk."""

    tag: str
    """Four-character code, e.g. ``"INAM"``. Each character stands for one byte."""

    data: bytes
    """Raw payload. Tags are not interpreted.

    Entries are padded with NUL bytes to a multiple of 4 on write, and the
    padded span is what a read returns: ``b"Hi"`` reads back as
    ``b"Hi\\x00\\x00"``. Use :attr:`text` for NUL-terminated strings.
    """

    @classmethod
    def from_text(cls, tag: str, text: str) -> "WavListChunk":
        """Build an entry holding NUL-terminated text."""
        return cls(tag=tag, data=text.encode("utf-8") + b"\x00")

    @property
    def text(self) -> str:
        """The payload decoded as text, up to the first NUL byte."""
        return self.data.split(b"\x00", 1)[0].decode("utf-8", errors="replace")

    @property
    def padded_size(self) -> int:
        """Payload length rounded up to a multiple of 4."""
        return (len(self.data) + 3) // 4 * 4

    def to_bytes(self) -> bytes:
        """Encode as ``tag, padded_size, data, zero padding``."""
        writer = BytesWriter()
        writer.write_string(self.tag)
        writer.write_uint32(self.padded_size)
        writer.write_bytes(self.data)
        writer.write_bytes(bytes(self.padded_size - len(self.data)))
        return writer.take_bytes()


@dataclass
class WavList:
    """The entries of a ``LIST`` chunk of type ``INFO``, in file order."""

    chunks: list[WavListChunk] = field(default_factory=list)

    def get(self, tag: str) -> WavListChunk | None:
        """Return the first entry with ``tag``, if any."""
        return next((chunk for chunk in self.chunks if chunk.tag == tag), None)

    def to_bytes(self) -> bytes:
        """Encode the complete ``LIST`` chunk, header included."""
        encoded = [chunk.to_bytes() for chunk in self.chunks]

        writer = BytesWriter()
        writer.write_string(LIST_ID)
        writer.write_uint32(sum(len(data) for data in encoded) + 4)
        writer.write_string(INFO_ID)
        for data in encoded:
            writer.write_bytes(data)
        return writer.take_bytes()

    @classmethod
    def parse(cls, data: bytes) -> "WavList":
        """Parse the payload that follows the ``INFO`` tag.

        Entries whose declared size is odd are followed by a RIFF pad byte,
        which is skipped.
        """
        reader = BytesReader(data)
        chunks = []
        while reader.has_data:
            tag = reader.read_string(4)
            size = reader.read_uint32()
            chunks.append(WavListChunk(tag=tag, data=reader.read_bytes(size)))
            if size % 2 and reader.has_data:
                reader.skip(1)
        return cls(chunks=chunks)


@dataclass
class Wav:
    """Decoded WAV audio together with its supported metadata."""

    channels: list[NDArray[np.float64]]
    """One array per channel, nominally in ``[-1, 1]``. Lengths may differ."""

    sample_rate: int
    """Sampling frequency in Hz."""

    format: SampleFormat = DEFAULT_FORMAT
    """On-disk sample encoding."""

    info: WavList | None = None
    """``LIST``/``INFO`` entries."""

    sampler: WavSampler | None = None
    acid: WavAcid | None = None

    def __post_init__(self) -> None:
        self.channels = [np.asarray(channel, dtype=np.float64) for channel in self.channels]

    @property
    def num_channels(self) -> int:
        return len(self.channels)

    @property
    def num_samples(self) -> int:
        """Number of frames, i.e. the length of the longest channel."""
        return max((len(channel) for channel in self.channels), default=0)

    @property
    def duration(self) -> float:
        """Duration in seconds, from the length of the first channel.

        A sample rate of 0 gives a duration of 0.0.
        """
        if not self.channels or self.sample_rate == 0:
            return 0.0
        return len(self.channels[0]) / self.sample_rate

    def to_mono(self) -> NDArray[np.float64]:
        """Mix all channels down to one by averaging.

        The result has the length of the first channel; shorter channels
        contribute zeros past their end.
        """
        if not self.channels:
            return np.zeros(0, dtype=np.float64)

        length = len(self.channels[0])
        mono = np.zeros(length, dtype=np.float64)
        for channel in self.channels:
            n = min(length, len(channel))
            mono[:n] += channel[:n]
        return mono / len(self.channels)
