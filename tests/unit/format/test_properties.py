"""Property-based tests (Hypothesis) for the WAV codec.

These tests use property-based testing to verify that:
1. Round-trip preservation: write -> read preserves samples within the
   precision of the sample format
2. Size bookkeeping: declared chunk sizes agree with the bytes written
3. Metadata sub-codecs reproduce their values
"""

import struct

import numpy as np
from hypothesis import given, settings
from hypothesis import strategies as st

from riffwav.format import (
    SampleFormat,
    Wav,
    WavAcid,
    WavList,
    WavListChunk,
    WavSampler,
    read_wav,
    walk_chunks,
    write_wav,
)
from riffwav.format.riff import round_up_to_even


def format_strategy() -> st.SearchStrategy[SampleFormat]:
    """Generate any supported sample format."""
    return st.sampled_from(list(SampleFormat))


@st.composite
def channel_strategy(draw: st.DrawFn, fmt: SampleFormat, max_size: int = 64) -> list[float]:
    """Generate one channel of samples representable in ``fmt``."""
    width = 32 if fmt is SampleFormat.FLOAT_32 else 64
    return draw(
        st.lists(
            st.floats(
                min_value=-1.0,
                max_value=1.0,
                allow_nan=False,
                allow_infinity=False,
                width=width,
            ),
            max_size=max_size,
        )
    )


@st.composite
def wav_strategy(draw: st.DrawFn) -> Wav:
    """Generate a Wav with 1-4 channels of possibly different lengths."""
    fmt = draw(format_strategy())
    num_channels = draw(st.integers(min_value=1, max_value=4))
    channels = [draw(channel_strategy(fmt)) for _ in range(num_channels)]
    sample_rate = draw(st.integers(min_value=1, max_value=384000))
    return Wav(channels, sample_rate, format=fmt)


tag_strategy = st.text(
    alphabet=st.characters(min_codepoint=0x00, max_codepoint=0xFF), min_size=4, max_size=4
)
uint32_strategy = st.integers(min_value=0, max_value=0xFFFFFFFF)
aligned_data_strategy = st.binary(max_size=32).map(
    lambda b: b.ljust(4 * ((len(b) + 3) // 4), b"\x00")
)


class TestRoundTripProperties:
    """Round-trip properties of write_wav/read_wav."""

    @given(wav=wav_strategy())
    @settings(max_examples=100)
    def test_samples_roundtrip(self, wav: Wav) -> None:
        """Samples survive within one quantisation step (exactly for floats)."""
        decoded = read_wav(write_wav(wav))

        assert decoded.format is wav.format
        assert decoded.sample_rate == wav.sample_rate
        assert decoded.num_channels == wav.num_channels
        assert decoded.num_samples == wav.num_samples

        tolerance = 0.0 if wav.format.is_float else 2.0 ** -(wav.format.bits_per_sample - 1)
        for original, channel in zip(wav.channels, decoded.channels, strict=True):
            n = len(original)
            np.testing.assert_allclose(channel[:n], original, rtol=0, atol=tolerance)
            assert np.all(channel[n:] == 0.0)

    @given(wav=wav_strategy())
    @settings(max_examples=50)
    def test_declared_sizes_match_layout(self, wav: Wav) -> None:
        """The RIFF size and every chunk size agree with the bytes written."""
        data = write_wav(wav)

        assert struct.unpack("<I", data[4:8])[0] == len(data) - 8
        found = walk_chunks(data)
        last = found[-1]
        assert last.tag == "data"
        assert last.size == wav.num_samples * wav.num_channels * wav.format.bytes_per_sample
        assert last.offset + 8 + round_up_to_even(last.size) == len(data)


class TestMetadataProperties:
    """Round-trip properties of the metadata sub-codecs."""

    @given(values=st.lists(uint32_strategy, min_size=9, max_size=9))
    def test_sampler_roundtrip(self, values: list[int]) -> None:
        sampler = WavSampler(*values)
        wav = Wav([[0.0]], 8000, sampler=sampler)
        assert read_wav(write_wav(wav)).sampler == sampler

    @given(bpm=st.floats(min_value=0, max_value=999, width=32))
    def test_acid_roundtrip(self, bpm: float) -> None:
        wav = Wav([[0.0]], 8000, acid=WavAcid(bpm=bpm))
        assert read_wav(write_wav(wav)).acid == WavAcid(bpm=bpm)

    @given(entries=st.lists(st.tuples(tag_strategy, aligned_data_strategy), max_size=6))
    def test_list_roundtrip(self, entries: list[tuple[str, bytes]]) -> None:
        """Entries with 4-byte aligned data come back unchanged and in order."""
        info = WavList(chunks=[WavListChunk(tag=tag, data=data) for tag, data in entries])
        wav = Wav([[0.0]], 8000, info=info)
        assert read_wav(write_wav(wav)).info == info
