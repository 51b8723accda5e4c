"""Unit tests for the RIFF byte cursor primitives."""

import struct

import pytest

from riffwav.format.riff import (
    BufferUnderrunError,
    BytesReader,
    BytesWriter,
    MalformedHeaderError,
    MissingChunkError,
    round_up_to_even,
)


class TestRoundUpToEven:
    """Tests for round_up_to_even."""

    @pytest.mark.parametrize(("n", "expected"), [(0, 0), (1, 2), (2, 2), (7, 8), (36, 36)])
    def test_values(self, n: int, expected: int) -> None:
        assert round_up_to_even(n) == expected


class TestBytesReader:
    """Tests for BytesReader."""

    def test_read_integers_little_endian(self) -> None:
        """Test that integers are decoded little-endian."""
        reader = BytesReader(b"\x01\x02\x01\x04\x03\x02\x01")
        assert reader.read_uint8() == 0x01
        assert reader.read_uint16() == 0x0102
        assert reader.read_uint32() == 0x01020304
        assert not reader.has_data

    def test_read_floats(self) -> None:
        """Test IEEE-754 float decoding."""
        reader = BytesReader(struct.pack("<fd", 0.5, -0.125))
        assert reader.read_float32() == 0.5
        assert reader.read_float64() == -0.125

    def test_read_string_and_bytes(self) -> None:
        """Test fixed-length string and raw byte reads."""
        reader = BytesReader(b"RIFF\x00\x01\x02")
        assert reader.read_string(4) == "RIFF"
        assert reader.read_bytes(3) == b"\x00\x01\x02"

    def test_read_string_keeps_non_ascii_bytes(self) -> None:
        """Test that every byte value survives a string read and write."""
        reader = BytesReader(b"I\xa9NM")
        tag = reader.read_string(4)
        assert tag == "I\u00a9NM"

        writer = BytesWriter()
        writer.write_string(tag)
        assert writer.take_bytes() == b"I\xa9NM"

    def test_position_and_remaining(self) -> None:
        """Test cursor bookkeeping."""
        reader = BytesReader(bytes(10))
        reader.skip(4)
        assert reader.position == 4
        assert reader.remaining == 6
        assert reader.has_data

    def test_read_past_end_raises(self) -> None:
        """Test that every read is bounds-checked."""
        reader = BytesReader(b"\x00\x00\x00")
        with pytest.raises(BufferUnderrunError) as exc_info:
            reader.read_uint32()
        assert exc_info.value.requested == 4
        assert exc_info.value.available == 3

    def test_skip_past_end_raises(self) -> None:
        """Test that skip is bounds-checked."""
        reader = BytesReader(b"\x00\x00")
        with pytest.raises(BufferUnderrunError):
            reader.skip(3)

    def test_failed_read_does_not_advance(self) -> None:
        """Test that a failed read leaves the cursor where it was."""
        reader = BytesReader(b"\x01\x02")
        with pytest.raises(BufferUnderrunError):
            reader.read_uint32()
        assert reader.read_uint16() == 0x0201

    def test_assert_string_match(self) -> None:
        """Test that a matching literal is consumed."""
        reader = BytesReader(b"WAVEfmt ")
        reader.assert_string("WAVE")
        assert reader.position == 4

    def test_assert_string_is_case_sensitive(self) -> None:
        """Test that assert_string requires an exact match."""
        reader = BytesReader(b"riff")
        with pytest.raises(MalformedHeaderError):
            reader.assert_string("RIFF")

    def test_find_chunk_skips_other_chunks(self) -> None:
        """Test that find_chunk skips non-matching chunks including pad bytes."""
        data = (
            b"junk" + struct.pack("<I", 3) + b"abc\x00"
            + b"bext" + struct.pack("<I", 2) + b"xy"
            + b"fmt " + struct.pack("<I", 16)
        )
        reader = BytesReader(data)
        reader.find_chunk("fmt ")
        assert reader.read_uint32() == 16

    def test_find_chunk_missing_raises(self) -> None:
        """Test that find_chunk fails once the buffer is exhausted."""
        reader = BytesReader(b"junk" + struct.pack("<I", 2) + b"ab")
        with pytest.raises(MissingChunkError) as exc_info:
            reader.find_chunk("fmt ")
        assert exc_info.value.tag == "fmt "

    def test_find_chunk_truncated_raises_missing(self) -> None:
        """Test that a truncated chunk during the scan reports the missing chunk."""
        reader = BytesReader(b"junk" + struct.pack("<I", 100) + b"ab")
        with pytest.raises(MissingChunkError):
            reader.find_chunk("fmt ")

    def test_missing_chunk_is_malformed_header(self) -> None:
        """Test the error hierarchy."""
        assert issubclass(MissingChunkError, MalformedHeaderError)


class TestBytesWriter:
    """Tests for BytesWriter."""

    def test_write_primitives(self) -> None:
        """Test that all primitives are written little-endian."""
        writer = BytesWriter()
        writer.write_uint8(0xAB)
        writer.write_uint16(0x0102)
        writer.write_uint32(0x01020304)
        writer.write_float32(0.5)
        writer.write_float64(-2.0)
        writer.write_string("data")
        writer.write_bytes(b"\x00\xff")

        expected = (
            b"\xab\x02\x01\x04\x03\x02\x01"
            + struct.pack("<fd", 0.5, -2.0)
            + b"data\x00\xff"
        )
        assert writer.take_bytes() == expected

    def test_take_bytes_resets(self) -> None:
        """Test that take_bytes hands over the buffer and starts a new one."""
        writer = BytesWriter()
        writer.write_string("RIFF")
        assert len(writer) == 4
        assert writer.take_bytes() == b"RIFF"
        assert writer.take_bytes() == b""

    def test_reader_reads_writer_output(self) -> None:
        """Test that reader and writer agree on layout."""
        writer = BytesWriter()
        writer.write_string("smpl")
        writer.write_uint32(36)
        writer.write_float32(120.0)

        reader = BytesReader(writer.take_bytes())
        assert reader.read_string(4) == "smpl"
        assert reader.read_uint32() == 36
        assert reader.read_float32() == 120.0
