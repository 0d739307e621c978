import io

import pytest
from bitarray import bitarray

from huffzip.bitio import BitReader, BitWriter
from huffzip.errors import StreamExhaustedError


def test_write_bits_msb_first_and_padding():
    sink = io.BytesIO()
    writer = BitWriter(sink)
    writer.write_bits("10110")
    assert sink.getvalue() == b""
    writer.flush()
    assert sink.getvalue() == bytes([0b10110000])
    assert writer.bytes_written == 1


def test_full_byte_is_emitted_immediately():
    sink = io.BytesIO()
    writer = BitWriter(sink)
    for bit in (1, 0, 0, 0, 0, 0, 0, 1):
        writer.write_bit(bit)
    assert sink.getvalue() == b"\x81"
    writer.write_bit(1)
    assert sink.getvalue() == b"\x81"


def test_flush_without_bits_writes_nothing():
    sink = io.BytesIO()
    writer = BitWriter(sink)
    writer.flush()
    writer.write_bits(bitarray("11111111"))
    writer.flush()
    assert sink.getvalue() == b"\xff"


class _RecordingSink(io.BytesIO):
    def close(self):
        self.closed_with = self.getvalue()
        super().close()


def test_close_flushes_and_closes_sink():
    sink = _RecordingSink()
    writer = BitWriter(sink)
    writer.write_bit(1)
    writer.close()
    assert sink.closed_with == b"\x80"
    assert sink.closed


def test_long_write_spanning_bytes():
    sink = io.BytesIO()
    writer = BitWriter(sink)
    writer.write_bits("1" * 12)
    writer.write_bits("0101")
    writer.flush()
    assert sink.getvalue() == b"\xff\xf5"


def test_read_bits_msb_first():
    reader = BitReader(io.BytesIO(b"\xa0\x01"))
    bits = [reader.read_bit() for _ in range(16)]
    assert bits == [1, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1]
    assert reader.bytes_read == 2


def test_read_past_end_raises():
    reader = BitReader(io.BytesIO(b"\x00"))
    for _ in range(8):
        reader.read_bit()
    with pytest.raises(StreamExhaustedError):
        reader.read_bit()


def test_reader_pulls_one_byte_at_a_time():
    source = io.BytesIO(b"\x80\x00")
    reader = BitReader(source)
    assert reader.read_bit() == 1
    assert source.tell() == 1
