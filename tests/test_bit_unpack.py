import io

import pytest

from pixelsreader.bit_unpack import (
    FixedBitSizes,
    decode_bit_width,
    read_long_be,
    unrolled_unpack,
)
from pixelsreader.bit_utils import bit_wise_compact_be


def _be(values, num_bytes, signed=False):
    return b"".join(v.to_bytes(num_bytes, "big", signed=signed) for v in values)


def test_decode_small_widths_are_code_plus_one():
    for code in range(FixedBitSizes.ONE, FixedBitSizes.TWENTYFOUR + 1):
        assert decode_bit_width(code) == code + 1


@pytest.mark.parametrize(
    "code, width",
    [
        (FixedBitSizes.TWENTYSIX, 26),
        (FixedBitSizes.TWENTYEIGHT, 28),
        (FixedBitSizes.THIRTY, 30),
        (FixedBitSizes.THIRTYTWO, 32),
        (FixedBitSizes.FORTY, 40),
        (FixedBitSizes.FORTYEIGHT, 48),
        (FixedBitSizes.FIFTYSIX, 56),
        (FixedBitSizes.SIXTYFOUR, 64),
    ],
)
def test_decode_wide_widths(code, width):
    assert decode_bit_width(code) == width


def test_decode_unknown_code_falls_back_to_64():
    assert decode_bit_width(99) == 64


@pytest.mark.parametrize("length", [0, 1, 7, 8, 13, 16])
def test_one_bit_round_trip_with_bit_utils(length):
    values = [(i * 5 + 1) % 3 % 2 for i in range(length)]
    packed = bit_wise_compact_be(values)
    assert unrolled_unpack(packed, 1, length) == values


def test_two_bit_msb_first():
    assert unrolled_unpack(bytes([0b00011011]), 2, 4) == [0, 1, 2, 3]


def test_four_bit_remainder_uses_high_nibble():
    stream = io.BytesIO(bytes([0xAB, 0xCD, 0xEF]))
    result = unrolled_unpack(stream, 4, 5)
    assert result == [0xA, 0xB, 0xC, 0xD, 0xE]
    assert stream.tell() == 3


@pytest.mark.parametrize("num_bits", [8, 16, 24, 32, 40, 48, 56])
def test_whole_byte_round_trip(num_bits):
    num_bytes = num_bits // 8
    top = (1 << num_bits) - 1
    values = [0, 1, top, top // 3, top // 7, 5, top - 1, 2, top // 2, 9, 11]
    assert unrolled_unpack(_be(values, num_bytes), num_bits, len(values)) == values


def test_sixty_four_bit_values_are_signed():
    values = [-5, 0, 2**63 - 1, -(2**63), 42, -1, 7, 8, 9]
    data = _be(values, 8, signed=True)
    assert unrolled_unpack(data, 64, len(values)) == values


def test_trailing_bytes_left_in_stream():
    trailing = b"rest"
    stream = io.BytesIO(_be([300, 400, 500], 2) + trailing)
    assert unrolled_unpack(stream, 16, 3) == [300, 400, 500]
    assert stream.read() == trailing


def test_short_input_raises_eof():
    with pytest.raises(EOFError):
        unrolled_unpack(b"\x00\x01\x02", 16, 2)


def test_short_input_for_bits_raises_eof():
    with pytest.raises(EOFError):
        unrolled_unpack(b"\xff", 1, 9)


@pytest.mark.parametrize("num_bits", [0, 3, 12, 72])
def test_unsupported_width_raises(num_bits):
    with pytest.raises(ValueError):
        unrolled_unpack(b"\x00" * 16, num_bits, 1)


def test_negative_length_raises():
    with pytest.raises(ValueError):
        unrolled_unpack(b"\x00", 8, -1)


def test_zero_length_reads_nothing():
    stream = io.BytesIO(b"\x01\x02")
    assert unrolled_unpack(stream, 4, 0) == []
    assert stream.tell() == 0


def test_read_long_be_round_trip():
    values = [1, 65535, 256, 12345]
    assert read_long_be(_be(values, 3), 3) == values


def test_read_long_be_rejects_bad_width():
    with pytest.raises(ValueError):
        read_long_be(b"\x00" * 9, 9)


def test_read_long_be_rejects_partial_value():
    with pytest.raises(ValueError):
        read_long_be(b"\x00\x01\x02", 2)


def test_stream_reading_in_small_pieces():
    class Trickle(io.RawIOBase):
        def __init__(self, data):
            self._data = data

        def readable(self):
            return True

        def read(self, size=-1):
            piece, self._data = self._data[:1], self._data[1:]
            return piece

    values = [70000, 1, 2, 3, 4, 5, 6, 7, 8, 9]
    assert unrolled_unpack(Trickle(_be(values, 4)), 32, len(values)) == values