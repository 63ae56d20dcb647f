import pytest

from pixelsreader.bit_utils import (
    ByteOrder,
    bit_wise_compact,
    bit_wise_compact_be,
    bit_wise_compact_le,
)


def _unpack_le(data, count):
    return [bool((data[i // 8] >> (i % 8)) & 1) for i in range(count)]


def _unpack_be(data, count):
    return [bool((data[i // 8] >> (7 - i % 8)) & 1) for i in range(count)]


SAMPLES = [
    [],
    [True],
    [False, True, True],
    [True, False, True, False, True, True, False, False],
    [True, True, False, True, False, False, True, False, True, True, False],
    [bool(i % 3) for i in range(37)],
]


def test_single_true_little_endian_sets_lowest_bit():
    assert bit_wise_compact_le([True]) == b"\x01"


def test_single_true_big_endian_sets_highest_bit():
    assert bit_wise_compact_be([True]) == b"\x80"


def test_full_byte_of_true():
    assert bit_wise_compact([True] * 8) == b"\xff"


@pytest.mark.parametrize("values", SAMPLES)
def test_little_endian_round_trip(values):
    packed = bit_wise_compact_le(values)
    assert len(packed) == (len(values) + 7) // 8
    assert _unpack_le(packed, len(values)) == values


@pytest.mark.parametrize("values", SAMPLES)
def test_big_endian_round_trip(values):
    packed = bit_wise_compact_be(values)
    assert len(packed) == (len(values) + 7) // 8
    assert _unpack_be(packed, len(values)) == values


@pytest.mark.parametrize("values", SAMPLES)
def test_dispatch_matches_specific_functions(values):
    assert bit_wise_compact(values, None, ByteOrder.BIG_ENDIAN) == bit_wise_compact_be(values)
    assert bit_wise_compact(values, None, ByteOrder.LITTLE_ENDIAN) == bit_wise_compact_le(values)


def test_length_limits_values_used():
    values = [True, False, True, True, True, True, True, True, True, True]
    assert bit_wise_compact_le(values, 3) == bit_wise_compact_le(values[:3])
    assert bit_wise_compact_be(values, 3) == bit_wise_compact_be(values[:3])


def test_integer_values_are_accepted():
    assert bit_wise_compact_le([1, 0, 1, 1]) == bit_wise_compact_le([True, False, True, True])


def test_negative_length_rejected():
    with pytest.raises(ValueError):
        bit_wise_compact_le([True], -1)
    with pytest.raises(ValueError):
        bit_wise_compact_be([True], -1)


def test_length_beyond_values_rejected():
    with pytest.raises(ValueError):
        bit_wise_compact([True, False], 5, ByteOrder.BIG_ENDIAN)


def test_accepts_generators():
    values = [True, False, False, True, True]
    assert bit_wise_compact_le(v for v in values) == bit_wise_compact_le(values)