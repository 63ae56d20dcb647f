"""Encoding of integers into fixed bit-width packed runs."""

from __future__ import annotations

from collections.abc import Iterable
from typing import BinaryIO, Union

from .bit_unpack import FixedBitSizes

__all__ = [
    "encode_bit_width",
    "get_closest_fixed_bits",
    "unrolled_bit_pack",
    "write_int_le",
    "write_long_le",
    "write_int_be",
    "write_long_be",
]

_Sink = Union[BinaryIO, bytearray]

_CLOSEST_WIDE = ((26, 26), (28, 28), (30, 30), (32, 32), (40, 40), (48, 48), (56, 56))

_WIDE_CODES = {
    26: FixedBitSizes.TWENTYSIX,
    28: FixedBitSizes.TWENTYEIGHT,
    30: FixedBitSizes.THIRTY,
    32: FixedBitSizes.THIRTYTWO,
    40: FixedBitSizes.FORTY,
    48: FixedBitSizes.FORTYEIGHT,
    56: FixedBitSizes.FIFTYSIX,
}


def get_closest_fixed_bits(n: int) -> int:
    """Round a bit count up to the nearest width allowed in packed runs."""
    if n == 0:
        return 1
    if 1 <= n <= 24:
        return n
    if n > 24:
        for limit, width in _CLOSEST_WIDE:
            if n <= limit:
                return width
    return 64


def encode_bit_width(n: int) -> FixedBitSizes:
    """Return the width code for a bit count, rounded to an allowed width."""
    n = get_closest_fixed_bits(n)
    if 1 <= n <= 24:
        return FixedBitSizes(n - 1)
    return _WIDE_CODES.get(n, FixedBitSizes.SIXTYFOUR)


def _emit(output: _Sink, data: bytes) -> None:
    if isinstance(output, bytearray):
        output.extend(data)
    else:
        output.write(data)


def unrolled_bit_pack(values: Iterable[int], num_bits: int, output: _Sink) -> None:
    """Write ``values`` packed with ``num_bits`` bits each to ``output``.

    Widths of 1, 2 and 4 bits are packed from the most significant bit of
    each byte, with the last byte padded with zero bits; wider widths must
    be whole bytes and are written big-endian, keeping the low bytes of
    each value.
    """
    items = list(values)
    if num_bits in (1, 2, 4):
        per_byte = 8 // num_bits
        mask = (1 << num_bits) - 1
        packed = bytearray()
        for start in range(0, len(items), per_byte):
            current = 0
            shift = 8 - num_bits
            for value in items[start:start + per_byte]:
                current |= (value & mask) << shift
                shift -= num_bits
            packed.append(current & 0xFF)
        _emit(output, bytes(packed))
        return

    if num_bits % 8 == 0 and 8 <= num_bits <= 64:
        num_bytes = num_bits // 8
        mask = (1 << num_bits) - 1
        _emit(
            output,
            b"".join((v & mask).to_bytes(num_bytes, "big") for v in items),
        )
        return

    raise ValueError(f"unsupported bit width for packing: {num_bits}")


def write_int_le(output: _Sink, value: int) -> None:
    """Write the low 32 bits of ``value`` in little-endian order."""
    _emit(output, (value & 0xFFFFFFFF).to_bytes(4, "little"))


def write_long_le(output: _Sink, value: int) -> None:
    """Write the low 64 bits of ``value`` in little-endian order."""
    _emit(output, (value & 0xFFFFFFFFFFFFFFFF).to_bytes(8, "little"))


def write_int_be(output: _Sink, value: int) -> None:
    """Write the low 32 bits of ``value`` in big-endian order."""
    _emit(output, (value & 0xFFFFFFFF).to_bytes(4, "big"))


def write_long_be(output: _Sink, value: int) -> None:
    """Write the low 64 bits of ``value`` in big-endian order."""
    _emit(output, (value & 0xFFFFFFFFFFFFFFFF).to_bytes(8, "big"))