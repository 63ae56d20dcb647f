"""Decoding of fixed bit-width packed integers."""

from __future__ import annotations

import io
from enum import IntEnum
from typing import BinaryIO, Union

__all__ = [
    "FixedBitSizes",
    "decode_bit_width",
    "unrolled_unpack",
    "read_long_be",
]

_Source = Union[BinaryIO, bytes, bytearray, memoryview]


class FixedBitSizes(IntEnum):
    """Encoded codes of the bit widths allowed in packed runs."""

    ONE = 0
    TWO = 1
    THREE = 2
    FOUR = 3
    FIVE = 4
    SIX = 5
    SEVEN = 6
    EIGHT = 7
    NINE = 8
    TEN = 9
    ELEVEN = 10
    TWELVE = 11
    THIRTEEN = 12
    FOURTEEN = 13
    FIFTEEN = 14
    SIXTEEN = 15
    SEVENTEEN = 16
    EIGHTEEN = 17
    NINETEEN = 18
    TWENTY = 19
    TWENTYONE = 20
    TWENTYTWO = 21
    TWENTYTHREE = 22
    TWENTYFOUR = 23
    TWENTYSIX = 24
    TWENTYEIGHT = 25
    THIRTY = 26
    THIRTYTWO = 27
    FORTY = 28
    FORTYEIGHT = 29
    FIFTYSIX = 30
    SIXTYFOUR = 31


_WIDE_WIDTHS = {
    FixedBitSizes.TWENTYSIX: 26,
    FixedBitSizes.TWENTYEIGHT: 28,
    FixedBitSizes.THIRTY: 30,
    FixedBitSizes.THIRTYTWO: 32,
    FixedBitSizes.FORTY: 40,
    FixedBitSizes.FORTYEIGHT: 48,
    FixedBitSizes.FIFTYSIX: 56,
}


def decode_bit_width(n: int) -> int:
    """Return the number of bits that the encoded width code ``n`` stands for."""
    if FixedBitSizes.ONE <= n <= FixedBitSizes.TWENTYFOUR:
        return n + 1
    return _WIDE_WIDTHS.get(n, 64)


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            raise EOFError(
                f"expected {size} bytes, input ended after {size - remaining}"
            )
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def read_long_be(data: bytes, num_bytes: int) -> list[int]:
    """Decode consecutive big-endian integers, each ``num_bytes`` wide.

    Eight-byte values are read as signed 64-bit integers; narrower values
    are unsigned.
    """
    if not 1 <= num_bytes <= 8:
        raise ValueError(f"num_bytes must be between 1 and 8, got {num_bytes}")
    data = bytes(data)
    if len(data) % num_bytes:
        raise ValueError(
            f"data length {len(data)} is not a multiple of {num_bytes}"
        )
    signed = num_bytes == 8
    return [
        int.from_bytes(data[start:start + num_bytes], "big", signed=signed)
        for start in range(0, len(data), num_bytes)
    ]


def unrolled_unpack(stream: _Source, num_bits: int, length: int) -> list[int]:
    """Read ``length`` values packed with ``num_bits`` bits each.

    Widths of 1, 2 and 4 bits are packed from the most significant bit of
    each byte; wider widths must be whole bytes and are stored big-endian.
    """
    if isinstance(stream, (bytes, bytearray, memoryview)):
        stream = io.BytesIO(bytes(stream))
    if length < 0:
        raise ValueError("length must be non-negative")

    if num_bits in (1, 2, 4):
        per_byte = 8 // num_bits
        data = _read_exact(stream, -(-length // per_byte))
        mask = (1 << num_bits) - 1
        values = [
            (byte >> shift) & mask
            for byte in data
            for shift in range(8 - num_bits, -1, -num_bits)
        ]
        return values[:length]

    if num_bits % 8 == 0 and 8 <= num_bits <= 64:
        num_bytes = num_bits // 8
        return read_long_be(_read_exact(stream, length * num_bytes), num_bytes)

    raise ValueError(f"unsupported bit width for unpacking: {num_bits}")