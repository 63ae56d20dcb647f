"""Packing of boolean sequences into bit-wise compacted bytes."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

__all__ = [
    "ByteOrder",
    "bit_wise_compact",
    "bit_wise_compact_le",
    "bit_wise_compact_be",
]


class ByteOrder(Enum):
    """Bit order used inside each compacted byte."""

    LITTLE_ENDIAN = "little"
    BIG_ENDIAN = "big"


def _prepare(values: Iterable, length: int | None) -> list[int]:
    items = list(values)
    if length is None:
        length = len(items)
    if length < 0:
        raise ValueError("length must be non-negative")
    if length > len(items):
        raise ValueError(
            f"length {length} exceeds the number of values ({len(items)})"
        )
    return [int(v) for v in items[:length]]


def _compact(items: list[int], big_endian: bool) -> bytes:
    out = bytearray()
    for start in range(0, len(items), 8):
        current = 0
        for position, value in enumerate(items[start:start + 8]):
            shift = 7 - position if big_endian else position
            current |= value << shift
        out.append(current & 0xFF)
    return bytes(out)


def bit_wise_compact_le(values: Iterable, length: int | None = None) -> bytes:
    """Pack values into bytes, the first value going into the lowest bit."""
    return _compact(_prepare(values, length), big_endian=False)


def bit_wise_compact_be(values: Iterable, length: int | None = None) -> bytes:
    """Pack values into bytes, the first value going into the highest bit."""
    return _compact(_prepare(values, length), big_endian=True)


def bit_wise_compact(
    values: Iterable,
    length: int | None = None,
    byte_order: ByteOrder = ByteOrder.LITTLE_ENDIAN,
) -> bytes:
    """Pack the first ``length`` values using the given bit order."""
    if byte_order is ByteOrder.BIG_ENDIAN:
        return bit_wise_compact_be(values, length)
    return bit_wise_compact_le(values, length)