"""Readers that decode one column chunk into a column vector."""

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from array import array
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Protocol

from .column_vector import (
    ColumnVector,
    DateColumnVector,
    DecimalColumnVector,
    InvalidArgumentError,
    LongColumnVector,
    PhysicalType,
    TimestampColumnVector,
)
from .schema import Category, TypeDescription
from .stats_recorder import ColumnStatistic

__all__ = [
    "EncodingKind",
    "ColumnEncoding",
    "ColumnChunkIndex",
    "ChunkBuffer",
    "Decoder",
    "DecoderFactory",
    "ColumnReader",
    "IntegerColumnReader",
    "DateColumnReader",
    "TimestampColumnReader",
    "DecimalColumnReader",
]


class EncodingKind(IntEnum):
    """How the values of a column chunk are encoded."""

    NONE = 0
    RUNLENGTH = 1
    DICTIONARY = 2


@dataclass
class ColumnEncoding:
    """Encoding of a column chunk, optionally with a cascaded encoding."""

    kind: EncodingKind = EncodingKind.NONE
    cascade_encoding: Optional[ColumnEncoding] = None
    dictionary_size: Optional[int] = None

    @property
    def cascades_run_length(self) -> bool:
        return (
            self.cascade_encoding is not None
            and self.cascade_encoding.kind is EncodingKind.RUNLENGTH
        )


@dataclass
class ColumnChunkIndex:
    """Location of a column chunk and the statistics of each of its pixels."""

    chunk_offset: int = 0
    chunk_length: int = 0
    is_null_offset: int = 0
    pixel_statistics: list[ColumnStatistic] = field(default_factory=list)
    nulls_padding: bool = False
    little_endian: bool = True

    def pixel_has_null(self, pixel_id: int) -> bool:
        """Whether the pixel holds a null; an unset flag counts as false."""
        return bool(self.pixel_statistics[pixel_id].has_null)


class ChunkBuffer:
    """Little-endian byte reader over the bytes of a column chunk."""

    def __init__(self, data=b"") -> None:
        self.data = memoryview(data).cast("B")
        self.position = 0
        self._mark = 0

    def __len__(self) -> int:
        return len(self.data)

    def _check(self, size: int) -> None:
        if size < 0 or size > self.remaining():
            raise EOFError(
                f"cannot take {size} bytes at position {self.position}, "
                f"{self.remaining()} remain"
            )

    def read(self, size: int) -> bytes:
        """Return the next ``size`` bytes and move past them."""
        self._check(size)
        chunk = bytes(self.data[self.position:self.position + size])
        self.position += size
        return chunk

    def read_int(self) -> int:
        """Read a signed 32-bit little-endian integer."""
        return struct.unpack("<i", self.read(4))[0]

    def skip(self, count: int) -> None:
        self._check(count)
        self.position += count

    def remaining(self) -> int:
        return len(self.data) - self.position

    def mark(self) -> None:
        self._mark = self.position

    def reset_to_mark(self) -> None:
        self.position = self._mark

    def slice(self, start: int, length: int) -> ChunkBuffer:
        """A new buffer over ``length`` bytes from ``start``, sharing the data."""
        if start < 0 or length < 0 or start + length > len(self.data):
            raise EOFError(
                f"slice [{start}, {start + length}) is outside a buffer "
                f"of {len(self.data)} bytes"
            )
        return ChunkBuffer(self.data[start:start + length])


class Decoder(Protocol):
    def next(self) -> int: ...

    def has_next(self) -> bool: ...


DecoderFactory = Callable[[ChunkBuffer, bool], Decoder]


def _to_signed(value: int, bits: int) -> int:
    half = 1 << (bits - 1)
    return ((value + half) % (1 << bits)) - half


def _unpack(buffer: ChunkBuffer, code: str, count: int) -> tuple:
    fmt = f"<{count}{code}"
    return struct.unpack(fmt, buffer.read(struct.calcsize(fmt)))


class ColumnReader(ABC):
    """Reads values of one column chunk, pixel by pixel, into column vectors.

    Run-length decoding is delegated to ``decoder_factory``, called with the
    buffer to decode and whether the values are signed.
    """

    def __init__(
        self,
        type_: TypeDescription,
        decoder_factory: DecoderFactory | None = None,
    ) -> None:
        self.type = type_
        self.decoder_factory = decoder_factory
        self.element_index = 0
        self.is_null_offset = 0
        self.decoder: Decoder | None = None

    def read(
        self,
        input: ChunkBuffer,
        encoding: ColumnEncoding,
        offset: int,
        size: int,
        pixel_stride: int,
        vector_index: int,
        vector: ColumnVector,
        chunk_index: ColumnChunkIndex,
        filter_mask: Sequence[bool] | None = None,
    ) -> None:
        """Read ``size`` values from the chunk into ``vector`` at ``vector_index``.

        Reading at ``offset`` 0 restarts from the beginning of the chunk.
        """
        self._check_request(offset, size, pixel_stride, vector)
        if offset == 0:
            self._start(input, encoding, chunk_index)
        pixel_id = self.element_index // pixel_stride
        self.set_valid(
            input, pixel_stride, vector, pixel_id,
            chunk_index.pixel_has_null(pixel_id),
        )
        self._read_values(
            input, encoding, size, pixel_stride, vector_index, vector,
            chunk_index, filter_mask,
        )

    def set_valid(
        self,
        input: ChunkBuffer,
        pixel_stride: int,
        vector: ColumnVector,
        pixel_id: int,
        has_null: bool,
    ) -> None:
        """Fill the vector's validity bitmap from the chunk's null bitmap."""
        elements = min(pixel_stride, vector.length)
        byte_size = -(-elements // 8)
        start = self.is_null_offset
        nulls = bytes(input.data[start:start + byte_size])
        vector.is_null = bytearray(nulls)
        if has_null:
            if len(nulls) < byte_size:
                raise EOFError(
                    f"null bitmap at {start} needs {byte_size} bytes, "
                    f"only {len(nulls)} available"
                )
            vector.is_valid[:byte_size] = bytes(~b & 0xFF for b in nulls)
            self.is_null_offset += byte_size
        else:
            vector.is_valid[:byte_size] = b"\xff" * byte_size

    def close(self) -> None:
        self.decoder = None

    def _check_request(
        self, offset: int, size: int, pixel_stride: int, vector: ColumnVector
    ) -> None:
        pass

    def _start(
        self,
        input: ChunkBuffer,
        encoding: ColumnEncoding,
        chunk_index: ColumnChunkIndex,
    ) -> None:
        self.element_index = 0
        self.is_null_offset = chunk_index.is_null_offset

    def _new_decoder(self, input: ChunkBuffer, signed: bool) -> Decoder | None:
        if self.decoder_factory is None:
            return None
        return self.decoder_factory(input, signed)

    def _require_decoder(self) -> Decoder:
        if self.decoder is None:
            raise InvalidArgumentError(
                "run-length encoded data needs a decoder factory"
            )
        return self.decoder

    @abstractmethod
    def _read_values(
        self,
        input: ChunkBuffer,
        encoding: ColumnEncoding,
        size: int,
        pixel_stride: int,
        vector_index: int,
        vector: ColumnVector,
        chunk_index: ColumnChunkIndex,
        filter_mask: Sequence[bool] | None,
    ) -> None:
        """Decode ``size`` values into ``vector``."""


class IntegerColumnReader(ColumnReader):
    """Reader of short, int and long columns."""

    def __init__(self, type_, decoder_factory=None) -> None:
        super().__init__(type_, decoder_factory)
        self.is_long = False

    def _check_request(self, offset, size, pixel_stride, vector) -> None:
        if size > 0 and offset // pixel_stride != (offset + size - 1) // pixel_stride:
            raise InvalidArgumentError(
                f"rows [{offset}, {offset + size}) span more than one pixel"
            )

    def _start(self, input, encoding, chunk_index) -> None:
        super()._start(input, encoding, chunk_index)
        self.decoder = self._new_decoder(input, True)
        self.is_long = self.type.category is Category.LONG

    def _read_values(
        self, input, encoding, size, pixel_stride, vector_index, vector: LongColumnVector,
        chunk_index, filter_mask,
    ) -> None:
        target = vector.long_vector if self.is_long else vector.int_vector
        code, bits = ("q", 64) if self.is_long else ("i", 32)
        if encoding.kind is EncodingKind.RUNLENGTH:
            decoder = self._require_decoder()
            for index in range(vector_index, vector_index + size):
                target[index] = _to_signed(decoder.next(), bits)
                self.element_index += 1
        else:
            target[vector_index:vector_index + size] = array(
                code, _unpack(input, code, size)
            )


class DateColumnReader(ColumnReader):
    """Reader of date columns, stored as days since the epoch."""

    def _start(self, input, encoding, chunk_index) -> None:
        super()._start(input, encoding, chunk_index)
        self.decoder = self._new_decoder(input, True)

    def _read_values(
        self, input, encoding, size, pixel_stride, vector_index, vector: DateColumnVector,
        chunk_index, filter_mask,
    ) -> None:
        if encoding.kind is EncodingKind.RUNLENGTH:
            decoder = self._require_decoder()
            for index in range(vector_index, vector_index + size):
                vector.set(index, _to_signed(decoder.next(), 32))
                self.element_index += 1
        else:
            vector.dates = array("i", _unpack(input, "i", size))


class TimestampColumnReader(ColumnReader):
    """Reader of timestamp columns, stored as 64-bit integers."""

    def _start(self, input, encoding, chunk_index) -> None:
        super()._start(input, encoding, chunk_index)
        self.decoder = self._new_decoder(input, True)

    def _read_values(
        self, input, encoding, size, pixel_stride, vector_index,
        vector: TimestampColumnVector, chunk_index, filter_mask,
    ) -> None:
        if encoding.kind is EncodingKind.RUNLENGTH:
            decoder = self._require_decoder()
            for index in range(vector_index, vector_index + size):
                vector.set(index, _to_signed(decoder.next(), 64))
                self.element_index += 1
        else:
            vector.times = array("q", _unpack(input, "q", size))


class DecimalColumnReader(ColumnReader):
    """Reader of short decimals, each stored as an 8-byte unscaled value."""

    def _check_request(self, offset, size, pixel_stride, vector: DecimalColumnVector) -> None:
        if (
            self.type.precision != vector.precision
            or self.type.scale != vector.scale
        ):
            raise InvalidArgumentError(
                f"reader of decimal({self.type.precision},{self.type.scale}) "
                f"doesn't match the column vector of "
                f"decimal({vector.precision},{vector.scale})"
            )

    def _read_values(
        self, input, encoding, size, pixel_stride, vector_index,
        vector: DecimalColumnVector, chunk_index, filter_mask,
    ) -> None:
        if vector.physical_type in (PhysicalType.INT16, PhysicalType.INT32):
            code = "<h" if vector.physical_type is PhysicalType.INT16 else "<i"
            for index in range(vector_index, vector_index + size):
                vector.vector[index] = struct.unpack_from(code, input.read(8))[0]
        else:
            vector.vector = array("q", _unpack(input, "q", size))