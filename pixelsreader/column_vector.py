"""In-memory column vectors that hold one batch of values per column."""

from __future__ import annotations

from array import array
from enum import Enum

__all__ = [
    "DEFAULT_SIZE",
    "InvalidArgumentError",
    "ColumnVector",
    "ByteColumnVector",
    "BinaryColumnVector",
    "LongColumnVector",
    "DateColumnVector",
    "PhysicalType",
    "DecimalColumnVector",
    "TimestampColumnVector",
]

# Chosen so that one row batch typically fits in cache.
DEFAULT_SIZE = 1024

_INT16_MAX_WIDTH = 4
_INT32_MAX_WIDTH = 9
_INT64_MAX_WIDTH = 18
_INT128_MAX_WIDTH = 38


class InvalidArgumentError(ValueError):
    """Raised when a vector is asked to do something it does not support."""


def _zeros(typecode: str, count: int) -> array:
    return array(typecode, bytes(count * array(typecode).itemsize))


def _grown(old, typecode: str, size: int, keep: int, preserve: bool) -> array:
    new = _zeros(typecode, size)
    if preserve and old is not None:
        count = min(keep, len(old), size)
        new[:count] = array(typecode, old[:count])
    return new


def _valid_bytes(length: int) -> int:
    # The validity bitmap is kept in whole 64-bit words.
    return -(-length // 64) * 8


def _wrap(value: int, bits: int) -> int:
    half = 1 << (bits - 1)
    return ((value + half) % (1 << bits)) - half


class ColumnVector:
    """Base column vector: null flags, validity bitmap and read/write cursors."""

    def __init__(self, length: int = DEFAULT_SIZE, encoding: bool = True) -> None:
        self.length = length
        self.encoding = encoding
        self.write_index = 0
        self.read_index = 0
        self.memory_usage = length + 4 * 3 + 4
        self.closed = False
        self.is_null = bytearray(length)
        self.no_nulls = True
        self.is_valid: bytearray | None = bytearray(_valid_bytes(length))

    def close(self) -> None:
        if not self.closed:
            self.write_index = 0
            self.closed = True
            self.is_valid = None

    def reset(self) -> None:
        self.write_index = 0
        self.read_index = 0

    def print(self, row_count: int) -> None:
        raise InvalidArgumentError(
            "This columnVector doesn't implement this function."
        )

    def increment(self, size: int) -> None:
        self.read_index += size

    def is_full(self) -> bool:
        return self.read_index >= self.length

    def position(self) -> int:
        return self.read_index

    def resize(self, size: int) -> None:
        """Shrink the logical length; growing is not allowed."""
        if self.length < size:
            raise InvalidArgumentError(
                "column vector can only be resized to a smaller vector. "
            )
        self.length = size

    def check_valid(self, index: int) -> bool:
        byte_index, bit_index = divmod(index, 8)
        return bool(self.is_valid[byte_index] & (1 << bit_index))

    def _next_write_slot(self) -> int:
        if self.write_index >= self.length:
            self.ensure_size(max(self.write_index * 2, 1), True)
        index = self.write_index
        self.write_index += 1
        return index

    def add_null(self) -> None:
        index = self._next_write_slot()
        self.is_null[index] = 1
        self.no_nulls = False

    def ensure_size(self, size: int, preserve_data: bool = False) -> None:
        """Grow the vector to hold at least ``size`` elements."""
        if self.length >= size:
            return
        old_null = self.is_null
        self.is_null = bytearray(size)
        if preserve_data and not self.no_nulls:
            count = min(self.length, len(old_null))
            self.is_null[:count] = bytes(old_null[:count])
        old_valid = self.is_valid
        self.is_valid = bytearray(_valid_bytes(size))
        if preserve_data and old_valid is not None:
            self.is_valid[: len(old_valid)] = old_valid
        self.length = size

    def add(self, value) -> None:
        if isinstance(value, str):
            kind = "string"
        elif isinstance(value, bool):
            kind = "boolean"
        elif isinstance(value, int):
            kind = "long"
        else:
            kind = type(value).__name__
        raise TypeError(f"Adding {kind} is not supported")


class ByteColumnVector(ColumnVector):
    """Column of single bytes."""

    def __init__(self, length: int = DEFAULT_SIZE, encoding: bool = True) -> None:
        super().__init__(length, encoding)
        self.vector: bytearray | None = bytearray(length)
        self.memory_usage += length

    def close(self) -> None:
        if not self.closed:
            super().close()
            self.vector = None


class BinaryColumnVector(ColumnVector):
    """Column of byte strings, each usually a view into a shared buffer."""

    def __init__(self, length: int = DEFAULT_SIZE, encoding: bool = True) -> None:
        super().__init__(length, encoding)
        self.vector: list | None = [None] * length
        self.memory_usage += length

    def close(self) -> None:
        if not self.closed:
            super().close()
            self.vector = None

    def set_ref(self, element_num: int, source, start: int, length: int) -> None:
        """Store a view of ``source[start:start + length]`` without copying."""
        if element_num >= self.write_index:
            self.write_index = element_num + 1
        self.vector[element_num] = memoryview(source)[start:start + length]

    def print(self, row_count: int) -> None:
        raise InvalidArgumentError("not support print binarycolumnvector.")

    def current(self):
        """Values from the read position on, or None without storage."""
        if self.vector is None:
            return None
        return self.vector[self.read_index:]

    def ensure_size(self, size: int, preserve_data: bool = False) -> None:
        old_length = self.length
        if old_length >= size:
            return
        super().ensure_size(size, preserve_data)
        old = self.vector or []
        kept = list(old[:old_length]) if preserve_data else []
        self.vector = kept + [None] * (size - len(kept))

    def add(self, value) -> None:
        if isinstance(value, str):
            value = value.encode("utf-8")
        elif not isinstance(value, (bytes, bytearray, memoryview)):
            super().add(value)
        index = self._next_write_slot()
        self.vector[index] = bytes(value)
        self.is_null[index] = 0


class LongColumnVector(ColumnVector):
    """Column of 64-bit integers, or 32-bit ones when ``is_long`` is false."""

    def __init__(
        self, length: int = DEFAULT_SIZE, encoding: bool = True, is_long: bool = True
    ) -> None:
        super().__init__(length, encoding)
        self.is_long = is_long
        if is_long:
            self.long_vector: array | None = _zeros("q", length)
            self.int_vector: array | None = None
        else:
            self.long_vector = None
            self.int_vector = _zeros("i", length)
        self.memory_usage += 8 * length

    def close(self) -> None:
        if not self.closed:
            super().close()
            self.long_vector = None
            self.int_vector = None

    def print(self, row_count: int) -> None:
        raise InvalidArgumentError("not support print longcolumnvector.")

    def current(self):
        """Values from the read position on, or None without storage."""
        values = self.long_vector if self.is_long else self.int_vector
        if values is None:
            return None
        return values[self.read_index:]

    def add(self, value) -> None:
        """Append an int, a bool, or a string holding "true", "false" or an integer."""
        if isinstance(value, bool):
            value = int(value)
        elif isinstance(value, str):
            lowered = value.lower()
            if lowered == "true":
                value = 1
            elif lowered == "false":
                value = 0
            else:
                value = int(lowered)
        elif not isinstance(value, int):
            super().add(value)
        index = self._next_write_slot()
        if self.is_long:
            self.long_vector[index] = _wrap(value, 64)
        else:
            self.int_vector[index] = _wrap(value, 32)
        self.is_null[index] = 0

    def ensure_size(self, size: int, preserve_data: bool = False) -> None:
        old_length = self.length
        if old_length >= size:
            return
        super().ensure_size(size, preserve_data)
        if self.is_long:
            self.long_vector = _grown(
                self.long_vector, "q", size, old_length, preserve_data
            )
            self.memory_usage += 8 * (size - old_length)
        else:
            self.int_vector = _grown(
                self.int_vector, "i", size, old_length, preserve_data
            )
            self.memory_usage += 4 * (size - old_length)


class DateColumnVector(ColumnVector):
    """Column of dates stored as days since 1970-01-01 UTC."""

    def __init__(self, length: int = DEFAULT_SIZE, encoding: bool = True) -> None:
        super().__init__(length, encoding)
        self.dates: array | None = _zeros("i", length) if encoding else None
        self.memory_usage += 4 * length

    def close(self) -> None:
        if not self.closed:
            self.dates = None
            super().close()

    def print(self, row_count: int) -> None:
        for days in self.dates[:row_count]:
            print(days)

    def set(self, element_num: int, days: int) -> None:
        if element_num >= self.write_index:
            self.write_index = element_num + 1
        self.dates[element_num] = days

    def current(self):
        """Values from the read position on, or None without storage."""
        if self.dates is None:
            return None
        return self.dates[self.read_index:]


class PhysicalType(Enum):
    """Integer width that holds a decimal's unscaled value."""

    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    INT128 = "int128"


class DecimalColumnVector(ColumnVector):
    """Column of decimals stored as unscaled integers.

    The unscaled value of 3.14 as decimal(3,2) is 314. Precisions up to 9
    are stored in owned arrays; wider ones expect the reader to supply the
    values.
    """

    def __init__(
        self, length: int, precision: int, scale: int, encoding: bool = True
    ) -> None:
        super().__init__(length, encoding)
        self.precision = precision
        self.scale = scale
        self.vector: array | None = None
        if precision <= _INT16_MAX_WIDTH:
            self.physical_type = PhysicalType.INT16
            self.vector = _zeros("h", length)
            self.memory_usage += 2 * length
        elif precision <= _INT32_MAX_WIDTH:
            self.physical_type = PhysicalType.INT32
            self.vector = _zeros("i", length)
            self.memory_usage += 4 * length
        elif precision <= _INT64_MAX_WIDTH:
            self.physical_type = PhysicalType.INT64
            self.memory_usage += 8 * length
        elif precision <= _INT128_MAX_WIDTH:
            self.physical_type = PhysicalType.INT128
            self.memory_usage += 8 * length
        else:
            raise ValueError(
                "Decimal precision is bigger than the maximum supported width"
            )

    def close(self) -> None:
        if not self.closed:
            super().close()
            self.vector = None

    def print(self, row_count: int) -> None:
        if self.vector is None:
            raise InvalidArgumentError("decimal column vector holds no values")
        for value in self.vector[:row_count]:
            print(value)

    def current(self):
        """Values from the read position on, or None without storage."""
        if self.vector is None:
            return None
        return self.vector[self.read_index:]


class TimestampColumnVector(ColumnVector):
    """Column of timestamps stored as 64-bit integers."""

    def __init__(self, length: int, precision: int, encoding: bool = True) -> None:
        super().__init__(length, encoding)
        self.precision = precision
        self.times: array | None = _zeros("q", length) if encoding else None

    def close(self) -> None:
        if not self.closed:
            super().close()
            self.times = None

    def print(self, row_count: int) -> None:
        raise InvalidArgumentError("not support print timestampcolumnvector.")

    def set(self, element_num: int, ts: int) -> None:
        if element_num >= self.write_index:
            self.write_index = element_num + 1
        self.times[element_num] = ts

    def current(self):
        """Values from the read position on, or None without storage."""
        if self.times is None:
            return None
        return self.times[self.read_index:]