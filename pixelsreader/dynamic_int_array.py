"""A growable integer array stored in fixed-size chunks."""

from __future__ import annotations

from collections.abc import Iterator

__all__ = ["DynamicIntArray", "DEFAULT_CHUNK_SIZE"]

DEFAULT_CHUNK_SIZE = 8 * 1024


class DynamicIntArray:
    """Integer array that grows chunk by chunk as elements are written."""

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._chunk_size = chunk_size
        self._chunks: list[list[int]] = []
        self._length = 0

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    def _grow(self, chunk_index: int) -> None:
        while len(self._chunks) <= chunk_index:
            self._chunks.append([0] * self._chunk_size)

    def _slot(self, index: int) -> tuple[int, int]:
        if index < 0:
            raise IndexError(f"Index {index} is outside of valid range.")
        chunk_index, offset = divmod(index, self._chunk_size)
        self._grow(chunk_index)
        if index >= self._length:
            self._length = index + 1
        return chunk_index, offset

    def __getitem__(self, index: int) -> int:
        if not 0 <= index < self._length:
            raise IndexError(f"Index {index} is outside of valid range.")
        chunk_index, offset = divmod(index, self._chunk_size)
        return self._chunks[chunk_index][offset]

    def __setitem__(self, index: int, value: int) -> None:
        chunk_index, offset = self._slot(index)
        self._chunks[chunk_index][offset] = value

    def increment(self, index: int, value: int) -> None:
        """Add ``value`` to the element at ``index``, growing the array if needed."""
        chunk_index, offset = self._slot(index)
        self._chunks[chunk_index][offset] += value

    def append(self, value: int) -> None:
        self[self._length] = value

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[int]:
        for index in range(self._length):
            yield self[index]

    def clear(self) -> None:
        self._chunks.clear()
        self._length = 0

    def __str__(self) -> str:
        return "{" + ",".join(str(v) for v in self) + "}"

    def to_list(self) -> list[int]:
        """Return the stored values as a flat list."""
        flat = [v for chunk in self._chunks for v in chunk]
        return flat[: self._length]