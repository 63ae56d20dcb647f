"""A batch of rows held as one column vector per column."""

from __future__ import annotations

from .column_vector import DEFAULT_SIZE, ColumnVector

__all__ = ["VectorizedRowBatch"]


class VectorizedRowBatch:
    """Rows of a batch, stored column-wise, with a read cursor."""

    DEFAULT_SIZE = DEFAULT_SIZE

    def __init__(self, num_cols: int, size: int = DEFAULT_SIZE) -> None:
        self.num_cols = num_cols
        self.row_count = 0
        self.current = 0
        self.max_size = size
        self.cols: list[ColumnVector | None] = [None] * num_cols
        self.closed = False

    def __enter__(self) -> VectorizedRowBatch:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _vectors(self):
        return (col for col in self.cols if col is not None)

    def count(self) -> int:
        """Number of rows that have not been filtered out."""
        return self.row_count

    def is_empty(self) -> bool:
        return self.row_count == 0

    def is_full(self) -> bool:
        return self.row_count >= self.max_size

    def free_slots(self) -> int:
        return self.max_size - self.row_count

    def close(self) -> None:
        if not self.closed:
            self.max_size = 0
            for col in self._vectors():
                col.close()
            self.cols.clear()
            self.closed = True

    def is_end_of_file(self) -> bool:
        return self.closed or self.current >= self.row_count

    def position(self) -> int:
        return self.current

    def reset(self) -> None:
        for col in self._vectors():
            col.reset()
        self.row_count = 0
        self.current = 0

    def resize(self, size: int) -> None:
        for col in self._vectors():
            col.resize(size)
        self.max_size = size

    def increment(self, size: int) -> None:
        self.current += size
        for col in self._vectors():
            col.increment(size)

    def remaining(self) -> int:
        return self.row_count - self.current