import pytest

from pixelsreader.column_vector import DEFAULT_SIZE, InvalidArgumentError, LongColumnVector
from pixelsreader.row_batch import VectorizedRowBatch


def _batch(size=8):
    batch = VectorizedRowBatch(2, size)
    batch.cols[0] = LongColumnVector(size)
    batch.cols[1] = LongColumnVector(size)
    return batch


def test_new_batch_is_empty():
    batch = VectorizedRowBatch(3)
    assert batch.max_size == DEFAULT_SIZE
    assert batch.is_empty()
    assert batch.count() == 0
    assert len(batch.cols) == 3


def test_free_slots_and_full():
    batch = _batch()
    batch.row_count = 5
    assert batch.free_slots() == batch.max_size - batch.row_count
    assert not batch.is_full()
    batch.row_count = batch.max_size
    assert batch.is_full()
    assert batch.free_slots() == 0


def test_increment_moves_batch_and_columns():
    batch = _batch()
    batch.row_count = 6
    batch.increment(4)
    assert batch.position() == 4
    assert batch.remaining() == batch.row_count - batch.position()
    assert all(col.position() == 4 for col in batch.cols)
    assert not batch.is_end_of_file()
    batch.increment(2)
    assert batch.is_end_of_file()


def test_reset_clears_counts_and_columns():
    batch = _batch()
    batch.row_count = 5
    batch.increment(3)
    batch.reset()
    assert batch.count() == 0
    assert batch.position() == 0
    assert all(col.position() == 0 for col in batch.cols)


def test_resize_shrinks_columns():
    batch = _batch(8)
    batch.resize(4)
    assert batch.max_size == 4
    assert [col.length for col in batch.cols] == [4, 4]
    with pytest.raises(InvalidArgumentError):
        batch.resize(16)


def test_close_closes_columns():
    batch = _batch()
    cols = list(batch.cols)
    batch.close()
    assert batch.closed
    assert batch.max_size == 0
    assert batch.cols == []
    assert all(col.closed for col in cols)
    assert batch.is_end_of_file()


def test_context_manager_closes():
    with _batch() as batch:
        col = batch.cols[0]
    assert batch.closed
    assert col.closed