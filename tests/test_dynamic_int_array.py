import pytest

from pixelsreader.dynamic_int_array import DynamicIntArray


def test_empty_array():
    array = DynamicIntArray(4)
    assert len(array) == 0
    assert array.to_list() == []
    assert str(array) == "{}"


def test_append_across_chunks():
    array = DynamicIntArray(4)
    values = list(range(10, 21))
    for v in values:
        array.append(v)
    assert len(array) == len(values)
    assert array.to_list() == values
    assert [array[i] for i in range(len(values))] == values
    assert list(array) == values


def test_str_format():
    array = DynamicIntArray(2)
    for v in (1, 2, 3):
        array.append(v)
    assert str(array) == "{1,2,3}"


def test_get_out_of_range_raises():
    array = DynamicIntArray(4)
    array.append(7)
    with pytest.raises(IndexError):
        array[1]
    with pytest.raises(IndexError):
        array[-1]
    assert len(array) == 1
    assert array.to_list() == [7]


def test_set_extends_length():
    array = DynamicIntArray(4)
    array[9] = 42
    assert len(array) == 10
    assert array[9] == 42
    array[2] = 5
    assert len(array) == 10
    assert array[2] == 5


def test_set_negative_index_raises():
    array = DynamicIntArray(4)
    with pytest.raises(IndexError):
        array[-3] = 1
    assert len(array) == 0
    assert array.to_list() == []


def test_increment_accumulates():
    array = DynamicIntArray(3)
    array[4] = 10
    array.increment(4, 5)
    array.increment(4, -2)
    assert array[4] == 13
    array.increment(7, 3)
    assert len(array) == 8
    assert array[7] == 3


def test_append_after_set_continues_at_end():
    array = DynamicIntArray(4)
    array[5] = 1
    array.append(99)
    assert len(array) == 7
    assert array[6] == 99


def test_clear_resets():
    array = DynamicIntArray(4)
    for v in range(9):
        array.append(v)
    array.clear()
    assert len(array) == 0
    assert array.to_list() == []
    array.append(3)
    assert array.to_list() == [3]


def test_invalid_chunk_size():
    with pytest.raises(ValueError):
        DynamicIntArray(0)


def test_default_chunk_size_round_trip():
    array = DynamicIntArray()
    values = [i * i for i in range(50)]
    for v in values:
        array.append(v)
    assert array.to_list() == values