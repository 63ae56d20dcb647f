import pytest

from pixelsreader.schema import Category, TypeDescription
from pixelsreader.stats_recorder import (
    ColumnStatistic,
    StatsRecorder,
    UnsupportedUpdateError,
    create_stats_recorder,
)


def test_fresh_recorder_has_no_stats():
    recorder = StatsRecorder()
    assert recorder.number_of_values == 0
    assert recorder.has_null is False
    assert recorder.is_stats_exists() is False


def test_increment_default_and_count():
    recorder = StatsRecorder()
    recorder.increment()
    recorder.increment(4)
    assert recorder.number_of_values == 5
    assert recorder.is_stats_exists() is True


def test_null_alone_makes_stats_exist():
    recorder = StatsRecorder()
    recorder.set_has_null()
    assert recorder.has_null is True
    assert recorder.is_stats_exists() is True


def test_statistic_with_missing_fields_defaults():
    recorder = StatsRecorder(ColumnStatistic())
    assert recorder.number_of_values == 0
    assert recorder.has_null is True


def test_serialize_round_trip():
    recorder = StatsRecorder()
    recorder.increment(7)
    recorder.set_has_null()
    restored = StatsRecorder(recorder.serialize())
    assert restored.serialize() == recorder.serialize()
    assert restored.number_of_values == 7


def test_merge_adds_counts_and_ors_nulls():
    first = StatsRecorder(ColumnStatistic(3, False))
    second = StatsRecorder(ColumnStatistic(4, True))
    first.merge(second)
    assert first.number_of_values == 7
    assert first.has_null is True
    assert second.number_of_values == 4


def test_reset_clears():
    recorder = StatsRecorder(ColumnStatistic(9, True))
    recorder.reset()
    assert recorder.serialize() == ColumnStatistic(0, False)


@pytest.mark.parametrize(
    "call",
    [
        lambda r: r.update_boolean(True, 1),
        lambda r: r.update_integer(1, 1),
        lambda r: r.update_integer128(0, 1, 1),
        lambda r: r.update_float(1.0),
        lambda r: r.update_double(1.0),
        lambda r: r.update_string("a", 1),
        lambda r: r.update_binary("a", 1),
        lambda r: r.update_date(1),
        lambda r: r.update_time(1),
        lambda r: r.update_timestamp(1),
        lambda r: r.update_vector(),
    ],
)
def test_typed_updates_unsupported(call):
    with pytest.raises(UnsupportedUpdateError):
        call(StatsRecorder())


def test_create_from_category_and_type():
    stat = ColumnStatistic(2, False)
    by_category = create_stats_recorder(Category.INT, stat)
    by_type = create_stats_recorder(TypeDescription(Category.BOOLEAN), stat)
    assert by_category.serialize() == stat
    assert by_type.serialize() == stat


def test_create_without_statistic_is_empty():
    recorder = create_stats_recorder(Category.LONG)
    assert recorder.is_stats_exists() is False