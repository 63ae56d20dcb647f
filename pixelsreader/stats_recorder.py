"""Column statistics recording."""

from __future__ import annotations

from dataclasses import dataclass

from .schema import Category, TypeDescription

__all__ = [
    "ColumnStatistic",
    "StatsRecorder",
    "UnsupportedUpdateError",
    "create_stats_recorder",
]


@dataclass
class ColumnStatistic:
    """Serialized column statistic; ``None`` marks a field that is not set."""

    number_of_values: int | None = None
    has_null: bool | None = None


class UnsupportedUpdateError(TypeError):
    """Raised when a recorder is updated with a value kind it cannot track."""


class StatsRecorder:
    """Counts values and records whether any null was seen."""

    def __init__(self, statistic: ColumnStatistic | None = None) -> None:
        if statistic is None:
            self.number_of_values = 0
            self.has_null = False
        else:
            self.number_of_values = (
                statistic.number_of_values
                if statistic.number_of_values is not None
                else 0
            )
            self.has_null = (
                statistic.has_null if statistic.has_null is not None else True
            )

    def _reject(self, kind: str) -> None:
        """Refuse an update of a value kind this recorder does not track."""
        message = f"Can't update {kind}"
        raise UnsupportedUpdateError(message)

    def increment(self, count: int = 1) -> None:
        self.number_of_values += count

    def set_has_null(self) -> None:
        self.has_null = True

    def update_boolean(self, value, repetitions) -> None:
        self._reject("boolean")

    def update_integer(self, value, repetitions) -> None:
        self._reject("integer")

    def update_integer128(self, high, low, repetitions) -> None:
        self._reject("integer128")

    def update_float(self, value) -> None:
        self._reject("float")

    def update_double(self, value) -> None:
        self._reject("double")

    def update_string(self, value, repetitions) -> None:
        self._reject("string")

    def update_binary(self, value, repetitions) -> None:
        self._reject("binary")

    def update_date(self, value) -> None:
        self._reject("date")

    def update_time(self, value) -> None:
        self._reject("time")

    def update_timestamp(self, value) -> None:
        self._reject("timestamp")

    def update_vector(self) -> None:
        self._reject("vector")

    def is_stats_exists(self) -> bool:
        return self.number_of_values > 0 or self.has_null

    def merge(self, other: StatsRecorder) -> None:
        self.number_of_values += other.number_of_values
        self.has_null = self.has_null or other.has_null

    def reset(self) -> None:
        self.number_of_values = 0
        self.has_null = False

    def serialize(self) -> ColumnStatistic:
        return ColumnStatistic(self.number_of_values, self.has_null)


def create_stats_recorder(
    category: Category | TypeDescription,
    statistic: ColumnStatistic | None = None,
) -> StatsRecorder:
    """Create the recorder for a column category or type."""
    if isinstance(category, TypeDescription):
        category = category.category
    Category(category)
    return StatsRecorder(statistic)