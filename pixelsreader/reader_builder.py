"""Choosing the column reader for a column type."""

from __future__ import annotations

from .column_reader import (
    ColumnReader,
    DateColumnReader,
    DecimalColumnReader,
    DecoderFactory,
    IntegerColumnReader,
    TimestampColumnReader,
)
from .column_vector import InvalidArgumentError
from .schema import Category, TypeDescription
from .string_reader import CharColumnReader, VarcharColumnReader

__all__ = ["new_column_reader"]

_READERS = {
    Category.SHORT: IntegerColumnReader,
    Category.INT: IntegerColumnReader,
    Category.LONG: IntegerColumnReader,
    Category.DATE: DateColumnReader,
    Category.TIMESTAMP: TimestampColumnReader,
    Category.VARCHAR: VarcharColumnReader,
    Category.CHAR: CharColumnReader,
}


def new_column_reader(
    type_: TypeDescription, decoder_factory: DecoderFactory | None = None
) -> ColumnReader:
    """Create the reader for columns of ``type_``."""
    category = type_.category
    if category is Category.DECIMAL:
        if type_.precision <= TypeDescription.SHORT_DECIMAL_MAX_PRECISION:
            return DecimalColumnReader(type_, decoder_factory)
        raise InvalidArgumentError(
            "Currently we didn't implement LongDecimalColumnVector."
        )
    reader_class = _READERS.get(category)
    if reader_class is None:
        raise InvalidArgumentError(
            f"bad column type in ColumnReaderBuilder: {int(category)}"
        )
    return reader_class(type_, decoder_factory)