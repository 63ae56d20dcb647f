"""Column type descriptions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar

__all__ = ["Category", "TypeDescription"]


class Category(IntEnum):
    """Kinds of column types."""

    BOOLEAN = 0
    BYTE = 1
    SHORT = 2
    INT = 3
    LONG = 4
    FLOAT = 5
    DOUBLE = 6
    DECIMAL = 7
    STRING = 8
    DATE = 9
    TIME = 10
    TIMESTAMP = 11
    VARBINARY = 12
    BINARY = 13
    VARCHAR = 14
    CHAR = 15
    STRUCT = 16


@dataclass
class TypeDescription:
    """Type of a column, or of a schema when the category is STRUCT."""

    SHORT_DECIMAL_MAX_PRECISION: ClassVar[int] = 18

    category: Category
    precision: int = 0
    scale: int = 0
    children: list[TypeDescription] = field(default_factory=list)
    field_names: list[str] = field(default_factory=list)

    def is_short_decimal(self) -> bool:
        """True for decimals whose unscaled value fits in a 64-bit integer."""
        return (
            self.category is Category.DECIMAL
            and self.precision <= self.SHORT_DECIMAL_MAX_PRECISION
        )