"""Options controlling how a file is read."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

__all__ = ["ReaderOption"]


@dataclass
class ReaderOption:
    """Reader settings; ``rg_len`` of -1 means reading to the end of the file."""

    included_cols: list[str] = field(default_factory=list)
    skip_corrupt_records: bool = False
    tolerant_schema_evolution: bool = True
    enable_encoded_column_vector: bool = True
    enable_filter_push_down: bool = False
    filter: Any = None
    query_id: int = -1
    batch_size: int = 0
    rg_start: int = 0
    rg_len: int = -1

    def set_rg_range(self, start: int, length: int) -> None:
        """Select the row groups to read, starting at ``start``."""
        self.rg_start = start
        self.rg_len = length