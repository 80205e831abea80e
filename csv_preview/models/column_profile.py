from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

"""ColumnProfile model and ColumnType enum.

A ColumnProfile is the read-only summary of one column produced by
csv_preview.services.profiler.profile_columns().
"""

__all__ = [
    "ColumnType",
    "ColumnProfile",
]


class ColumnType(Enum):
    """Inferred type of a column.

    - NUMERIC: every non-empty value parses as a finite number
    - DATE: every non-empty value parses as a calendar date (and the column is not numeric)
    - MIXED: some, but not all, non-empty values parse as numbers
    - TEXT: anything else, including columns without any non-empty value
    """
    NUMERIC = "numeric"
    TEXT = "text"
    DATE = "date"
    MIXED = "mixed"


@dataclass(frozen=True)
class ColumnProfile:
    """Descriptive statistics for a single column.

    Numeric columns carry float min/max/mean/median and no mode.
    Other columns carry lexicographic string min/max plus mode; mean/median stay None.
    Stats that do not apply (or cannot be computed) are None.
    """
    name: str
    column_type: ColumnType
    total_count: int  # number of rows inspected
    unique_values: int  # distinct non-empty values
    null_count: int  # empty cells
    fill_rate: float  # non-empty / total * 100, full precision
    min: float | str | None = None
    max: float | str | None = None
    mean: float | None = None
    median: float | None = None
    mode: str | None = None
    mode_count: int = 0
    sample_values: list[str] = field(default_factory=list)  # up to 5 distinct, first-seen order

    @property
    def non_empty_count(self) -> int:
        return self.total_count - self.null_count

    @property
    def is_numeric(self) -> bool:
        return self.column_type is ColumnType.NUMERIC

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "type": self.column_type.value,
            "total_count": self.total_count,
            "unique_values": self.unique_values,
            "null_count": self.null_count,
            "fill_rate": self.fill_rate,
            "min": self.min,
            "max": self.max,
            "mean": self.mean,
            "median": self.median,
            "mode": self.mode,
            "mode_count": self.mode_count,
            "sample_values": list(self.sample_values),
        }
