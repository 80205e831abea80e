from __future__ import annotations

from dataclasses import dataclass

"""RowRecord and ParsedCsv models.

A RowRecord is one data row of a CSV file after header processing. Values are
kept as raw (stripped) strings; typed interpretation happens in the column
profiler only.
"""

__all__ = [
    "RowRecord",
    "ParsedCsv",
]


@dataclass(frozen=True)
class RowRecord:
    """Single data row keyed by header name.

    The row_number is 1-based and counts data rows only (the header is not a row).
    """
    row_number: int  # 1-based position among data rows
    values: dict[str, str]  # Column name -> raw cell value ("" when missing)

    def get(self, column: str) -> str:
        return self.values.get(column, "")


@dataclass(frozen=True)
class ParsedCsv:
    """Result of parsing one CSV document.

    All rows share the header key set, in header order. Row order is source order.
    """
    headers: list[str]
    rows: list[RowRecord]
    truncated_rows: int = 0  # rows whose extra fields were dropped

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.headers)

    def column_values(self, column: str) -> list[str]:
        """Return the raw values of one column in row order."""
        return [r.get(column) for r in self.rows]
