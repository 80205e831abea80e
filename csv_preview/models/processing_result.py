from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Run result models for batch previews.

Aggregates per-file outcomes into the numbers printed on the SUMMARY line.
"""


@dataclass(frozen=True)
class FileStat:
    """Per-file preview statistics."""
    file_name: str
    status: str  # parsed/failed
    rows: int
    columns: int
    is_valid: bool
    issues: int
    elapsed_seconds: float
    error: str | None = None


@dataclass(frozen=True)
class PreviewRunResult:
    """Aggregated results of previewing a set of files."""
    parsed_files: int
    failed_files: int
    valid_files: int  # parsed and compatible
    total_rows: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.parsed_files + self.failed_files

    @property
    def needs_review_files(self) -> int:
        return self.parsed_files - self.valid_files
