from __future__ import annotations

from dataclasses import dataclass, field

"""ValidationResult and QuantileColumns models."""

__all__ = [
    "ValidationResult",
    "QuantileColumns",
]


@dataclass(frozen=True)
class ValidationResult:
    """Compatibility verdict for a parsed dataset.

    issues is an ordered list of human-readable recommendations. They never block
    the caller; is_valid only reflects the minimum shape (rows, percentile column,
    date column).
    """
    is_valid: bool
    percentile_columns: list[str]
    has_date_column: bool
    date_columns: list[str] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)
    row_count: int = 0
    column_count: int = 0

    @property
    def has_percentile_columns(self) -> bool:
        return bool(self.percentile_columns)

    @property
    def compatibility_score(self) -> int:
        if self.is_valid:
            return 100
        if self.has_percentile_columns:
            return 70
        return 30

    @property
    def status_label(self) -> str:
        return "Ready" if self.is_valid else "Needs Review"


@dataclass(frozen=True)
class QuantileColumns:
    """Columns picked out for a P10/P50/P90 quantile forecast view."""
    date_column: str | None
    p10_column: str | None
    p50_column: str | None
    p90_column: str | None
    success: bool
    message: str

    @property
    def found(self) -> list[str]:
        return [c for c in (self.p10_column, self.p50_column, self.p90_column) if c]
