from __future__ import annotations

import logging
from collections.abc import Sequence

from ..models.config_models import PreviewSettings
from ..models.row_record import RowRecord
from ..models.validation_result import ValidationResult

"""Dataset compatibility validator.

A dataset is valid for quantile forecast analysis when it has at least one
data row, at least one percentile column and at least one date/time column.
Each missing requirement adds one issue; further issues are advisory only
and never change the verdict.
"""

__all__ = [
    "ISSUE_NO_DATE_COLUMN",
    "ISSUE_NO_PERCENTILE_COLUMNS",
    "ISSUE_NO_ROWS",
    "validate_rows",
]

logger = logging.getLogger(__name__)

ISSUE_NO_ROWS = "No data rows found"
ISSUE_NO_PERCENTILE_COLUMNS = (
    "No percentile columns (p1-p99) detected. Quantile forecast analysis expects percentile data."
)
ISSUE_NO_DATE_COLUMN = "No date/time column detected"


def _count_missing(rows: Sequence[RowRecord], headers: Sequence[str]) -> int:
    return sum(1 for r in rows for h in headers if r.get(h).strip() == "")


def validate_rows(
    rows: Sequence[RowRecord],
    headers: Sequence[str],
    *,
    settings: PreviewSettings | None = None,
    truncated_rows: int = 0,
) -> ValidationResult:
    """Check a parsed dataset against the compatibility contract.

    Pure function: same rows and headers give the same result.
    """
    settings = settings or PreviewSettings()
    heuristics = settings.heuristics

    percentile_columns = [h for h in headers if heuristics.is_percentile_column(h)]
    date_columns = [h for h in headers if heuristics.is_date_column(h)]
    row_count = len(rows)

    issues: list[str] = []
    if row_count == 0:
        issues.append(ISSUE_NO_ROWS)
    if not percentile_columns:
        issues.append(ISSUE_NO_PERCENTILE_COLUMNS)
    if not date_columns:
        issues.append(ISSUE_NO_DATE_COLUMN)
    is_valid = not issues

    # Advisory
    if 0 < row_count < settings.min_recommended_rows:
        issues.append(
            f"Dataset should have at least {settings.min_recommended_rows} rows "
            "for meaningful anomaly detection."
        )
    if len(headers) < 2:
        issues.append("Dataset should have at least 2 columns.")
    total_cells = row_count * len(headers)
    if total_cells:
        missing = _count_missing(rows, headers)
        if missing > total_cells * settings.missing_value_threshold:
            pct = int(settings.missing_value_threshold * 100)
            issues.append(
                f"Dataset has more than {pct}% missing values, which may affect analysis quality."
            )
    if truncated_rows:
        issues.append(f"{truncated_rows} row(s) had more fields than the header; extra fields were dropped.")

    result = ValidationResult(
        is_valid=is_valid,
        percentile_columns=percentile_columns,
        has_date_column=bool(date_columns),
        date_columns=date_columns,
        issues=issues,
        row_count=row_count,
        column_count=len(headers),
    )
    logger.debug(
        f"validation is_valid={result.is_valid} percentile={percentile_columns} "
        f"date={date_columns} issues={len(issues)}"
    )
    return result
