from __future__ import annotations

from collections.abc import Sequence

from tabulate import tabulate

from ..models.column_profile import ColumnProfile
from ..models.row_record import ParsedCsv, RowRecord
from ..models.validation_result import QuantileColumns, ValidationResult

"""Plain-text rendering of preview results.

File statistics, validation verdict, paginated row tables and per-column stat
cards, rendered with tabulate (github table format).
"""

__all__ = [
    "estimate_processing_time",
    "format_fill_rate",
    "format_file_size",
    "render_file_stats",
    "render_profiles",
    "render_quantiles",
    "render_rows",
    "render_validation",
]

TABLE_FORMAT = "github"
EMPTY_CELL = "—"
MAX_CELL_WIDTH = 40
_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


def format_file_size(size: int) -> str:
    """Human readable size with 1024 steps, e.g. "1.5 KB"."""
    if size <= 0:
        return "0 Bytes"
    i = 0
    while size >= 1024 ** (i + 1) and i < len(_SIZE_UNITS) - 1:
        i += 1
    value = round(size / 1024**i, 2)
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {_SIZE_UNITS[i]}"


def estimate_processing_time(rows: int) -> str:
    if rows < 100:
        return "< 1 minute"
    if rows < 1000:
        return "1-2 minutes"
    if rows < 10000:
        return "2-5 minutes"
    return "5+ minutes"


def format_fill_rate(rate: float) -> str:
    """Display-only rounding of a fill rate."""
    return f"{rate:.1f}%"


def _fmt_stat(value: object) -> str:
    if value is None:
        return "n/a"
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def _truncate(value: str) -> str:
    if not value:
        return EMPTY_CELL
    if len(value) > MAX_CELL_WIDTH:
        return value[: MAX_CELL_WIDTH - 1] + "…"
    return value


def render_file_stats(name: str, size_bytes: int, parsed: ParsedCsv) -> str:
    table = [
        ["File", name],
        ["Rows", f"{parsed.row_count:,}"],
        ["Columns", parsed.column_count],
        ["File Size", format_file_size(size_bytes)],
        ["Est. Processing", estimate_processing_time(parsed.row_count)],
    ]
    return tabulate(table, tablefmt=TABLE_FORMAT)


def render_validation(result: ValidationResult) -> str:
    lines = [
        f"Compatibility: {result.status_label} (score {result.compatibility_score})",
        "Percentile columns: " + (", ".join(result.percentile_columns) or "none"),
        "Date/time columns: " + (", ".join(result.date_columns) or "none"),
    ]
    if result.issues:
        lines.append("Recommendations:")
        lines.extend(f"  - {issue}" for issue in result.issues)
    return "\n".join(lines)


def render_quantiles(quantiles: QuantileColumns) -> str:
    cols = [
        ["date", quantiles.date_column or EMPTY_CELL],
        ["P10", quantiles.p10_column or EMPTY_CELL],
        ["P50", quantiles.p50_column or EMPTY_CELL],
        ["P90", quantiles.p90_column or EMPTY_CELL],
    ]
    return quantiles.message + "\n" + tabulate(cols, headers=["role", "column"], tablefmt=TABLE_FORMAT)


def render_rows(
    rows: Sequence[RowRecord], headers: Sequence[str], percentile_columns: Sequence[str] = ()
) -> str:
    """Row table; percentile columns are marked with a (P) suffix."""
    marked = set(percentile_columns)
    table_headers = ["#"] + [f"{h} (P)" if h in marked else h for h in headers]
    table = [[r.row_number] + [_truncate(r.get(h)) for h in headers] for r in rows]
    return tabulate(table, headers=table_headers, tablefmt=TABLE_FORMAT, disable_numparse=True)


def render_profiles(profiles: Sequence[ColumnProfile]) -> str:
    table = [
        [
            p.name,
            p.column_type.value,
            p.unique_values,
            p.null_count,
            format_fill_rate(p.fill_rate),
            _fmt_stat(p.min),
            _fmt_stat(p.max),
            _fmt_stat(p.mean),
            _fmt_stat(p.median),
            _fmt_stat(p.mode),
            ", ".join(p.sample_values),
        ]
        for p in profiles
    ]
    headers = ["column", "type", "unique", "nulls", "fill", "min", "max", "mean", "median", "mode", "samples"]
    return tabulate(table, headers=headers, tablefmt=TABLE_FORMAT, disable_numparse=True)
