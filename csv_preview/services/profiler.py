from __future__ import annotations

import logging
import math
import re
import statistics
from collections.abc import Iterable, Sequence
from datetime import datetime

from ..models.column_profile import ColumnProfile, ColumnType
from ..models.config_models import DEFAULT_DATE_FORMATS, PreviewSettings
from ..models.row_record import RowRecord

"""Column profiler.

Computes one ColumnProfile per header, in header order. This is the only place
where raw cell strings are interpreted as numbers or dates.

Type inference policy:
- numeric: every non-empty value is a finite number
- date: every non-empty value is a calendar date and the column is not numeric
  (numeric wins when both could apply, e.g. "20240101")
- mixed: at least one, but not every, non-empty value is a number (checked
  after date, so "2024-01-01" next to "20240101" is still a date column)
- text: everything else, including columns with no non-empty value

Median defaults to the upper median (sorted[n // 2]); median_strategy="average"
switches to the mean of the two middle values for even-length columns.
"""

__all__ = [
    "SAMPLE_SIZE",
    "parse_date",
    "parse_number",
    "profile_column",
    "profile_columns",
]

logger = logging.getLogger(__name__)

SAMPLE_SIZE = 5

_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


def parse_number(value: str) -> float | None:
    """Return the value as a finite float, or None when it is not a plain number."""
    text = value.strip()
    if not _NUMBER_RE.match(text):
        return None
    number = float(text)
    if not math.isfinite(number):
        return None
    return number


def parse_date(value: str, formats: Iterable[str] = DEFAULT_DATE_FORMATS) -> datetime | None:
    """Return the value as a datetime when it is ISO-8601 or matches one of `formats`."""
    text = value.strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    for fmt in formats:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def _infer_type(
    non_empty: Sequence[str], numbers: Sequence[float], date_formats: Iterable[str]
) -> ColumnType:
    if not non_empty:
        return ColumnType.TEXT
    if len(numbers) == len(non_empty):
        return ColumnType.NUMERIC
    formats = tuple(date_formats)
    if all(parse_date(v, formats) is not None for v in non_empty):
        return ColumnType.DATE
    if numbers:
        return ColumnType.MIXED
    return ColumnType.TEXT


def _mean(numbers: Sequence[float]) -> float:
    try:
        return statistics.fmean(numbers)
    except OverflowError:
        # sum exceeds the float range; each scaled term keeps the total below max(|v|)
        n = len(numbers)
        return math.fsum(v / n for v in numbers)


def _median(sorted_numbers: Sequence[float], strategy: str) -> float:
    if strategy == "average":
        median = float(statistics.median(sorted_numbers))
        if math.isinf(median):
            # the two middle values overflowed when added
            n = len(sorted_numbers)
            return sorted_numbers[n // 2 - 1] / 2 + sorted_numbers[n // 2] / 2
        return median
    return sorted_numbers[len(sorted_numbers) // 2]


def _mode(counts: dict[str, int]) -> tuple[str | None, int]:
    """Most frequent value; ties go to the value counted first."""
    best: str | None = None
    best_count = 0
    for value, count in counts.items():
        if count > best_count:
            best, best_count = value, count
    return best, best_count


def profile_column(
    name: str, values: Sequence[str | None], *, settings: PreviewSettings | None = None
) -> ColumnProfile:
    """Profile a single column from its raw values (row order)."""
    settings = settings or PreviewSettings()
    total = len(values)

    non_empty: list[str] = []
    counts: dict[str, int] = {}
    for raw in values:
        if raw is None or raw.strip() == "":
            continue
        non_empty.append(raw)
        counts[raw] = counts.get(raw, 0) + 1

    null_count = total - len(non_empty)
    fill_rate = (len(non_empty) / total * 100) if total else 0.0
    samples = list(counts)[:SAMPLE_SIZE]

    numbers = [n for n in (parse_number(v) for v in non_empty) if n is not None]
    column_type = _infer_type(non_empty, numbers, settings.date_formats)

    base = dict(
        name=name,
        column_type=column_type,
        total_count=total,
        unique_values=len(counts),
        null_count=null_count,
        fill_rate=fill_rate,
        sample_values=samples,
    )
    if not non_empty:
        return ColumnProfile(**base)

    if column_type is ColumnType.NUMERIC:
        ordered = sorted(numbers)
        return ColumnProfile(
            **base,
            min=ordered[0],
            max=ordered[-1],
            mean=_mean(ordered),
            median=_median(ordered, settings.median_strategy),
        )

    mode, mode_count = _mode(counts)
    return ColumnProfile(
        **base,
        min=min(non_empty),
        max=max(non_empty),
        mode=mode,
        mode_count=mode_count,
    )


def profile_columns(
    rows: Sequence[RowRecord], headers: Sequence[str], *, settings: PreviewSettings | None = None
) -> list[ColumnProfile]:
    """Profile every column of a parsed dataset, in header order.

    Never raises for data content; stats that do not apply are None.
    """
    profiles = [
        profile_column(h, [r.values.get(h) for r in rows], settings=settings)
        for h in headers
    ]
    logger.debug(
        "profiled columns: "
        + ", ".join(f"{p.name}={p.column_type.value}" for p in profiles)
    )
    return profiles
