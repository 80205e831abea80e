from __future__ import annotations

import re
from collections.abc import Sequence

from ..models.validation_result import QuantileColumns

"""Quantile forecast column detection.

Picks the date, P10, P50 and P90 columns of a forecast export by comparing
normalized header names (lower-case, alphanumerics only) against candidate
lists, in candidate order.
"""

__all__ = [
    "DATE_CANDIDATES",
    "P10_CANDIDATES",
    "P50_CANDIDATES",
    "P90_CANDIDATES",
    "detect_quantile_columns",
]

DATE_CANDIDATES = ("date", "ds", "timestamp", "time")
P10_CANDIDATES = ("p10", "q10", "10")
P50_CANDIDATES = ("p50", "q50", "50", "median")
P90_CANDIDATES = ("p90", "q90", "90")

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def _norm(name: str) -> str:
    return _NON_ALNUM.sub("", name.strip().lower())


def _find_column(normalized: dict[str, str], candidates: Sequence[str]) -> str | None:
    for cand in candidates:
        hit = normalized.get(_norm(cand))
        if hit is not None:
            return hit
    return None


def detect_quantile_columns(headers: Sequence[str]) -> QuantileColumns:
    """Find forecast columns; success needs at least two of P10/P50/P90."""
    if not headers:
        return QuantileColumns(None, None, None, None, success=False, message="No columns provided")

    normalized: dict[str, str] = {}
    for h in headers:
        normalized[_norm(h)] = h  # last header wins on collisions

    date_col = _find_column(normalized, DATE_CANDIDATES)
    p10 = _find_column(normalized, P10_CANDIDATES)
    p50 = _find_column(normalized, P50_CANDIDATES)
    p90 = _find_column(normalized, P90_CANDIDATES)

    found = [c for c in (p10, p50, p90) if c]
    success = len(found) >= 2
    message = (
        f"Found {len(found)} quantile columns"
        if success
        else "Insufficient quantile columns found (need at least 2 of P10/P50/P90)"
    )
    return QuantileColumns(
        date_column=date_col,
        p10_column=p10,
        p50_column=p50,
        p90_column=p90,
        success=success,
        message=message,
    )
