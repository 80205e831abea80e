from __future__ import annotations

from ..models.processing_result import PreviewRunResult

"""SUMMARY line rendering.

Format:
SUMMARY files={total}/{total} parsed={parsed} failed={failed} valid={valid}
needs_review={needs_review} rows={rows} elapsed_sec={elapsed}
"""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # avoid scientific notation
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_line(total_files: int, result: PreviewRunResult) -> str:
    """Render the SUMMARY line for a preview run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = PreviewRunResult(
        ...     parsed_files=1, failed_files=0, valid_files=1, total_rows=12,
        ...     start_time=start, end_time=end, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(1, result)
        'SUMMARY files=1/1 parsed=1 failed=0 valid=1 needs_review=0 rows=12 elapsed_sec=2'
    """
    return (
        f"SUMMARY files={total_files}/{total_files} "
        f"parsed={result.parsed_files} "
        f"failed={result.failed_files} "
        f"valid={result.valid_files} "
        f"needs_review={result.needs_review_files} "
        f"rows={result.total_rows} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
