from __future__ import annotations

import re
from dataclasses import dataclass, field

"""Config dataclasses for the CSV preview tool.

These are the typed settings produced by csv_preview.config.loader and consumed
by the reader, profiler and validator. Defaults here are also the built-in
configuration used when no YAML file is present.
"""

__all__ = [
    "DEFAULT_DATE_FORMATS",
    "DEFAULT_DATE_TOKENS",
    "DEFAULT_PERCENTILE_PREFIXES",
    "Heuristics",
    "PreviewSettings",
]

DEFAULT_PERCENTILE_PREFIXES: tuple[str, ...] = ("p", "q")
DEFAULT_DATE_TOKENS: tuple[str, ...] = ("date", "time", "timestamp")
# Tried after datetime.fromisoformat()
DEFAULT_DATE_FORMATS: tuple[str, ...] = (
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%d.%m.%Y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%d %b %Y",
    "%b %d, %Y",
)

MEGABYTE = 1024 * 1024


@dataclass(frozen=True)
class Heuristics:
    """Header naming heuristics used by the validator.

    percentile_prefixes + integer in percentile_range: the whole header
    (stripped, case-insensitive) must match, e.g. "P90", "p50", "q10".
    date_tokens: case-insensitive substring match against the header.
    """
    percentile_prefixes: tuple[str, ...] = DEFAULT_PERCENTILE_PREFIXES
    percentile_range: tuple[int, int] = (1, 99)
    date_tokens: tuple[str, ...] = DEFAULT_DATE_TOKENS

    @property
    def percentile_pattern(self) -> re.Pattern[str]:
        prefixes = "|".join(re.escape(p.lower()) for p in self.percentile_prefixes)
        return re.compile(rf"^(?:{prefixes})(\d+)$")

    def is_percentile_column(self, header: str) -> bool:
        m = self.percentile_pattern.match(header.strip().lower())
        if not m:
            return False
        low, high = self.percentile_range
        return low <= int(m.group(1)) <= high

    def is_date_column(self, header: str) -> bool:
        name = header.lower()
        return any(token.lower() in name for token in self.date_tokens)


@dataclass(frozen=True)
class PreviewSettings:
    """Root configuration object for a preview run."""
    source_directory: str | None = None  # scanned when the CLI gets no paths
    max_file_size_mb: int = 100
    encoding: str = "utf-8-sig"
    preview_rows: int = 15  # rows per preview page
    min_recommended_rows: int = 10
    missing_value_threshold: float = 0.1  # fraction of empty cells that triggers an advisory issue
    median_strategy: str = "upper"  # "upper" (sorted[n // 2]) or "average"
    date_formats: tuple[str, ...] = DEFAULT_DATE_FORMATS
    heuristics: Heuristics = field(default_factory=Heuristics)

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * MEGABYTE
