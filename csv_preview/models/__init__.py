"""Domain models for the CSV preview tool.

This package contains the dataclasses passed between the reader, the
profiler, the validator and the preview session.
"""

from .column_profile import ColumnProfile, ColumnType
from .config_models import Heuristics, PreviewSettings
from .error_record import ErrorRecord
from .preview_file import FileStatus, PreviewFile
from .processing_result import FileStat, PreviewRunResult
from .row_record import ParsedCsv, RowRecord
from .validation_result import QuantileColumns, ValidationResult

__all__ = [
    # Configuration models
    "Heuristics",
    "PreviewSettings",
    # Parsed data
    "ParsedCsv",
    "RowRecord",
    # Derived results
    "ColumnProfile",
    "ColumnType",
    "QuantileColumns",
    "ValidationResult",
    # Run bookkeeping
    "ErrorRecord",
    "FileStat",
    "FileStatus",
    "PreviewFile",
    "PreviewRunResult",
]
