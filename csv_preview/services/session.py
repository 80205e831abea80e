from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from ..csvfile.guard import FileRejectedError, check_file, default_upload_name, sanitize_filename
from ..csvfile.reader import ParseError, read_csv_bytes
from ..errors import PreviewError
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.column_profile import ColumnProfile
from ..models.config_models import PreviewSettings
from ..models.preview_file import FileStatus, PreviewFile
from ..models.processing_result import FileStat, PreviewRunResult
from ..models.row_record import ParsedCsv, RowRecord
from ..models.validation_result import QuantileColumns, ValidationResult
from .profiler import profile_columns
from .progress import ProgressTracker
from .quantiles import detect_quantile_columns
from .validator import validate_rows

"""Preview session and batch preview orchestration.

A PreviewSession owns the results for one selected file: parsed rows, column
profiles, validation verdict and quantile columns. Loading a new file replaces
everything; a failed load leaves the session empty with the error recorded.

preview_all() runs the same pipeline over many files for the CLI and
aggregates the SUMMARY metrics.
"""

__all__ = [
    "PreviewSession",
    "ProcessingError",
    "preview_all",
    "scan_csv_files",
]

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Fatal error that prevents a batch preview from running at all."""


class PreviewSession:
    """Results of previewing one CSV file.

    Parse failures abort the pipeline before profiling/validation; validation
    issues never block the upload gate.
    """

    def __init__(self, settings: PreviewSettings | None = None) -> None:
        self.settings = settings or PreviewSettings()
        self.error: str | None = None
        self._reset()

    def _reset(self) -> None:
        self.file: PreviewFile | None = None
        self.parsed: ParsedCsv | None = None
        self.profiles: list[ColumnProfile] = []
        self.validation: ValidationResult | None = None
        self.quantiles: QuantileColumns | None = None
        self._custom_filename = ""

    def clear(self) -> None:
        """Discard every result (cancel / close)."""
        self._reset()
        self.error = None

    def load(self, path: Path) -> ValidationResult:
        """Guard, read and analyse a file from disk, replacing any previous results.

        Raises:
            FileRejectedError: Wrong type, missing file or over the size limit
            ParseError: Undecodable content or no header row
        """
        self.clear()
        try:
            size = check_file(path, self.settings.max_file_size_bytes)
            data = path.read_bytes()
        except FileRejectedError as e:
            self._fail(path, path.name, 0, e)
            raise
        except OSError as e:
            err = ParseError(f"failed to read file: {e}")
            self._fail(path, path.name, 0, err)
            raise err from e
        return self._analyse(path, path.name, size, data)

    def load_bytes(self, data: bytes, name: str) -> ValidationResult:
        """Analyse in-memory content (e.g. an uploaded buffer)."""
        self.clear()
        if len(data) > self.settings.max_file_size_bytes:
            err = FileRejectedError(
                f"file too large: {name} ({len(data)} bytes, limit {self.settings.max_file_size_mb}MB)"
            )
            self._fail(None, name, len(data), err)
            raise err
        return self._analyse(None, name, len(data), data)

    def _fail(self, path: Path | None, name: str, size: int, err: PreviewError) -> None:
        self._reset()
        self.error = str(err)
        self.file = PreviewFile(path=path, name=name, size_bytes=size, status=FileStatus.FAILED, error=str(err))
        logger.debug(f"load failed name={name}: {err}")

    def _analyse(self, path: Path | None, name: str, size: int, data: bytes) -> ValidationResult:
        try:
            parsed = read_csv_bytes(data, encoding=self.settings.encoding)
        except ParseError as e:
            self._fail(path, name, size, e)
            raise

        self.parsed = parsed
        self.profiles = profile_columns(parsed.rows, parsed.headers, settings=self.settings)
        self.validation = validate_rows(
            parsed.rows, parsed.headers, settings=self.settings, truncated_rows=parsed.truncated_rows
        )
        self.quantiles = detect_quantile_columns(parsed.headers)
        self.file = PreviewFile(path=path, name=name, size_bytes=size, status=FileStatus.PARSED)
        self._custom_filename = default_upload_name(name)
        return self.validation

    @property
    def is_loaded(self) -> bool:
        return self.parsed is not None

    @property
    def custom_filename(self) -> str:
        return self._custom_filename

    @custom_filename.setter
    def custom_filename(self, value: str) -> None:
        self._custom_filename = sanitize_filename(value)

    @property
    def can_upload(self) -> bool:
        """A parsed file with a non-empty upload name; validation issues do not block."""
        return self.is_loaded and bool(self._custom_filename.strip())

    @property
    def page_size(self) -> int:
        return self.settings.preview_rows

    @property
    def page_count(self) -> int:
        if self.parsed is None or not self.parsed.rows:
            return 0
        return math.ceil(len(self.parsed.rows) / self.page_size)

    def page(self, number: int, page_size: int | None = None) -> list[RowRecord]:
        """Rows of a 1-based page; out-of-range pages are empty."""
        if self.parsed is None or number < 1:
            return []
        size = page_size or self.page_size
        start = (number - 1) * size
        return self.parsed.rows[start:start + size]


def scan_csv_files(directory: Path) -> list[Path]:
    """Scan directory for .csv files (non-recursive, sorted by name).

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        return sorted(
            (p for p in directory.iterdir() if p.is_file() and p.suffix.lower() == ".csv"),
            key=lambda p: p.name,
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def _error_type(err: PreviewError) -> str:
    if isinstance(err, FileRejectedError):
        return "FILE_REJECTED"
    return "PARSE_ERROR"


def preview_all(
    paths: Iterable[Path],
    settings: PreviewSettings,
    *,
    error_log: ErrorLogBuffer | None = None,
    on_preview=None,
) -> PreviewRunResult:
    """Preview every file and aggregate the run metrics.

    Args:
        paths: CSV files to preview
        settings: Preview settings
        error_log: Buffer for file-level error records (flushed at the end)
        on_preview: Optional callback(session) invoked after each successful load
    """
    file_paths = list(paths)
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer()

    file_stats: list[FileStat] = []
    parsed_count = 0
    failed_count = 0
    valid_count = 0
    total_rows = 0

    with ProgressTracker(len(file_paths)) as progress:
        for file_path in file_paths:
            progress.start_file(file_path)
            file_start = datetime.now(UTC)
            session = PreviewSession(settings)
            failure: tuple[str, str, Exception] | None = None
            try:
                validation = session.load(file_path)
            except PreviewError as e:
                failure = (_error_type(e), "Failed to parse CSV", e)
            except Exception as e:
                # Unexpected errors; the remaining files are still previewed
                failure = ("UNEXPECTED_ERROR", "Unexpected error", e)

            if failure is not None:
                error_type, label, err = failure
                failed_count += 1
                logger.error(f"{file_path.name}: {label}: {err}")
                error_log.append(ErrorRecord.create(file_path.name, -1, error_type, str(err)))
                file_stats.append(
                    FileStat(
                        file_name=file_path.name,
                        status=FileStatus.FAILED.value,
                        rows=0,
                        columns=0,
                        is_valid=False,
                        issues=0,
                        elapsed_seconds=(datetime.now(UTC) - file_start).total_seconds(),
                        error=str(err),
                    )
                )
                progress.finish_file(success=False)
                continue

            parsed_count += 1
            total_rows += validation.row_count
            if validation.is_valid:
                valid_count += 1
            logger.info(
                f"{file_path.name}: rows={validation.row_count} columns={validation.column_count} "
                f"status={validation.status_label} score={validation.compatibility_score}"
            )
            for issue in validation.issues:
                logger.warning(f"{file_path.name}: {issue}")
            if on_preview is not None:
                on_preview(session)

            file_stats.append(
                FileStat(
                    file_name=file_path.name,
                    status=FileStatus.PARSED.value,
                    rows=validation.row_count,
                    columns=validation.column_count,
                    is_valid=validation.is_valid,
                    issues=len(validation.issues),
                    elapsed_seconds=(datetime.now(UTC) - file_start).total_seconds(),
                )
            )
            progress.set_postfix(parsed=parsed_count, failed=failed_count, rows=total_rows)
            progress.finish_file(success=True)

    try:
        log_path = error_log.flush()
    except OSError as e:
        logger.warning(f"failed to write error log: {e}")
    else:
        if log_path is not None:
            logger.info(f"error log written: {log_path}")

    end_time = datetime.now(UTC)
    return PreviewRunResult(
        parsed_files=parsed_count,
        failed_files=failed_count,
        valid_files=valid_count,
        total_rows=total_rows,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
    )
