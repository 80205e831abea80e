from __future__ import annotations

import re
from pathlib import Path

from csv_preview.errors import PreviewError

"""File selection guard.

Rejects files before they are read: wrong extension, missing file, or larger
than the configured limit. Also derives the user-facing upload name.
"""

__all__ = [
    "FileRejectedError",
    "MAX_UPLOAD_NAME_LENGTH",
    "check_file",
    "default_upload_name",
    "sanitize_filename",
]

MAX_UPLOAD_NAME_LENGTH = 50
_INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*]')
_CSV_SUFFIX = re.compile(r"\.csv$", re.IGNORECASE)


class FileRejectedError(PreviewError):
    """Raised when a selected file is not acceptable for preview."""


def check_file(path: Path, max_bytes: int) -> int:
    """Validate a selected file and return its size in bytes.

    Raises:
        FileRejectedError: Missing file, non-.csv name, or size above max_bytes
    """
    if not path.is_file():
        raise FileRejectedError(f"file not found: {path}")
    if not path.name.lower().endswith(".csv"):
        raise FileRejectedError(f"invalid file type (expected .csv): {path.name}")
    size = path.stat().st_size
    if size > max_bytes:
        limit_mb = max_bytes // (1024 * 1024)
        raise FileRejectedError(f"file too large: {path.name} ({size} bytes, limit {limit_mb}MB)")
    return size


def sanitize_filename(value: str, max_length: int = MAX_UPLOAD_NAME_LENGTH) -> str:
    """Remove characters that are invalid in file names and cap the length."""
    return _INVALID_FILENAME_CHARS.sub("", value).strip()[:max_length]


def default_upload_name(name: str) -> str:
    """Default upload name: the file name without its .csv extension."""
    return sanitize_filename(_CSV_SUFFIX.sub("", name))
