from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

"""PreviewFile domain model and FileStatus enum.

PreviewFile describes the file currently held by a preview session,
tracking it from selection through parsing.
"""


class FileStatus(Enum):
    """Status of a selected file.

    State transitions: pending -> (parsed | failed)
    """
    PENDING = "pending"
    PARSED = "parsed"
    FAILED = "failed"


@dataclass(frozen=True)
class PreviewFile:
    """The file behind a preview session."""
    path: Path | None  # None for in-memory content
    name: str
    size_bytes: int
    status: FileStatus = FileStatus.PENDING
    error: str | None = None  # failure reason
