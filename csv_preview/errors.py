from __future__ import annotations

"""Exception base classes shared across the package."""

__all__ = [
    "PreviewError",
]


class PreviewError(Exception):
    """Base class for errors that stop a single file from being previewed."""
