"""CSV preview, column profiling and compatibility validation."""

__version__ = "0.1.0"
