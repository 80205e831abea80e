"""CSV file intake: size/type guard and parsing into row records."""

from .guard import FileRejectedError, check_file, default_upload_name, sanitize_filename
from .reader import ParseError, read_csv_bytes, read_csv_file, read_csv_text

__all__ = [
    "FileRejectedError",
    "ParseError",
    "check_file",
    "default_upload_name",
    "read_csv_bytes",
    "read_csv_file",
    "read_csv_text",
    "sanitize_filename",
]
