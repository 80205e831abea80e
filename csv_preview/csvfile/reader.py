from __future__ import annotations

import logging
from io import StringIO
from pathlib import Path

import pandas as pd

from csv_preview.errors import PreviewError
from csv_preview.models.row_record import ParsedCsv, RowRecord

"""CSV reader.

The first non-blank line is the header, every following line a data row.

- Blank lines and rows whose cells are all empty are skipped
- Rows with fewer fields than the header get "" for the missing cells
- Rows with more fields than the header lose the extra fields (counted in
  ParsedCsv.truncated_rows and logged as a warning)
- Header names and values are whitespace-stripped; quoting follows RFC 4180

The raw frame is read with header=None and the header taken from its first row,
so the header line defines the expected width.
"""

__all__ = [
    "ParseError",
    "read_csv_bytes",
    "read_csv_file",
    "read_csv_text",
]

logger = logging.getLogger(__name__)


class ParseError(PreviewError):
    """Raised when the input cannot be decoded or has no header row."""


def _dedupe_headers(raw_headers: list[str]) -> list[str]:
    """Strip header names, name empty ones and suffix duplicates (a, a.1, a.2)."""
    headers: list[str] = []
    seen: dict[str, int] = {}
    for idx, raw in enumerate(raw_headers):
        name = raw.strip() or f"Unnamed: {idx}"
        if name in seen:
            seen[name] += 1
            candidate = f"{name}.{seen[name]}"
            while candidate in seen:
                seen[name] += 1
                candidate = f"{name}.{seen[name]}"
            name = candidate
        seen[name] = 0
        headers.append(name)
    return headers


def _read_raw_frame(text: str) -> tuple[pd.DataFrame, int]:
    """Read every line as strings; return the frame and the truncated row count."""
    read_opts = dict(
        header=None,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        engine="python",
    )
    try:
        width = pd.read_csv(StringIO(text), nrows=1, **read_opts).shape[1]
        truncated = 0

        def _truncate(bad_line: list[str]) -> list[str]:
            nonlocal truncated
            truncated += 1
            return bad_line[:width]

        df = pd.read_csv(StringIO(text), on_bad_lines=_truncate, **read_opts)
    except pd.errors.EmptyDataError as e:
        raise ParseError("CSV has no header row") from e
    except pd.errors.ParserError as e:
        raise ParseError(f"malformed CSV: {e}") from e
    return df.fillna(""), truncated


def read_csv_text(text: str) -> ParsedCsv:
    """Parse CSV text into header names and ordered row records.

    Raises:
        ParseError: When the text contains no header line at all
    """
    if not any(line.strip() for line in text.splitlines()):
        raise ParseError("CSV has no header row")

    df, truncated = _read_raw_frame(text)
    headers = _dedupe_headers([str(v) for v in df.iloc[0].tolist()])

    rows: list[RowRecord] = []
    for raw in df.iloc[1:].itertuples(index=False, name=None):
        cells = [str(v).strip() for v in raw]
        if not any(cells):
            continue
        values = dict(zip(headers, cells, strict=False))
        rows.append(RowRecord(row_number=len(rows) + 1, values=values))

    if truncated:
        logger.warning(f"{truncated} row(s) had more fields than the header; extra fields dropped")
    logger.debug(f"parsed {len(rows)} rows x {len(headers)} columns")
    return ParsedCsv(headers=headers, rows=rows, truncated_rows=truncated)


def read_csv_bytes(data: bytes, *, encoding: str = "utf-8-sig") -> ParsedCsv:
    """Decode file content and parse it.

    Raises:
        ParseError: When the bytes cannot be decoded with `encoding` or no header exists
    """
    try:
        text = data.decode(encoding)
    except UnicodeDecodeError as e:
        raise ParseError(f"file is not valid {encoding} text: {e.reason} at byte {e.start}") from e
    except LookupError as e:
        raise ParseError(f"unknown encoding: {encoding}") from e
    return read_csv_text(text)


def read_csv_file(path: Path, *, encoding: str = "utf-8-sig") -> ParsedCsv:
    """Read and parse a CSV file from disk."""
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ParseError(f"failed to read file: {e}") from e
    return read_csv_bytes(data, encoding=encoding)
