from __future__ import annotations
import json
from pathlib import Path

from csv_preview.logging.error_log import ErrorLogBuffer, ErrorRecord

RECORD_KEYS = {"timestamp", "file", "row", "error_type", "message"}


def test_error_record_creation_and_json_line():
    rec = ErrorRecord.create(file="f.csv", row=-1, error_type="PARSE_ERROR", message="no header")
    data = json.loads(rec.to_json_line())
    assert data["file"] == "f.csv"
    assert data["row"] == -1
    assert data["error_type"] == "PARSE_ERROR"
    assert data["timestamp"].endswith("Z")
    assert set(data.keys()) == RECORD_KEYS


def test_error_record_keeps_non_ascii():
    rec = ErrorRecord.create("données.csv", -1, "FILE_REJECTED", "trop grand")
    assert "données.csv" in rec.to_json_line()


def test_error_log_buffer_flush(temp_workdir: Path):
    buf = ErrorLogBuffer()
    buf.append(ErrorRecord.create("a.csv", -1, "PARSE_ERROR", "bad bytes"))
    buf.append(ErrorRecord.create("b.csv", -1, "FILE_REJECTED", "too large"))
    path = buf.flush()
    assert path is not None and path.exists()
    assert path.parent == Path("./logs")
    lines = path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    for raw in lines:
        assert set(json.loads(raw).keys()) == RECORD_KEYS
    assert len(buf) == 0


def test_error_log_buffer_empty_flush_creates_nothing(tmp_path: Path):
    buf = ErrorLogBuffer(logs_dir=tmp_path / "logs")
    assert buf.flush() is None
    assert not (tmp_path / "logs").exists()


def test_error_log_buffer_multiple_flushes_append(tmp_path: Path):
    buf = ErrorLogBuffer(logs_dir=tmp_path)
    buf.append(ErrorRecord.create("a.csv", -1, "PARSE_ERROR", "x"))
    path = buf.flush()
    size1 = path.stat().st_size
    buf.append(ErrorRecord.create("a.csv", -1, "PARSE_ERROR", "y"))
    path2 = buf.flush()
    assert path == path2
    assert path2.stat().st_size > size1
