# Shared pytest fixtures
from __future__ import annotations
import logging
import tempfile
from pathlib import Path

import pytest

from csv_preview.logging.init import LOGGER_NAME, reset_logging


@pytest.fixture(autouse=True)
def fresh_logging():
    # handlers bind sys.stdout at setup time; rebuild them for each test's capsys
    reset_logging()
    yield
    reset_logging()
    logging.getLogger(LOGGER_NAME).handlers.clear()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("CSV_PREVIEW_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
max_file_size_mb: 10
preview_rows: 2
min_recommended_rows: 10
missing_value_threshold: 0.1
median_strategy: upper
percentile_prefixes: [p, q]
percentile_range: [1, 99]
date_tokens: [date, time, timestamp]
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "preview.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def write_csv(temp_workdir: Path):
    def _write(name: str, text: str, directory: str = "data") -> Path:
        p = temp_workdir / directory / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text, encoding="utf-8")
        return p
    return _write


@pytest.fixture()
def forecast_csv_text() -> str:
    lines = ["Date,P10,P50,P90,Status"]
    for day in range(1, 13):
        lines.append(f"2024-01-{day:02d},{day},{day * 2},{day * 3},ok")
    return "\n".join(lines) + "\n"
