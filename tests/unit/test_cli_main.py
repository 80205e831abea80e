from __future__ import annotations
from pathlib import Path

from csv_preview.cli.__main__ import main as cli_main


def test_cli_no_files_success(write_config, temp_workdir: Path, capsys):
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 0
    assert "INFO Previewing 0 file(s)" in out
    assert "SUMMARY files=0/0 parsed=0 failed=0 valid=0 needs_review=0 rows=0" in out


def test_cli_directory_missing(write_config, temp_workdir: Path, capsys):
    text = write_config.read_text(encoding="utf-8").replace("./data", "./missing_dir")
    write_config.write_text(text, encoding="utf-8")
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR Directory not found:" in out


def test_cli_without_config_or_paths_is_fatal(temp_workdir: Path, capsys):
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR no input paths given and no source_directory configured" in out


def test_cli_explicit_paths_without_config(temp_workdir: Path, forecast_csv_text: str, write_csv, capsys):
    p = write_csv("forecast.csv", forecast_csv_text, directory="elsewhere")
    code = cli_main([str(p)])
    out = capsys.readouterr().out
    assert code == 0
    assert "INFO forecast.csv: rows=12 columns=5 status=Ready score=100" in out
    assert "SUMMARY files=1/1 parsed=1 failed=0 valid=1 needs_review=0 rows=12" in out


def test_cli_directory_argument_is_scanned(temp_workdir: Path, forecast_csv_text: str, write_csv, capsys):
    write_csv("a.csv", forecast_csv_text, directory="batch")
    write_csv("notes.txt", "ignored", directory="batch")
    code = cli_main([str(temp_workdir / "batch")])
    out = capsys.readouterr().out
    assert code == 0
    assert "files=1/1" in out


def test_cli_explicit_config_missing(temp_workdir: Path, capsys):
    code = cli_main(["--config", "config/nope.yml"])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR config: config file not found" in out


def test_cli_config_from_env_var(temp_workdir: Path, sample_config_yaml: str, write_csv,
                                 forecast_csv_text: str, monkeypatch, capsys):
    cfg = temp_workdir / "custom.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    write_csv("forecast.csv", forecast_csv_text)
    monkeypatch.setenv("CSV_PREVIEW_CONFIG", str(cfg))
    code = cli_main([])
    assert code == 0
    assert "files=1/1 parsed=1" in capsys.readouterr().out


def test_cli_env_file_sets_config_path(temp_workdir: Path, sample_config_yaml: str, monkeypatch, capsys):
    # registers the variable so the value loaded from .env is removed on teardown
    monkeypatch.setenv("CSV_PREVIEW_CONFIG", "unused")
    monkeypatch.delenv("CSV_PREVIEW_CONFIG")
    (temp_workdir / "other.yml").write_text(
        sample_config_yaml.replace("./data", "./nowhere"), encoding="utf-8"
    )
    (temp_workdir / ".env").write_text("CSV_PREVIEW_CONFIG=other.yml\n", encoding="utf-8")
    code = cli_main([])
    assert code == 1
    assert "ERROR Directory not found:" in capsys.readouterr().out


def test_cli_debug_flag(write_config, temp_workdir: Path, capsys):
    code = cli_main(["--debug"])
    out = capsys.readouterr().out
    assert code == 0
    assert "DEBUG debug mode enabled" in out


def test_cli_issues_are_logged_as_warnings(write_config, write_csv, capsys):
    write_csv("plain.csv", "Name,Value\na,1\nb,2\n")
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 0
    assert "INFO plain.csv: rows=2 columns=2 status=Needs Review score=30" in out
    assert "WARN plain.csv: No percentile columns (p1-p99) detected." in out
    assert "WARN plain.csv: No date/time column detected" in out
    assert "valid=0 needs_review=1" in out
