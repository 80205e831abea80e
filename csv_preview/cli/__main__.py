from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from csv_preview.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from csv_preview.logging.init import log_summary, set_debug, setup_logging
from csv_preview.services.formatting import (
    render_file_stats,
    render_profiles,
    render_quantiles,
    render_rows,
    render_validation,
)
from csv_preview.services.session import PreviewSession, ProcessingError, preview_all, scan_csv_files
from csv_preview.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, then the YAML config (explicit --config / CSV_PREVIEW_CONFIG must
  exist; the default config/preview.yml is optional)
- Collect CSV files from the given paths (directories are scanned, non-recursive)
  or from source_directory
- Preview every file, optionally printing the full preview, then the SUMMARY line
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

CONFIG_ENV_VAR = "CSV_PREVIEW_CONFIG"


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv; existing environment variables win by default."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="csv-preview",
        description="Preview, profile and validate CSV files",
    )
    p.add_argument("paths", nargs="*", type=Path, help="CSV files or directories (default: source_directory)")
    p.add_argument("--config", type=Path, default=None, help=f"YAML config (default: {DEFAULT_CONFIG_PATH})")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print file stats, validation and a row page")
    p.add_argument("--columns", action="store_true", help="With --inspect-data: also print column profiles")
    p.add_argument("--page", type=int, default=1, help="With --inspect-data: 1-based row page to print")
    return p.parse_args(argv)


def _resolve_config_path(arg: Path | None) -> tuple[Path, bool]:
    if arg is not None:
        return arg, True
    env_value = os.getenv(CONFIG_ENV_VAR)
    if env_value:
        return Path(env_value), True
    return DEFAULT_CONFIG_PATH, False


def _collect_files(paths: list[Path], source_directory: str | None) -> list[Path]:
    if not paths:
        if not source_directory:
            raise ProcessingError("no input paths given and no source_directory configured")
        return scan_csv_files(Path(source_directory))
    files: list[Path] = []
    for p in paths:
        if p.is_dir():
            files.extend(scan_csv_files(p))
        else:
            files.append(p)
    return files


def _print_preview(session: PreviewSession, page: int, show_columns: bool) -> None:
    parsed = session.parsed
    if parsed is None or session.file is None or session.validation is None:
        return
    print(f"FILE: {session.file.name}")
    print(render_file_stats(session.file.name, session.file.size_bytes, parsed))
    print(render_validation(session.validation))
    if session.quantiles is not None:
        print(render_quantiles(session.quantiles))
    rows = session.page(page)
    print(f"ROWS page {page}/{session.page_count} (showing {len(rows)} of {parsed.row_count:,})")
    print(render_rows(rows, parsed.headers, session.validation.percentile_columns))
    if show_columns:
        print(render_profiles(session.profiles))


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # Only read sys.argv when no argv is given; [] means "no arguments"
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    config_path, required = _resolve_config_path(args.config)
    try:
        settings = load_config(config_path, required=required)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    try:
        files = _collect_files(args.paths, settings.source_directory)
    except ProcessingError as e:
        logger.error(str(e))
        return EXIT_FATAL

    logger.info(f"Previewing {len(files)} file(s)")

    on_preview = None
    if args.inspect_data:
        def on_preview(session: PreviewSession) -> None:
            _print_preview(session, args.page, args.columns)

    result = preview_all(files, settings, on_preview=on_preview)

    summary_line = render_summary_line(result.total_files, result)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line.removeprefix("SUMMARY "))

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
