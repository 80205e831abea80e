from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from csv_preview.models.config_models import Heuristics, PreviewSettings

"""Config loader.

Responsibilities:
- Load the YAML config (config/preview.yml by default)
- Validate it against the packaged JSON schema (config_schema.json)
- Apply defaults for every key that is not present
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
    "settings_from_dict",
]

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/preview.yml")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or the
            config data fails schema validation (unknown keys, wrong types, ...).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def settings_from_dict(data: dict[str, Any]) -> PreviewSettings:
    """Build PreviewSettings from an already validated mapping."""
    defaults = PreviewSettings()
    base = defaults.heuristics

    low_high = data.get("percentile_range")
    if low_high is not None:
        low, high = int(low_high[0]), int(low_high[1])
        if low > high:
            raise ConfigError(f"percentile_range must be ascending: {low_high}")
        percentile_range = (low, high)
    else:
        percentile_range = base.percentile_range

    heuristics = Heuristics(
        percentile_prefixes=tuple(data.get("percentile_prefixes", base.percentile_prefixes)),
        percentile_range=percentile_range,
        date_tokens=tuple(data.get("date_tokens", base.date_tokens)),
    )
    return PreviewSettings(
        source_directory=data.get("source_directory", defaults.source_directory),
        max_file_size_mb=data.get("max_file_size_mb", defaults.max_file_size_mb),
        encoding=data.get("encoding", defaults.encoding),
        preview_rows=data.get("preview_rows", defaults.preview_rows),
        min_recommended_rows=data.get("min_recommended_rows", defaults.min_recommended_rows),
        missing_value_threshold=float(
            data.get("missing_value_threshold", defaults.missing_value_threshold)
        ),
        median_strategy=data.get("median_strategy", defaults.median_strategy),
        date_formats=tuple(data.get("date_formats", defaults.date_formats)),
        heuristics=heuristics,
    )


def load_config(path: Path | None = None, *, required: bool = True) -> PreviewSettings:
    """Load settings from a YAML file.

    Args:
        path: Config file path (DEFAULT_CONFIG_PATH when None)
        required: When False, a missing file yields the built-in defaults

    Raises:
        ConfigError: Missing (required) file, invalid YAML or schema violation
    """
    path = path if path is not None else DEFAULT_CONFIG_PATH
    if not path.exists():
        if required:
            raise ConfigError(f"config file not found: {path}")
        return PreviewSettings()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)
    return settings_from_dict(data)
