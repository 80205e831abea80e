from __future__ import annotations

import json

import jsonschema
import pytest
import yaml
from jsonschema.exceptions import ValidationError

from csv_preview.config.loader import SCHEMA_PATH, ConfigError, load_config

"""Config schema contract test."""


def _schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def test_config_schema_valid_example(sample_config_yaml: str):
    jsonschema.validate(yaml.safe_load(sample_config_yaml), _schema())


def test_config_schema_rejects_unknown_key():
    with pytest.raises(ValidationError):
        jsonschema.validate({"database": {"host": "localhost"}}, _schema())


@pytest.mark.parametrize(
    "snippet",
    [
        "sheet_mappings: {}\n",
        "median_strategy: mean\n",
        "preview_rows: many\n",
        "percentile_range: [1, 50, 99]\n",
        "missing_value_threshold: 1.5\n",
        "percentile_prefixes: []\n",
    ],
)
def test_invalid_config_is_rejected(temp_workdir, snippet: str):
    p = temp_workdir / "config" / "preview.yml"
    p.write_text(snippet, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(p)
    assert "config validation failed" in str(e.value)
