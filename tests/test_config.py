"""Tests for configuration loading and validation."""

import json
from pathlib import Path

import pytest

from era5_exporter.core import ConfigError, ExportSettings, load_project_config
from era5_exporter.core.constants import DEFAULT_CONCURRENCY


def write_config(tmp_path, payload):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_defaults():
    settings = ExportSettings(file="era5.nc")
    assert settings.file == Path("era5.nc")
    assert settings.insert_url == "http://localhost:8428/write"
    assert settings.concurrency == DEFAULT_CONCURRENCY
    assert settings.recs_per_insert == 500
    assert settings.metric_prefix == "era5"
    assert settings.limit_hours == 0
    assert settings.log_level == "INFO"


def test_config_file_and_overrides(tmp_path):
    path = write_config(
        tmp_path,
        {
            "exporter": {
                "file": "data/era5.nc",
                "vmInsertUrl": "http://vm:8428/api/v1/import/csv",
                "concurrency": 3,
                "recsPerInsert": 1000,
                "metricPrefix": "reanalysis",
                "logLevel": "debug",
            }
        },
    )
    settings = ExportSettings.load(path, {"concurrency": 8, "metric_prefix": None})

    assert settings.file == Path("data/era5.nc")
    assert settings.insert_url == "http://vm:8428/api/v1/import/csv"
    assert settings.concurrency == 8
    assert settings.recs_per_insert == 1000
    assert settings.metric_prefix == "reanalysis"
    assert settings.log_level == "DEBUG"


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_project_config(tmp_path / "config.json")


def test_invalid_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid JSON"):
        ExportSettings.load(path)


def test_unknown_exporter_key(tmp_path):
    path = write_config(tmp_path, {"exporter": {"file": "era5.nc", "threads": 4}})
    with pytest.raises(ConfigError, match="threads"):
        ExportSettings.load(path)


def test_file_is_required():
    with pytest.raises(ConfigError, match="--file"):
        ExportSettings.load(None, {})


@pytest.mark.parametrize(
    "overrides",
    [
        {"concurrency": 0},
        {"concurrency": "many"},
        {"recs_per_insert": -1},
        {"limit_hours": -5},
        {"metric_prefix": "era-5"},
        {"log_level": "chatty"},
    ],
)
def test_invalid_values(overrides):
    with pytest.raises(ConfigError):
        ExportSettings.load(None, {"file": "era5.nc", **overrides})
