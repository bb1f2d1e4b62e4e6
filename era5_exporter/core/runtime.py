from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping, Optional

from .config import ConfigError, exporter_settings, load_project_config, validate_metric_prefix
from .constants import (
    DEFAULT_CONCURRENCY,
    DEFAULT_INSERT_URL,
    DEFAULT_LIMIT_HOURS,
    DEFAULT_METRIC_PREFIX,
    DEFAULT_RECS_PER_INSERT,
)


@dataclass
class ExportSettings:
    """Validated settings for one export run (defaults < config file < CLI flags)."""

    file: Optional[Path] = None
    insert_url: str = DEFAULT_INSERT_URL
    concurrency: int = DEFAULT_CONCURRENCY
    recs_per_insert: int = DEFAULT_RECS_PER_INSERT
    metric_prefix: str = DEFAULT_METRIC_PREFIX
    limit_hours: int = DEFAULT_LIMIT_HOURS
    log_level: str = "INFO"
    log_file: Optional[Path] = None
    config_path: Optional[Path] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.validate()

    @classmethod
    def load(cls, config_path: Optional[Path] = None, overrides: Optional[Mapping[str, Any]] = None) -> "ExportSettings":
        """Build settings from an optional config.json plus non-None overrides."""
        values: dict = {}
        if config_path is not None:
            values.update(exporter_settings(load_project_config(config_path)))
        for key, value in (overrides or {}).items():
            if value is not None:
                values[key] = value
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ConfigError(f"Unknown setting(s): {', '.join(unknown)}")
        return cls(config_path=config_path, **values)

    def validate(self) -> None:
        if not self.file:
            raise ConfigError("A path to an ERA5 NetCDF file is required (--file).")
        self.file = Path(self.file)
        if self.log_file:
            self.log_file = Path(self.log_file)

        self.concurrency = _as_int("concurrency", self.concurrency)
        self.recs_per_insert = _as_int("recsPerInsert", self.recs_per_insert)
        self.limit_hours = _as_int("limitHours", self.limit_hours)
        if self.concurrency <= 0:
            raise ConfigError("concurrency must be positive.")
        if self.recs_per_insert <= 0:
            raise ConfigError("recsPerInsert must be positive.")
        if self.limit_hours < 0:
            raise ConfigError("limitHours must not be negative.")

        validate_metric_prefix(self.metric_prefix)

        level = str(self.log_level).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ConfigError(f"Unknown log level '{self.log_level}'.")
        self.log_level = level


def _as_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer, got {value!r}.")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be an integer, got {value!r}.") from exc
