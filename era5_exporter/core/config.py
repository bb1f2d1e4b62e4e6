from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .constants import METRIC_PREFIX_PATTERN


class ConfigError(RuntimeError):
    """Raised when the exporter configuration cannot be loaded or is invalid."""


# Keys accepted under the "exporter" object of config.json, mapped to
# ExportSettings field names.
EXPORTER_KEYS: Dict[str, str] = {
    "file": "file",
    "vmInsertUrl": "insert_url",
    "concurrency": "concurrency",
    "recsPerInsert": "recs_per_insert",
    "metricPrefix": "metric_prefix",
    "limitHours": "limit_hours",
    "logLevel": "log_level",
    "logFile": "log_file",
}


def load_project_config(path: Path) -> dict:
    """Return the parsed configuration dictionary from ``config.json``."""
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")
    try:
        return json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Config file {config_path} contains invalid JSON.") from exc


def exporter_settings(config: Mapping[str, object]) -> Dict[str, Any]:
    """Extract the ``exporter`` section as ExportSettings keyword arguments."""
    section = config.get("exporter") if isinstance(config, Mapping) else None
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ConfigError("The 'exporter' configuration must be an object.")

    unknown = sorted(key for key in section if key not in EXPORTER_KEYS)
    if unknown:
        raise ConfigError(f"Unknown exporter setting(s): {', '.join(unknown)}")
    return {EXPORTER_KEYS[key]: value for key, value in section.items()}


def validate_metric_prefix(metric_prefix: Optional[str], exception_cls: type[Exception] = ConfigError) -> str:
    """Ensure the metric prefix is a non-empty run of ASCII letters and digits."""
    if not isinstance(metric_prefix, str) or not re.fullmatch(METRIC_PREFIX_PATTERN, metric_prefix):
        raise exception_cls(
            f"metric prefix {metric_prefix!r} does not match '^{METRIC_PREFIX_PATTERN}$' regular expression"
        )
    return metric_prefix
