"""Core utilities for the ERA5 exporter."""

from .config import ConfigError, load_project_config, validate_metric_prefix
from .dates import EPOCH_OFFSET_SECONDS, hours_to_epoch_ms
from .runtime import ExportSettings

__all__ = [
    "ConfigError",
    "load_project_config",
    "validate_metric_prefix",
    "EPOCH_OFFSET_SECONDS",
    "hours_to_epoch_ms",
    "ExportSettings",
]
