"""Defaults shared by the CLI, settings and pipeline."""

from __future__ import annotations

import os

DEFAULT_INSERT_URL = "http://localhost:8428/write"
DEFAULT_METRIC_PREFIX = "era5"
DEFAULT_RECS_PER_INSERT = 500
DEFAULT_CONCURRENCY = os.cpu_count() or 1
DEFAULT_LIMIT_HOURS = 0

# Connection pool timings (seconds)
DIAL_TIMEOUT_SECONDS = 30
KEEPALIVE_SECONDS = 30

METRIC_PREFIX_PATTERN = r"[A-Za-z0-9]+"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
