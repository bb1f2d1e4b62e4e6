"""Base encoder class for Victoria Metrics insert formats."""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import ROUND_HALF_UP, Decimal
from functools import lru_cache
from typing import Dict, Iterable

from ..core.config import ConfigError, validate_metric_prefix
from ..sources.record import Record


class MetricPrefixError(ConfigError):
    """Raised when the metric prefix is not a plain alphanumeric name."""


_HUNDREDTHS = Decimal("0.01")


@lru_cache(maxsize=8192)
def format_degrees(value: float) -> str:
    """
    Format a coordinate with two decimals, rounding half away from zero.

    Anything that rounds to zero is written unsigned, so ``-0.0`` and ``0.0``
    (which also share a cache key) both give ``0.00``.
    """
    rounded = Decimal(repr(value)).quantize(_HUNDREDTHS, rounding=ROUND_HALF_UP)
    if rounded.is_zero():
        rounded = rounded.copy_abs()
    return str(rounded)


class RecordEncoder(ABC):
    """
    Abstract base class for record encoders.

    An encoder turns one record into one line of text for a specific insert
    endpoint, and declares the query parameters that endpoint needs.
    """

    def __init__(self, metric_prefix: str) -> None:
        self.metric_prefix = validate_metric_prefix(metric_prefix, MetricPrefixError)

    @abstractmethod
    def encode(self, record: Record) -> str:
        """Return a single record as one line, without the trailing newline."""

    def query_params(self) -> Dict[str, str]:
        """Query parameters the endpoint requires. Override if needed."""
        return {}

    def encode_batch(self, records: Iterable[Record]) -> str:
        """Encode records one per line, each line terminated by a newline."""
        return "".join(f"{self.encode(record)}\n" for record in records)
