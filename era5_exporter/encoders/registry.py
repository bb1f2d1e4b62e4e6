"""Insert endpoint registry."""

from __future__ import annotations

from types import MappingProxyType
from typing import List, Mapping, Type

from ..core.config import ConfigError
from .base import RecordEncoder
from .csv_encoder import CsvEncoder
from .line_protocol import LineProtocolEncoder


class UnsupportedEndpointError(ConfigError):
    """Raised when the insert URL path has no registered encoder."""


ENCODERS: Mapping[str, Type[RecordEncoder]] = MappingProxyType(
    {
        "/influx/write": LineProtocolEncoder,
        "/influx/api/v2/write": LineProtocolEncoder,
        "/write": LineProtocolEncoder,
        "/api/v2/write": LineProtocolEncoder,
        "/api/v1/import/csv": CsvEncoder,
    }
)


def supported_paths() -> List[str]:
    return sorted(ENCODERS)


def resolve_encoder(path: str, metric_prefix: str) -> RecordEncoder:
    """
    Factory function returning the encoder for an insert endpoint path.

    Args:
        path: URL path of the insert endpoint, e.g. ``/api/v1/import/csv``.
        metric_prefix: Prefix for metric names; must match ``^[A-Za-z0-9]+$``.

    Returns:
        Configured encoder instance.

    Raises:
        UnsupportedEndpointError: If no encoder is registered for ``path``.
        MetricPrefixError: If the prefix is invalid.
    """
    encoder_cls = ENCODERS.get(path)
    if encoder_cls is None:
        raise UnsupportedEndpointError(
            f"inserting into {path!r} is not supported; use one of: {', '.join(supported_paths())}"
        )
    return encoder_cls(metric_prefix)
