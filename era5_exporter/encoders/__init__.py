"""Record encoders for Victoria Metrics insert endpoints."""

from .base import MetricPrefixError, RecordEncoder, format_degrees
from .csv_encoder import CsvEncoder
from .line_protocol import LineProtocolEncoder
from .registry import ENCODERS, UnsupportedEndpointError, resolve_encoder, supported_paths

__all__ = [
    "MetricPrefixError",
    "RecordEncoder",
    "format_degrees",
    "CsvEncoder",
    "LineProtocolEncoder",
    "ENCODERS",
    "UnsupportedEndpointError",
    "resolve_encoder",
    "supported_paths",
]
