"""Victoria Metrics insert clients."""

from .base import PooledHTTPAdapter, build_session
from .victoria_metrics import VictoriaMetricsClient

__all__ = [
    "PooledHTTPAdapter",
    "build_session",
    "VictoriaMetricsClient",
]
