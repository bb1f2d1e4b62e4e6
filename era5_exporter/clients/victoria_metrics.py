from __future__ import annotations

import logging
from typing import Dict, Sequence

import requests

from ..core.config import ConfigError
from ..core.constants import DIAL_TIMEOUT_SECONDS
from ..encoders import RecordEncoder, resolve_encoder
from ..sources.record import Record
from .base import build_session
from .request_utils import merge_query_params, split_insert_url

logger = logging.getLogger(__name__)

DRAIN_CHUNK_SIZE = 64 * 1024


class VictoriaMetricsClient:
    """
    Victoria Metrics client inserting ERA5 records over HTTP.

    The insert URL path selects the wire format (line protocol or CSV), see
    ``era5_exporter.encoders.registry``. One instance is shared by all
    pipeline workers; the underlying pool never opens more than
    ``max_connections`` connections.

    Inserts are best effort: failures are logged, never raised or retried.
    """

    def __init__(self, insert_url: str, max_connections: int, metric_prefix: str) -> None:
        try:
            parts = split_insert_url(insert_url)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
        if max_connections <= 0:
            raise ConfigError("max_connections must be positive.")

        self.encoder: RecordEncoder = resolve_encoder(parts.path, metric_prefix)
        self.insert_url: str = merge_query_params(parts, self.encoder.query_params())
        self.max_connections = max_connections
        self.metric_prefix = metric_prefix
        self._session = build_session(max_connections)

    def insert(self, records: Sequence[Record]) -> None:
        """POST one chunk of records. Errors are logged and swallowed."""
        body = self.encoder.encode_batch(records).encode("utf-8")
        try:
            response = self._session.post(
                self.insert_url,
                data=body,
                headers={"Content-Type": "text/plain"},
                timeout=(DIAL_TIMEOUT_SECONDS, None),
                stream=True,
            )
        except requests.RequestException as exc:
            logger.error(f"Could not post data: {exc}")
            return

        try:
            if response.status_code != requests.codes.no_content:
                logger.warning(f"Unexpected status {response.status_code} from {self.insert_url}")
            self._drain(response)
        finally:
            response.close()

    @staticmethod
    def _drain(response: requests.Response) -> None:
        # Reading the body to the end lets the connection go back to the pool.
        try:
            for _ in response.iter_content(chunk_size=DRAIN_CHUNK_SIZE):
                pass
        except requests.RequestException as exc:
            logger.error(f"Failed to drain response body: {exc}")

    def describe(self) -> Dict[str, object]:
        return {
            "url": self.insert_url,
            "format": type(self.encoder).__name__,
            "maxConns": self.max_connections,
        }

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "VictoriaMetricsClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
