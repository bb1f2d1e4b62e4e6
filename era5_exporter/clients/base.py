from __future__ import annotations

import socket
from typing import Any, List, Tuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.connection import HTTPConnection

from ..core.constants import KEEPALIVE_SECONDS
from .request_utils import build_request_headers


def keepalive_socket_options(idle_seconds: int = KEEPALIVE_SECONDS) -> List[Tuple[int, int, int]]:
    """Default urllib3 socket options plus TCP keep-alive probing after ``idle_seconds``."""
    options = list(HTTPConnection.default_socket_options)
    options.append((socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1))
    # Not every platform exposes the per-socket keep-alive knobs.
    if hasattr(socket, "TCP_KEEPIDLE"):
        options.append((socket.IPPROTO_TCP, socket.TCP_KEEPIDLE, idle_seconds))
    if hasattr(socket, "TCP_KEEPINTVL"):
        options.append((socket.IPPROTO_TCP, socket.TCP_KEEPINTVL, idle_seconds))
    return options


class PooledHTTPAdapter(HTTPAdapter):
    """
    HTTPAdapter with a fixed-size, blocking connection pool.

    ``pool_block`` makes callers wait for a free connection instead of
    opening extra ones, so at most ``max_connections`` sockets are in use.

    urllib3 pools have no idle-connection expiry, so there is no 30 s idle
    lifetime here. Sockets instead get TCP keep-alive probes after
    ``KEEPALIVE_SECONDS`` idle, and urllib3 re-dials connections the server
    has dropped (see "Idle connection lifetime" in DESIGN.md).
    """

    def __init__(self, max_connections: int, **kwargs: Any) -> None:
        self._socket_options = keepalive_socket_options()
        super().__init__(
            pool_connections=max_connections,
            pool_maxsize=max_connections,
            pool_block=True,
            max_retries=0,
            **kwargs,
        )

    def init_poolmanager(self, *args: Any, **kwargs: Any) -> None:
        kwargs["socket_options"] = self._socket_options
        super().init_poolmanager(*args, **kwargs)


def build_session(max_connections: int) -> requests.Session:
    """Create a session whose http/https traffic goes through one pooled adapter."""
    if max_connections <= 0:
        raise ValueError("max_connections must be positive.")
    session = requests.Session()
    adapter = PooledHTTPAdapter(max_connections)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers.update(build_request_headers())
    return session
