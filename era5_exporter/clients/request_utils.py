from __future__ import annotations

import urllib.parse
from typing import Mapping, MutableMapping, Optional

USER_AGENT = "era5-exporter/1.0"


def build_request_headers(base: Optional[Mapping[str, str]] = None) -> MutableMapping[str, str]:
    """
    Return default headers for insert requests.

    Args:
        base: Optional mapping of headers to seed the final set (values here win over defaults).
    """
    headers: MutableMapping[str, str] = dict(base or {})
    headers.setdefault("User-Agent", USER_AGENT)
    headers.setdefault("Accept", "*/*")
    headers.setdefault("Connection", "keep-alive")
    return headers


def split_insert_url(insert_url: str) -> urllib.parse.SplitResult:
    """Parse an insert URL, requiring an http(s) scheme and a host."""
    if not isinstance(insert_url, str) or not insert_url.strip():
        raise ValueError("Insert URL cannot be empty.")
    try:
        parts = urllib.parse.urlsplit(insert_url.strip())
        parts.port  # raises ValueError on a malformed port
    except ValueError as exc:
        raise ValueError(f"Malformed insert URL {insert_url!r}: {exc}") from exc
    if parts.scheme not in {"http", "https"}:
        raise ValueError(f"Insert URL {insert_url!r} must use http or https.")
    if not parts.netloc:
        raise ValueError(f"Insert URL {insert_url!r} has no host.")
    return parts


def merge_query_params(parts: urllib.parse.SplitResult, params: Mapping[str, str]) -> str:
    """Return the URL with ``params`` appended to its existing query string."""
    query = urllib.parse.parse_qsl(parts.query, keep_blank_values=True)
    query.extend(params.items())
    query.sort(key=lambda item: item[0])
    return urllib.parse.urlunsplit(parts._replace(query=urllib.parse.urlencode(query)))
