from __future__ import annotations

import datetime as dt
from typing import Iterable, List

# TZ=UTC date --date="1900-01-01 00:00:00" +%s
EPOCH_OFFSET_SECONDS = -2208988800


def hours_to_epoch_ms(hours: int) -> int:
    """Convert hours since 1900-01-01T00:00:00Z into Unix epoch milliseconds."""
    return (int(hours) * 3600 + EPOCH_OFFSET_SECONDS) * 1000


def hours_to_epoch_ms_list(hours: Iterable[int]) -> List[int]:
    """Convert a sequence of hour offsets, keeping their order."""
    return [hours_to_epoch_ms(value) for value in hours]


def epoch_ms_to_datetime(epoch_ms: int) -> dt.datetime:
    """Return the UTC datetime for an epoch millisecond value (used in log output)."""
    return dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc) + dt.timedelta(milliseconds=epoch_ms)
