from __future__ import annotations

from typing import NamedTuple, Tuple

METRIC_NAMES: Tuple[str, ...] = ("u10", "v10", "t2m", "sf", "tcc", "tp")


class Record(NamedTuple):
    """Readings taken at one grid cell at one point in time.

    Metric values are the packed int16 values stored in the source file;
    no scale/offset decoding is applied.
    """

    timestamp: int  # ms since the Unix epoch, UTC
    latitude: float
    longitude: float
    u10: int  # 10m zonal wind
    v10: int  # 10m meridional wind
    t2m: int  # 2m temperature
    sf: int  # snowfall
    tcc: int  # total cloud cover
    tp: int  # total precipitation
