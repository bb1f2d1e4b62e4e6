"""Sequential reader turning ERA5 grids into per-timestamp record batches."""

from __future__ import annotations

import itertools
import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union

from ..core.dates import epoch_ms_to_datetime, hours_to_epoch_ms_list
from .netcdf import LATITUDE_DIM, LONGITUDE_DIM, NetcdfSource
from .record import METRIC_NAMES, Record

logger = logging.getLogger(__name__)


class ScanError(RuntimeError):
    """Raised when a metric slice cannot be read while scanning."""


class GridScanner:
    """
    Retrieve metric values from an ERA5 source one timestamp at a time.

    Each successful ``scan()`` materialises ``len(latitudes) * len(longitudes)``
    records for the current timestamp, latitude outer and longitude inner.
    ``records()`` hands that batch over to the caller and forgets it.

    Usage::

        with GridScanner.open("era5.nc") as scanner:
            for batch in scanner:
                ...
    """

    def __init__(self, source: NetcdfSource, limit_hours: Optional[int] = None) -> None:
        self._source = source
        self.latitudes: Tuple[float, ...] = tuple(source.coordinate_values(LATITUDE_DIM))
        self.longitudes: Tuple[float, ...] = tuple(source.coordinate_values(LONGITUDE_DIM))

        if limit_hours is not None and limit_hours < 0:
            raise ValueError(f"limit_hours must not be negative, got {limit_hours}")
        hours = source.time_values()
        if limit_hours:
            hours = hours[:limit_hours]
        self.timestamps: Tuple[int, ...] = tuple(hours_to_epoch_ms_list(hours))

        for name in METRIC_NAMES:
            source.check_metric(name)

        self._pos = 0
        self._records: List[Record] = []
        self._error: Optional[ScanError] = None

    @classmethod
    def open(cls, path: Union[str, Path], limit_hours: Optional[int] = None) -> "GridScanner":
        """Open an ERA5 NetCDF file; raises SourceError if it is unusable."""
        source = NetcdfSource.open(path)
        try:
            return cls(source, limit_hours=limit_hours)
        except Exception:
            source.close()
            raise

    @property
    def position(self) -> int:
        return self._pos

    @property
    def error(self) -> Optional[ScanError]:
        """The error that stopped scanning, if any."""
        return self._error

    def total_record_count(self) -> int:
        # 6 is the number of metrics.
        return len(self.timestamps) * len(self.latitudes) * len(self.longitudes) * len(METRIC_NAMES)

    def summary(self) -> Dict[str, object]:
        """Return summary information about the dataset suitable for logging."""
        info: Dict[str, object] = {
            "dims": ["ts", "lo", "la"],
            "metrics": list(METRIC_NAMES),
            "tsCnt": len(self.timestamps),
            "laCnt": len(self.latitudes),
            "loCnt": len(self.longitudes),
            "totalRecCnt": self.total_record_count(),
        }
        if self.timestamps:
            info["first"] = epoch_ms_to_datetime(self.timestamps[0]).isoformat()
            info["last"] = epoch_ms_to_datetime(self.timestamps[-1]).isoformat()
        return info

    def scan(self) -> bool:
        """
        Read all records for the next timestamp.

        Returns False once every timestamp has been read or a previous scan
        failed. Raises ScanError if a metric slice cannot be read.
        """
        if self._error is not None or self._pos >= len(self.timestamps):
            return False

        grids = [self._read(name) for name in METRIC_NAMES]
        timestamp = self.timestamps[self._pos]
        columns = zip(*(grid.ravel().tolist() for grid in grids))
        cells = itertools.product(self.latitudes, self.longitudes)
        self._records = [
            Record(timestamp, latitude, longitude, *values)
            for (latitude, longitude), values in zip(cells, columns)
        ]
        self._pos += 1
        return True

    def _read(self, name: str):
        try:
            grid = self._source.read_slice(name, self._pos)
        except Exception as exc:  # pylint: disable=broad-except
            self._error = ScanError(f"could not read '{name}' at time index {self._pos}: {exc}")
            raise self._error from exc

        expected = (len(self.latitudes), len(self.longitudes))
        if grid.shape != expected:
            self._error = ScanError(
                f"'{name}' at time index {self._pos} has shape {grid.shape}, expected {expected}"
            )
            raise self._error
        return grid

    def records(self) -> List[Record]:
        """
        Return the records read by the last ``scan()``.

        Ownership moves to the caller: later calls without a new ``scan()``
        return an empty list.
        """
        records, self._records = self._records, []
        return records

    def __iter__(self) -> Iterator[List[Record]]:
        while self.scan():
            yield self.records()

    def close(self) -> None:
        self._source.close()

    def __enter__(self) -> "GridScanner":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
