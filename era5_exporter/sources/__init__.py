"""ERA5 grid sources."""

from .netcdf import NetcdfSource, SourceError
from .record import METRIC_NAMES, Record
from .scanner import GridScanner, ScanError

__all__ = [
    "NetcdfSource",
    "SourceError",
    "METRIC_NAMES",
    "Record",
    "GridScanner",
    "ScanError",
]
