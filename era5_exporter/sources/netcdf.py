"""xarray-backed access to ERA5 NetCDF files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

import numpy as np
import xarray as xr

logger = logging.getLogger(__name__)

TIME_DIM = "time"
LATITUDE_DIM = "latitude"
LONGITUDE_DIM = "longitude"
GRID_DIMS = (TIME_DIM, LATITUDE_DIM, LONGITUDE_DIM)


class SourceError(RuntimeError):
    """Raised when an ERA5 file cannot be opened or does not have the expected layout."""


class NetcdfSource:
    """
    Thin wrapper around an ``xarray.Dataset`` opened without decoding.

    Values are read verbatim: packed int16 metrics are not scaled, and the
    time axis stays as raw hours since 1900-01-01.
    """

    def __init__(self, dataset: xr.Dataset, path: Optional[Path] = None) -> None:
        self._dataset = dataset
        self.path = path
        self._closed = False

    @classmethod
    def open(cls, path: Union[str, Path]) -> "NetcdfSource":
        source_path = Path(path)
        if not source_path.exists():
            raise SourceError(f"ERA5 file not found: {source_path}")
        try:
            dataset = xr.open_dataset(source_path, mask_and_scale=False, decode_times=False)
        except (OSError, ValueError, RuntimeError) as exc:
            raise SourceError(f"Could not open {source_path} as NetCDF: {exc}") from exc
        logger.debug(f"Opened {source_path}")
        return cls(dataset, path=source_path)

    def _variable(self, name: str) -> xr.DataArray:
        if name not in self._dataset.variables:
            raise SourceError(f"Variable '{name}' not found in {self._describe()}")
        return self._dataset[name]

    def _describe(self) -> str:
        return str(self.path) if self.path else "dataset"

    def coordinate_values(self, name: str) -> List[float]:
        """
        Return a 1-D coordinate vector as floats.

        Coordinates are stored in single precision; each value is kept as the
        shortest decimal that round-trips in float32 (12.345, not 12.3450002...).
        """
        variable = self._variable(name)
        if variable.ndim != 1:
            raise SourceError(f"Dimension '{name}' must be one-dimensional, got shape {variable.shape}")
        values = np.asarray(variable.values).astype(np.float32)
        return [float(str(value)) for value in values]

    def time_values(self) -> List[int]:
        """Return the raw hour offsets of the time dimension."""
        variable = self._variable(TIME_DIM)
        if variable.ndim != 1:
            raise SourceError(f"Dimension '{TIME_DIM}' must be one-dimensional, got shape {variable.shape}")
        values = np.asarray(variable.values)
        if not np.issubdtype(values.dtype, np.integer):
            raise SourceError(f"Dimension '{TIME_DIM}' must hold integer hours, got {values.dtype}")
        return [int(value) for value in values]

    def check_metric(self, name: str) -> None:
        """Ensure a metric variable is an int16 (time, latitude, longitude) grid."""
        variable = self._variable(name)
        if tuple(variable.dims) != GRID_DIMS:
            raise SourceError(f"Variable '{name}' has dims {tuple(variable.dims)}, expected {GRID_DIMS}")
        if variable.dtype != np.int16:
            raise SourceError(f"Variable '{name}' is stored as {variable.dtype}, expected int16")

    def read_slice(self, name: str, index: int) -> np.ndarray:
        """Read the 2-D latitude x longitude grid of ``name`` at time ``index``."""
        return np.asarray(self._dataset[name].isel({TIME_DIM: index}).values)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._dataset.close()
