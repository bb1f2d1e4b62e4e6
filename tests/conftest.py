"""Shared fixtures: small in-memory ERA5-like datasets."""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pytest
import xarray as xr

from era5_exporter.sources import METRIC_NAMES

GRID_DIMS = ("time", "latitude", "longitude")


def make_dataset(
    hours: Sequence[int] = (1_000_000, 1_000_001),
    latitudes: Sequence[float] = (10.5, 10.25),
    longitudes: Sequence[float] = (0.0, 0.25, 0.5),
) -> xr.Dataset:
    """
    Build a dataset shaped like an ERA5 download.

    Metric ``k`` (in METRIC_NAMES order) holds ``100 * k + flat_index`` so
    every value identifies its metric, hour and cell.
    """
    shape = (len(hours), len(latitudes), len(longitudes))
    flat = np.arange(int(np.prod(shape))).reshape(shape)
    data_vars = {
        name: (GRID_DIMS, (flat + 100 * offset).astype(np.int16))
        for offset, name in enumerate(METRIC_NAMES)
    }
    coords = {
        "time": np.asarray(hours, dtype=np.int32),
        "latitude": np.asarray(latitudes, dtype=np.float32),
        "longitude": np.asarray(longitudes, dtype=np.float32),
    }
    return xr.Dataset(data_vars, coords=coords)


@pytest.fixture
def dataset() -> xr.Dataset:
    return make_dataset()


@pytest.fixture
def netcdf_file(tmp_path, dataset):
    path = tmp_path / "era5.nc"
    dataset.to_netcdf(path)
    return path
