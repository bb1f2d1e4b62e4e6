"""Stream ERA5 reanalysis grids into Victoria Metrics."""

__version__ = "0.1.0"
