#!/usr/bin/env python3
"""
ERA5 to Victoria Metrics export runner.

Reads an ERA5 NetCDF file one hour at a time and inserts every grid cell
into Victoria Metrics using concurrent workers. See ``--help`` for flags.
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from era5_exporter.cli import main


if __name__ == "__main__":
    sys.exit(main())
