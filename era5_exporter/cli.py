"""
Command line entry point: export an ERA5 NetCDF file into Victoria Metrics.

Example:
    era5-export --file era5.nc --vm-insert-url http://localhost:8428/api/v1/import/csv
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .clients import VictoriaMetricsClient
from .core.config import ConfigError
from .core.constants import LOG_FORMAT
from .core.runtime import ExportSettings
from .encoders import supported_paths
from .pipeline import run_pipeline
from .sources import GridScanner, SourceError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Export ERA5 reanalysis data into Victoria Metrics")
    parser.add_argument("--config", type=Path, default=None, help="Optional JSON config with an 'exporter' section")
    parser.add_argument("--file", type=Path, default=None, help="Path to an ERA5 file in NetCDF format")
    parser.add_argument(
        "--concurrency", type=int, default=None, help="Number of concurrent requests to Victoria Metrics (default: CPU count)"
    )
    parser.add_argument(
        "--recs-per-insert", type=int, default=None, help="Number of records sent to Victoria Metrics in one request (default: 500)"
    )
    parser.add_argument(
        "--vm-insert-url",
        dest="insert_url",
        type=str,
        default=None,
        help=f"Victoria Metrics insert API URL (default: InfluxDB line protocol). Supported paths: {', '.join(supported_paths())}",
    )
    parser.add_argument(
        "--metric-prefix", type=str, default=None, help="Prefix added to the metric names (default: era5, cannot be empty)"
    )
    parser.add_argument(
        "--limit-hours", type=int, default=None, help="Export only this many hours of data (default: 0, no limit)"
    )
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (default: INFO)")
    parser.add_argument("--log-file", type=Path, default=None, help="Also write logs to this file")
    return parser


def configure_logging(settings: ExportSettings) -> None:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.log_file:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT, handlers=handlers, force=True)


def load_settings(args: argparse.Namespace) -> ExportSettings:
    overrides = {
        "file": args.file,
        "insert_url": args.insert_url,
        "concurrency": args.concurrency,
        "recs_per_insert": args.recs_per_insert,
        "metric_prefix": args.metric_prefix,
        "limit_hours": args.limit_hours,
        "log_level": args.log_level,
        "log_file": args.log_file,
    }
    return ExportSettings.load(args.config, overrides)


def run_export(settings: ExportSettings) -> int:
    """Run one export. Returns the process exit status."""
    try:
        client = VictoriaMetricsClient(settings.insert_url, settings.concurrency, settings.metric_prefix)
    except ConfigError as exc:
        logger.error(f"Could not create new VM client: {exc}")
        return 1

    with client:
        try:
            scanner = GridScanner.open(settings.file, limit_hours=settings.limit_hours)
        except SourceError as exc:
            logger.error(f"Could not create an ERA5 scanner: {exc}")
            return 1

        with scanner:
            summary = " ".join(f"{key}={value}" for key, value in scanner.summary().items())
            logger.info(f"ERA5 summary {summary}")
            target = " ".join(f"{key}={value}" for key, value in client.describe().items())
            logger.info(f"Victoria Metrics {target}")

            result = run_pipeline(
                scanner,
                client,
                concurrency=settings.concurrency,
                recs_per_insert=settings.recs_per_insert,
            )

    logger.info(
        f"Export complete: {result.records:,} records in {result.batches} batches, "
        f"{result.elapsed_seconds:.2f} seconds"
    )
    if result.scan_error is not None:
        logger.warning(f"Export stopped early after a read error: {result.scan_error}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(args)
    except ConfigError as exc:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, force=True)
        logger.error(f"Invalid configuration: {exc}")
        return 1

    configure_logging(settings)
    try:
        return run_export(settings)
    except KeyboardInterrupt:
        logger.info("ERA5 export interrupted, shutting down")
        return 130


if __name__ == "__main__":
    sys.exit(main())
