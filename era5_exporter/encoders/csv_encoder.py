"""CSV encoder for the Victoria Metrics ``/api/v1/import/csv`` endpoint."""

from __future__ import annotations

from typing import Dict

from ..sources.record import METRIC_NAMES, Record
from .base import RecordEncoder, format_degrees


class CsvEncoder(RecordEncoder):
    """Encode records as ``ts,lat,lon,u10,v10,t2m,sf,tcc,tp`` rows."""

    def encode(self, record: Record) -> str:
        return (
            f"{record.timestamp},{format_degrees(record.latitude)},{format_degrees(record.longitude)},"
            f"{record.u10},{record.v10},{record.t2m},{record.sf},{record.tcc},{record.tp}"
        )

    def query_params(self) -> Dict[str, str]:
        """Column mapping telling Victoria Metrics how to read each CSV column."""
        columns = ["1:time:unix_ms", "2:label:la", "3:label:lo"]
        columns.extend(
            f"{position}:metric:{self.metric_prefix}_{name}"
            for position, name in enumerate(METRIC_NAMES, start=4)
        )
        return {"format": ",".join(columns)}
