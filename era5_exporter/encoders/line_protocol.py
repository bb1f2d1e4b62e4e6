"""InfluxDB line protocol encoder."""

from __future__ import annotations

from ..sources.record import Record
from .base import RecordEncoder, format_degrees


class LineProtocolEncoder(RecordEncoder):
    """
    Encode records as InfluxDB line protocol v2.

    ``<prefix>,la=<lat>,lo=<lon> u10=..,v10=..,t2m=..,sf=..,tcc=..,tp=.. <ts>``

    Victoria Metrics stores each field as ``<prefix>_<field>`` with ``la``/``lo``
    labels.
    """

    def encode(self, record: Record) -> str:
        return (
            f"{self.metric_prefix},la={format_degrees(record.latitude)},lo={format_degrees(record.longitude)} "
            f"u10={record.u10},v10={record.v10},t2m={record.t2m},"
            f"sf={record.sf},tcc={record.tcc},tp={record.tp} "
            f"{record.timestamp}"
        )
