"""Tests for the record encoders and endpoint registry."""

import pytest

from era5_exporter.core import ConfigError
from era5_exporter.encoders import (
    CsvEncoder,
    LineProtocolEncoder,
    MetricPrefixError,
    UnsupportedEndpointError,
    format_degrees,
    resolve_encoder,
    supported_paths,
)
from era5_exporter.sources import Record

RECORD = Record(timestamp=1000, latitude=12.345, longitude=-98.765, u10=1, v10=2, t2m=3, sf=4, tcc=5, tp=6)


def test_line_protocol_record():
    encoder = LineProtocolEncoder("era5")
    assert encoder.encode(RECORD) == "era5,la=12.35,lo=-98.77 u10=1,v10=2,t2m=3,sf=4,tcc=5,tp=6 1000"
    assert encoder.query_params() == {}


def test_csv_record():
    encoder = CsvEncoder("era5")
    assert encoder.encode(RECORD) == "1000,12.35,-98.77,1,2,3,4,5,6"


def test_csv_column_mapping_uses_prefix():
    assert CsvEncoder("reanalysis").query_params() == {
        "format": "1:time:unix_ms,2:label:la,3:label:lo,"
        "4:metric:reanalysis_u10,5:metric:reanalysis_v10,6:metric:reanalysis_t2m,"
        "7:metric:reanalysis_sf,8:metric:reanalysis_tcc,9:metric:reanalysis_tp"
    }


def test_negative_metric_values():
    record = RECORD._replace(u10=-32768, tp=32767, latitude=-0.5, longitude=359.75)
    assert LineProtocolEncoder("era5").encode(record) == (
        "era5,la=-0.50,lo=359.75 u10=-32768,v10=2,t2m=3,sf=4,tcc=5,tp=32767 1000"
    )


def test_encode_batch_terminates_every_line():
    encoder = CsvEncoder("era5")
    body = encoder.encode_batch([RECORD, RECORD._replace(timestamp=2000)])
    assert body == "1000,12.35,-98.77,1,2,3,4,5,6\n2000,12.35,-98.77,1,2,3,4,5,6\n"
    assert encoder.encode_batch([]) == ""


def test_zero_coordinates_format_the_same_in_any_order():
    format_degrees.cache_clear()
    assert format_degrees(-0.0) == "0.00"
    assert format_degrees(0.0) == "0.00"

    format_degrees.cache_clear()
    assert format_degrees(0.0) == "0.00"
    assert format_degrees(-0.0) == "0.00"
    assert format_degrees(-0.001) == "0.00"

    encoder = LineProtocolEncoder("era5")
    assert encoder.encode(RECORD._replace(latitude=-0.0)) == encoder.encode(RECORD._replace(latitude=0.0))


def test_format_degrees():
    assert format_degrees(12.345) == "12.35"
    assert format_degrees(-98.765) == "-98.77"
    assert format_degrees(90.0) == "90.00"
    assert format_degrees(0.125) == "0.13"
    assert format_degrees(10.0001) == "10.00"


@pytest.mark.parametrize("prefix", ["era-5", "era 5", "", "era5\n", None])
def test_invalid_prefix_rejected(prefix):
    with pytest.raises(MetricPrefixError):
        LineProtocolEncoder(prefix)
    with pytest.raises(MetricPrefixError):
        CsvEncoder(prefix)


@pytest.mark.parametrize("prefix", ["era5", "ERA5x1"])
def test_valid_prefix_accepted(prefix):
    assert LineProtocolEncoder(prefix).metric_prefix == prefix


@pytest.mark.parametrize("path", ["/write", "/api/v2/write", "/influx/write", "/influx/api/v2/write"])
def test_line_protocol_paths(path):
    assert isinstance(resolve_encoder(path, "era5"), LineProtocolEncoder)


def test_csv_path():
    encoder = resolve_encoder("/api/v1/import/csv", "era5")
    assert isinstance(encoder, CsvEncoder)
    assert "format" in encoder.query_params()


def test_unsupported_path():
    with pytest.raises(UnsupportedEndpointError, match="not supported"):
        resolve_encoder("/api/v1/import/prometheus", "era5")
    # Construction errors share one base class.
    assert issubclass(UnsupportedEndpointError, ConfigError)
    assert issubclass(MetricPrefixError, ConfigError)


def test_supported_paths():
    assert supported_paths() == sorted(
        ["/api/v1/import/csv", "/api/v2/write", "/influx/api/v2/write", "/influx/write", "/write"]
    )
