"""Basic tests to verify the package structure."""


def test_imports():
    """Test that all imports work."""
    from era5_exporter.clients import VictoriaMetricsClient
    from era5_exporter.core import ExportSettings, hours_to_epoch_ms, load_project_config
    from era5_exporter.encoders import CsvEncoder, LineProtocolEncoder, resolve_encoder
    from era5_exporter.pipeline import ExportPipeline, run_pipeline
    from era5_exporter.sources import GridScanner, Record

    assert VictoriaMetricsClient is not None
    assert ExportSettings is not None
    assert resolve_encoder is not None
    assert run_pipeline is not None
    assert GridScanner is not None
    assert Record._fields == ("timestamp", "latitude", "longitude", "u10", "v10", "t2m", "sf", "tcc", "tp")


def test_dates():
    from era5_exporter.core import EPOCH_OFFSET_SECONDS, hours_to_epoch_ms
    from era5_exporter.core.dates import epoch_ms_to_datetime

    assert EPOCH_OFFSET_SECONDS == -2208988800
    assert hours_to_epoch_ms(0) == -2208988800000
    assert hours_to_epoch_ms(438300) == (438300 * 3600 - 2208988800) * 1000
    assert epoch_ms_to_datetime(hours_to_epoch_ms(0)).isoformat() == "1900-01-01T00:00:00+00:00"
    # 1970-01-01 is 613608 hours after 1900-01-01
    assert hours_to_epoch_ms(613608) == 0
