from unittest.mock import patch

from shared.config import Settings
from shared.logging import setup_logging
from shared.metrics import setup_metrics
from shared.telemetry import configure_telemetry
from shared.tracing import setup_tracing


def test_settings_defaults(monkeypatch):
    """Test default settings values."""
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("APP_NAME", raising=False)
    monkeypatch.delenv("OTEL_CONSOLE_EXPORT", raising=False)

    settings = Settings(_env_file=None)

    assert settings.APP_NAME == "certkeys"
    assert settings.LOG_LEVEL == "INFO"
    assert settings.OTEL_CONSOLE_EXPORT is True


def test_settings_from_environment(monkeypatch):
    """Test that environment variables override defaults."""
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("OTEL_CONSOLE_EXPORT", "false")

    settings = Settings(_env_file=None)

    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.OTEL_CONSOLE_EXPORT is False


def test_setup_logging():
    """Test that setup_logging configures OTel provider."""
    with patch("shared.logging.set_logger_provider") as mock_set_provider, \
         patch("shared.logging.LoggerProvider") as mock_provider_cls, \
         patch("shared.logging.LoggingHandler"), \
         patch("shared.logging.logging.getLogger"), \
         patch("shared.logging.BatchLogRecordProcessor"), \
         patch("shared.logging.ConsoleLogRecordExporter"):

        setup_logging()

        mock_provider_cls.assert_called_once()
        mock_set_provider.assert_called_once()


def test_setup_logging_configures_root_logger_only():
    """Test that handlers go on the root logger, which every certkeys module logger reaches."""
    with patch("shared.logging.set_logger_provider"), \
         patch("shared.logging.LoggerProvider"), \
         patch("shared.logging.LoggingHandler") as mock_handler_cls, \
         patch("shared.logging.logging.getLogger") as mock_get_logger, \
         patch("shared.logging.BatchLogRecordProcessor"), \
         patch("shared.logging.ConsoleLogRecordExporter"):

        setup_logging()

        assert mock_get_logger.call_args_list
        assert all(c.args == () for c in mock_get_logger.call_args_list)
        mock_get_logger.return_value.addHandler.assert_any_call(mock_handler_cls.return_value)


def test_setup_logging_without_console_export():
    """Test that no console processor is attached when export is disabled."""
    with patch("shared.logging.settings") as mock_settings, \
         patch("shared.logging.set_logger_provider"), \
         patch("shared.logging.LoggerProvider") as mock_provider_cls, \
         patch("shared.logging.LoggingHandler"), \
         patch("shared.logging.logging.getLogger"), \
         patch("shared.logging.BatchLogRecordProcessor") as mock_processor:
        mock_settings.OTEL_CONSOLE_EXPORT = False
        mock_settings.LOG_LEVEL = "INFO"

        setup_logging()

        mock_processor.assert_not_called()
        mock_provider_cls.return_value.add_log_record_processor.assert_not_called()


def test_setup_metrics():
    """Test that setup_metrics configures OTel meter provider."""
    with patch("shared.metrics.MeterProvider") as mock_provider_cls, \
         patch("shared.metrics.metrics.set_meter_provider") as mock_set_provider, \
         patch("shared.metrics.PrometheusMetricReader"), \
         patch("shared.metrics.PeriodicExportingMetricReader"), \
         patch("shared.metrics.ConsoleMetricExporter"):

        setup_metrics("test-app")

        mock_provider_cls.assert_called_once()
        mock_set_provider.assert_called_once()


def test_setup_tracing():
    """Test that setup_tracing configures OTel tracer provider."""
    with patch("shared.tracing.TracerProvider") as mock_provider_cls, \
         patch("shared.tracing.trace.set_tracer_provider") as mock_set_provider, \
         patch("shared.tracing.BatchSpanProcessor"), \
         patch("shared.tracing.ConsoleSpanExporter"):

        setup_tracing("test-app")

        mock_provider_cls.assert_called_once()
        mock_provider_cls.return_value.add_span_processor.assert_called_once()
        mock_set_provider.assert_called_once()


def test_configure_telemetry_runs_all_setup():
    """Test that configure_telemetry wires logging, tracing and metrics."""
    with patch("shared.telemetry.setup_logging") as mock_logging, \
         patch("shared.telemetry.setup_tracing") as mock_tracing, \
         patch("shared.telemetry.setup_metrics") as mock_metrics, \
         patch("shared.telemetry.LoggingInstrumentor") as mock_instrumentor:

        configure_telemetry("embedding-app")

        mock_logging.assert_called_once()
        mock_tracing.assert_called_once_with("embedding-app")
        mock_metrics.assert_called_once_with("embedding-app")
        mock_instrumentor.return_value.instrument.assert_called_once_with(set_logging_format=True)
