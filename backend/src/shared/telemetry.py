"""One-call telemetry bootstrap for applications embedding certkeys."""

from opentelemetry.instrumentation.logging import LoggingInstrumentor

from .config import settings
from .logging import setup_logging
from .metrics import setup_metrics
from .tracing import setup_tracing


def configure_telemetry(app_name: str | None = None) -> None:
    """Install logging, tracing and metrics providers.

    Args:
        app_name: Service name reported to exporters. Defaults to APP_NAME.
    """
    name = app_name or settings.APP_NAME

    setup_logging()
    setup_tracing(name)
    setup_metrics(name)

    # Inject trace/span ids into log records
    LoggingInstrumentor().instrument(set_logging_format=True)
