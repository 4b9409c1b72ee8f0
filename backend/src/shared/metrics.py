from opentelemetry import metrics
from opentelemetry.exporter.prometheus import PrometheusMetricReader
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import ConsoleMetricExporter, PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource

from .config import settings


def setup_metrics(app_name: str) -> None:
    """Configure OpenTelemetry metrics."""

    resource = Resource.create({"service.name": app_name})

    # Prometheus (pull model); the embedding application exposes the endpoint
    readers = [PrometheusMetricReader()]

    if settings.OTEL_CONSOLE_EXPORT:
        readers.append(PeriodicExportingMetricReader(ConsoleMetricExporter()))

    provider = MeterProvider(resource=resource, metric_readers=readers)

    metrics.set_meter_provider(provider)
