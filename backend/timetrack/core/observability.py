from typing import Optional

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from .config import settings

RESOURCE = Resource.create({"service.name": "timetrack-api", "deployment.env": settings.env})

tracer = trace.get_tracer("timetrack")
meter = metrics.get_meter("timetrack")

records_created = meter.create_counter(
    "timetrack.records.created",
    unit="1",
    description="Records inserted, by entity",
)
summaries_computed = meter.create_counter(
    "timetrack.summaries.computed",
    unit="1",
    description="Derived summaries served, by kind",
)


def configure_tracing(otlp_endpoint: Optional[str] = None) -> None:
    tracer_provider = TracerProvider(resource=RESOURCE)
    endpoint = otlp_endpoint or settings.otlp_endpoint
    if endpoint:
        tracer_provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=f"{endpoint.rstrip('/')}/v1/traces"))
        )
    trace.set_tracer_provider(tracer_provider)


def configure_metrics(otlp_endpoint: Optional[str] = None) -> None:
    endpoint = otlp_endpoint or settings.otlp_endpoint
    provider_kwargs = {"resource": RESOURCE}
    if endpoint:
        reader = PeriodicExportingMetricReader(
            OTLPMetricExporter(endpoint=f"{endpoint.rstrip('/')}/v1/metrics")
        )
        provider_kwargs["metric_readers"] = [reader]
    metrics.set_meter_provider(MeterProvider(**provider_kwargs))


def configure_observability() -> None:
    configure_tracing()
    configure_metrics()
