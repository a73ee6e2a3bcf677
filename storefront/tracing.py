"""
OpenTelemetry setup. Spans are exported over OTLP/HTTP to the collector.
"""
import logging

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from storefront import config

logger = logging.getLogger(__name__)

SERVICE_VERSION_TAG = "v1.0.0"


def init_tracing(service_name, endpoint=None):
    """Build a tracer provider for service_name and install it globally."""
    endpoint = endpoint or config.collector_endpoint()
    provider = TracerProvider(
        resource=Resource.create(
            {SERVICE_NAME: service_name, SERVICE_VERSION: SERVICE_VERSION_TAG}
        )
    )
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint)))
    trace.set_tracer_provider(provider)
    logger.info("tracing initialised", extra={"service": service_name, "endpoint": endpoint})
    return provider


def get_tracer(service_name, tracer_provider=None):
    if tracer_provider is None:
        return trace.get_tracer(service_name)
    return tracer_provider.get_tracer(service_name)
