import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from prometheus_client import CollectorRegistry

from storefront.services.orders.clients import ProductLookup, UserLookup
from storefront.services.orders.orchestrator import OrderMetrics, OrderOrchestrator
from storefront.services.orders.store import OrderStore


class CountingLookup:
    """Wraps a lookup and records every id it was called with."""

    def __init__(self, lookup):
        self.lookup = lookup
        self.calls = []

    def __call__(self, ref):
        self.calls.append(ref)
        return self.lookup(ref)


@pytest.fixture
def registry():
    return CollectorRegistry()


@pytest.fixture
def span_exporter():
    return InMemorySpanExporter()


@pytest.fixture
def tracer_provider(span_exporter):
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    yield provider
    provider.shutdown()


@pytest.fixture
def tracer(tracer_provider):
    return tracer_provider.get_tracer("tests")


@pytest.fixture
def store():
    return OrderStore()


@pytest.fixture
def user_lookup(tracer):
    return CountingLookup(UserLookup(tracer, delay=0))


@pytest.fixture
def product_lookup(tracer):
    return CountingLookup(ProductLookup(tracer, delay=0))


@pytest.fixture
def orchestrator(store, user_lookup, product_lookup, registry, tracer):
    return OrderOrchestrator(
        store=store,
        user_lookup=user_lookup,
        product_lookup=product_lookup,
        metrics=OrderMetrics(registry),
        tracer=tracer,
        now=lambda: "2026-01-01T00:00:00Z",
    )
