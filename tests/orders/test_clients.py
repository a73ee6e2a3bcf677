import pytest
from storefront import config
from storefront.errors import ProductNotFound, UserNotFound
from storefront.services.orders.clients import ProductLookup, UserLookup


def spans_named(exporter, name):
    return [s for s in exporter.get_finished_spans() if s.name == name]


# ----------------------------
# UserLookup
# ----------------------------


def test_user_lookup_accepts_positive_id(tracer, span_exporter):
    UserLookup(tracer, delay=0)(7)

    (span,) = spans_named(span_exporter, "call-user-service")
    assert span.attributes["external.service"] == "user-service"
    assert span.attributes["user.id"] == 7
    assert span.attributes["http.url"] == f"{config.DEFAULT_USER_SERVICE_URL}/users/7"
    assert "error" not in span.attributes


@pytest.mark.parametrize("user_id", [0, -1])
def test_user_lookup_rejects_non_positive_id_and_closes_span(tracer, span_exporter, user_id):
    with pytest.raises(UserNotFound):
        UserLookup(tracer, delay=0)(user_id)

    (span,) = spans_named(span_exporter, "call-user-service")
    assert span.end_time is not None
    assert span.attributes["error"] == "invalid user"


def test_user_lookup_reads_base_url_at_call_time(tracer, span_exporter, monkeypatch):
    lookup = UserLookup(tracer, delay=0)
    monkeypatch.setenv("USER_SERVICE_URL", "http://users.test:9000")
    lookup(1)

    (span,) = spans_named(span_exporter, "call-user-service")
    assert span.attributes["http.url"] == "http://users.test:9000/users/1"


def test_user_lookup_simulates_latency(tracer):
    slept = []
    UserLookup(tracer, sleep=slept.append)(1)
    assert slept == [0.025]


# ----------------------------
# ProductLookup
# ----------------------------


def test_product_lookup_returns_fixture_price(tracer, span_exporter):
    assert ProductLookup(tracer, delay=0)(2) == 15.99

    (span,) = spans_named(span_exporter, "call-product-service")
    assert span.attributes["external.service"] == "product-service"
    assert span.attributes["product.id"] == 2
    assert span.attributes["product.price"] == 15.99


def test_product_lookup_unknown_product(tracer, span_exporter):
    with pytest.raises(ProductNotFound) as excinfo:
        ProductLookup(tracer, delay=0)(99)

    assert excinfo.value.product_id == 99
    assert str(excinfo.value) == "Product 99 not found"
    (span,) = spans_named(span_exporter, "call-product-service")
    assert span.end_time is not None
    assert span.attributes["error"] == "product not found"


def test_product_lookup_uses_custom_table_and_url(tracer, span_exporter):
    lookup = ProductLookup(tracer, prices={10: 1.5}, base_url="http://catalog", delay=0)
    assert lookup(10) == 1.5
    assert lookup(10) == 1.5

    spans = spans_named(span_exporter, "call-product-service")
    assert len(spans) == 2
    assert spans[0].attributes["http.url"] == "http://catalog/products/10"
