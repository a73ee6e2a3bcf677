"""
The create-order workflow.

    Validating -> ResolvingUser -> ResolvingProducts -> Persisting -> Recording

Lookups run one after another in request order. The first failure aborts
the attempt, and an aborted attempt leaves the store untouched, including
its id counter.
"""
import logging

from prometheus_client import Counter, Histogram

from storefront.errors import InvalidRequest, ProductNotFound, UserNotFound
from storefront.models import PENDING, Order
from storefront.web import INT64_MAX, INT64_MIN, rfc3339_now

logger = logging.getLogger(__name__)

ORDER_VALUE_BUCKETS = (10, 50, 100, 500, 1000, 5000)


class OrderMetrics:
    """Business metrics for placed orders."""

    def __init__(self, registry):
        self.orders_total = Counter(
            "orders_total",
            "Total number of orders created",
            ["status"],
            registry=registry,
        )
        self.order_value = Histogram(
            "order_value_dollars",
            "Value of orders in dollars",
            ["status"],
            buckets=ORDER_VALUE_BUCKETS,
            registry=registry,
        )

    def record(self, order):
        self.orders_total.labels(status=order.status).inc()
        self.order_value.labels(status=order.status).observe(order.total)


def _is_int(value):
    if not isinstance(value, int) or isinstance(value, bool):
        return False
    return INT64_MIN <= value <= INT64_MAX


def parse_create_request(payload):
    """Return (user_id, product_ids) from a decoded JSON body."""
    if not isinstance(payload, dict):
        raise InvalidRequest()

    user_id = payload.get("user_id")
    product_ids = payload.get("product_ids", [])
    if product_ids is None:
        product_ids = []
    if not _is_int(user_id):
        raise InvalidRequest()
    if not isinstance(product_ids, list) or not all(_is_int(p) for p in product_ids):
        raise InvalidRequest()
    return user_id, product_ids


class OrderOrchestrator:
    def __init__(self, store, user_lookup, product_lookup, metrics, tracer, now=rfc3339_now):
        self.store = store
        self.user_lookup = user_lookup
        self.product_lookup = product_lookup
        self.metrics = metrics
        self.tracer = tracer
        self.now = now

    def create_order(self, payload):
        with self.tracer.start_as_current_span("create-order") as span:
            try:
                user_id, product_ids = parse_create_request(payload)
            except InvalidRequest:
                span.set_attribute("error", "invalid request body")
                raise

            span.set_attribute("user.id", user_id)
            span.set_attribute("product.ids", product_ids)

            try:
                self.user_lookup(user_id)
            except UserNotFound:
                span.set_attribute("error", "user validation failed")
                raise

            try:
                total = self._resolve_total(product_ids)
            except ProductNotFound as exc:
                span.set_attribute("error", "product validation failed")
                logger.info("order aborted", extra={
                    "user_id": user_id, "product_id": exc.product_id,
                })
                raise

            order = self.store.append(Order(
                user_id=user_id,
                product_ids=product_ids,
                total=total,
                status=PENDING,
                created=self.now(),
            ))
            self._record(order)

            span.set_attribute("order.id", order.id)
            span.set_attribute("order.total", order.total)
            span.set_attribute("order.status", order.status)
            logger.info("order created", extra={
                "order_id": order.id, "user_id": user_id, "total": order.total,
            })
            return order

    def _resolve_total(self, product_ids):
        total = 0.0
        for product_id in product_ids:
            total += self.product_lookup(product_id)
        return total

    def _record(self, order):
        try:
            self.metrics.record(order)
        except Exception:
            logger.warning("failed to record order metrics", exc_info=True,
                           extra={"order_id": order.id})
