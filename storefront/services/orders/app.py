"""
Order Service app.
Exposes /health, /metrics, GET /orders, GET /orders/<id> and POST /orders.
"""
from flask import Flask, jsonify, request
from prometheus_client import CollectorRegistry

from storefront.errors import InvalidRequest, OrderNotFound
from storefront.instrumentation import HttpMetrics, instrument
from storefront.logs import configure_logging
from storefront.services.orders.clients import ProductLookup, UserLookup
from storefront.services.orders.orchestrator import OrderMetrics, OrderOrchestrator
from storefront.services.orders.store import OrderStore
from storefront.tracing import get_tracer, init_tracing
from storefront.web import parse_id, register_common, run

SERVICE_NAME = "order-service"


def create_app(registry=None, tracer_provider=None, store=None,
               user_lookup=None, product_lookup=None):
    app = Flask(__name__)
    if registry is None:
        registry = CollectorRegistry()
    tracer = get_tracer(SERVICE_NAME, tracer_provider)
    if store is None:
        store = OrderStore()
    instrument(app, HttpMetrics(registry))
    register_common(app, SERVICE_NAME, registry)

    orchestrator = OrderOrchestrator(
        store=store,
        user_lookup=user_lookup or UserLookup(tracer),
        product_lookup=product_lookup or ProductLookup(tracer),
        metrics=OrderMetrics(registry),
        tracer=tracer,
    )

    @app.route("/orders", methods=["GET"])
    def list_orders():
        with tracer.start_as_current_span("get-orders") as span:
            orders = store.list()
            span.set_attribute("operation", "get-orders")
            span.set_attribute("order.count", len(orders))
            return jsonify([o.to_dict() for o in orders]), 200

    @app.route("/orders/<order_id>", methods=["GET"])
    def get_order(order_id):
        with tracer.start_as_current_span("get-order") as span:
            try:
                oid = parse_id(order_id, "order")
            except InvalidRequest:
                span.set_attribute("error", "invalid order id")
                raise
            span.set_attribute("order.id", oid)

            try:
                order = store.get(oid)
            except OrderNotFound:
                span.set_attribute("error", "order not found")
                raise
            span.set_attribute("order.status", order.status)
            span.set_attribute("order.total", order.total)
            return jsonify(order.to_dict()), 200

    @app.route("/orders", methods=["POST"])
    def create_order():
        order = orchestrator.create_order(request.get_json(force=True, silent=True))
        return jsonify(order.to_dict()), 201

    return app


def main():
    configure_logging()
    provider = init_tracing(SERVICE_NAME)
    try:
        run(create_app(tracer_provider=provider), SERVICE_NAME)
    finally:
        provider.shutdown()


if __name__ == "__main__":
    main()
