"""
Product Service - owns the product catalogue fixtures.
Exposes /health, /metrics, /products, /products/<id> and
/products/category/<category>.
"""
import time

from flask import Flask, jsonify
from prometheus_client import CollectorRegistry, Counter

from storefront.errors import InvalidRequest, ResourceNotFound
from storefront.instrumentation import HttpMetrics, instrument
from storefront.logs import configure_logging
from storefront.models import Product
from storefront.tracing import get_tracer, init_tracing
from storefront.web import parse_id, register_common, run

SERVICE_NAME = "product-service"

PRODUCTS = (
    Product(id=1, name="Laptop", description="High-performance laptop", price=999.99, category="Electronics"),
    Product(id=2, name="Coffee Mug", description="Ceramic coffee mug", price=15.99, category="Kitchen"),
    Product(id=3, name="Book", description="Programming guide", price=29.99, category="Books"),
    Product(id=4, name="Headphones", description="Wireless headphones", price=199.99, category="Electronics"),
)


class ProductNotFoundError(ResourceNotFound):
    message = "Product not found"


def price_table(products=PRODUCTS):
    return {p.id: p.price for p in products}


def create_app(registry=None, tracer_provider=None, products=PRODUCTS, list_delay=0.05):
    app = Flask(__name__)
    if registry is None:
        registry = CollectorRegistry()
    tracer = get_tracer(SERVICE_NAME, tracer_provider)
    instrument(app, HttpMetrics(registry))
    register_common(app, SERVICE_NAME, registry)

    product_views = Counter(
        "product_views_total",
        "Total number of product views",
        ["product_id", "category"],
        registry=registry,
    )

    @app.route("/products")
    def list_products():
        with tracer.start_as_current_span("get-products") as span:
            span.set_attribute("operation", "get-products")
            span.set_attribute("product.count", len(products))
            if list_delay:
                time.sleep(list_delay)
            return jsonify([p.to_dict() for p in products]), 200

    @app.route("/products/<product_id>")
    def get_product(product_id):
        with tracer.start_as_current_span("get-product") as span:
            try:
                pid = parse_id(product_id, "product")
            except InvalidRequest:
                span.set_attribute("error", "invalid product id")
                raise
            span.set_attribute("product.id", pid)

            for product in products:
                if product.id == pid:
                    product_views.labels(
                        product_id=str(product.id), category=product.category
                    ).inc()
                    span.set_attribute("product.name", product.name)
                    span.set_attribute("product.category", product.category)
                    span.set_attribute("product.price", product.price)
                    return jsonify(product.to_dict()), 200

            span.set_attribute("error", "product not found")
            raise ProductNotFoundError()

    @app.route("/products/category/<category>")
    def products_by_category(category):
        with tracer.start_as_current_span("get-products-by-category") as span:
            span.set_attribute("product.category", category)
            matching = [p.to_dict() for p in products if p.category == category]
            span.set_attribute("filtered.count", len(matching))
            return jsonify(matching), 200

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
