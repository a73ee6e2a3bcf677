"""
Client shims for the peer services.

Each call runs in its own span and simulates the network round trip with a
fixed delay. The peer URL is resolved for the span but never dialed. Any
failure is terminal for the caller; there are no retries and no caching.
"""
import logging
import time

from storefront import config
from storefront.errors import ProductNotFound, UserNotFound
from storefront.services.products import price_table

logger = logging.getLogger(__name__)

USER_LOOKUP_DELAY = 0.025
PRODUCT_LOOKUP_DELAY = 0.030


class UserLookup:
    """Checks that a user exists. Any positive id is treated as found."""

    def __init__(self, tracer, base_url=None, delay=USER_LOOKUP_DELAY, sleep=time.sleep):
        self.tracer = tracer
        self.base_url = base_url
        self.delay = delay
        self.sleep = sleep

    def url_for(self, user_id):
        return f"{self.base_url or config.user_service_url()}/users/{user_id}"

    def __call__(self, user_id):
        with self.tracer.start_as_current_span("call-user-service") as span:
            span.set_attribute("external.service", "user-service")
            span.set_attribute("user.id", user_id)
            span.set_attribute("http.url", self.url_for(user_id))

            if self.delay:
                self.sleep(self.delay)

            if user_id <= 0:
                span.set_attribute("error", "invalid user")
                logger.info("user lookup failed", extra={"user_id": user_id})
                raise UserNotFound()


class ProductLookup:
    """Resolves a product's price from a price table keyed by product id."""

    def __init__(self, tracer, prices=None, base_url=None, delay=PRODUCT_LOOKUP_DELAY,
                 sleep=time.sleep):
        self.tracer = tracer
        self.prices = dict(price_table() if prices is None else prices)
        self.base_url = base_url
        self.delay = delay
        self.sleep = sleep

    def url_for(self, product_id):
        return f"{self.base_url or config.product_service_url()}/products/{product_id}"

    def __call__(self, product_id):
        with self.tracer.start_as_current_span("call-product-service") as span:
            span.set_attribute("external.service", "product-service")
            span.set_attribute("product.id", product_id)
            span.set_attribute("http.url", self.url_for(product_id))

            if self.delay:
                self.sleep(self.delay)

            price = self.prices.get(product_id)
            if price is None:
                span.set_attribute("error", "product not found")
                logger.info("product lookup failed", extra={"product_id": product_id})
                raise ProductNotFound(product_id)

            span.set_attribute("product.price", price)
            return price
