"""
Process-wide configuration, read from the environment.
Every setting has a hardcoded fallback so a bare container still starts.
"""
import os

DEFAULT_PORT = 8080
DEFAULT_USER_SERVICE_URL = "http://user-service.default.svc.cluster.local:8080"
DEFAULT_PRODUCT_SERVICE_URL = "http://product-service.default.svc.cluster.local:8080"
DEFAULT_COLLECTOR_ENDPOINT = (
    "http://jaeger-collector.observability.svc.cluster.local:4318/v1/traces"
)


def port():
    return int(os.environ.get("PORT", DEFAULT_PORT))


def user_service_url():
    return os.environ.get("USER_SERVICE_URL") or DEFAULT_USER_SERVICE_URL


def product_service_url():
    return os.environ.get("PRODUCT_SERVICE_URL") or DEFAULT_PRODUCT_SERVICE_URL


def collector_endpoint():
    return os.environ.get("OTEL_COLLECTOR_ENDPOINT") or DEFAULT_COLLECTOR_ENDPOINT


def log_level():
    return os.environ.get("LOG_LEVEL", "INFO").upper()
