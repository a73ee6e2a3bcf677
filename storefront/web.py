"""
Plumbing every service app shares: /health, /metrics, error rendering
and the development server entry point.
"""
import logging
import re
from datetime import datetime, timezone

from flask import jsonify
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from storefront import config
from storefront.errors import InvalidRequest, StorefrontError

logger = logging.getLogger(__name__)

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_DECIMAL_ID = re.compile(r"[+-]?[0-9]+")


def rfc3339_now():
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_id(raw, what):
    """Path ids must be ASCII decimal integers that fit in 64 bits."""
    if _DECIMAL_ID.fullmatch(raw) is None:
        raise InvalidRequest(f"Invalid {what} ID")
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        raise InvalidRequest(f"Invalid {what} ID")
    return value


def text_error(error):
    return error.description, error.status_code, {"Content-Type": "text/plain; charset=utf-8"}


def register_common(app, service_name, registry):
    """Add /health, /metrics and the StorefrontError handler to app."""

    @app.route("/health")
    def health():
        """Liveness and readiness."""
        return jsonify({
            "status": "healthy",
            "service": service_name,
            "timestamp": rfc3339_now(),
        }), 200

    @app.route("/metrics")
    def metrics():
        """Prometheus-compatible metrics."""
        return generate_latest(registry), 200, {"Content-Type": CONTENT_TYPE_LATEST}

    app.register_error_handler(StorefrontError, text_error)
    return app


def run(app, service_name):
    port = config.port()
    logger.info("%s starting on port %s", service_name, port)
    app.run(host="0.0.0.0", port=port, threaded=True)
