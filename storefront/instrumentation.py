"""
Request instrumentation shared by every service.

InstrumentationMiddleware wraps a WSGI app. It times each request and counts
completions by method, path and final status. The status is captured from
start_response, so the middleware does not depend on Flask's response type.
"""
import logging
import time

from prometheus_client import Counter, Histogram

logger = logging.getLogger(__name__)


class HttpMetrics:
    """Request counter and latency histogram bound to one registry."""

    def __init__(self, registry):
        self.requests_total = Counter(
            "http_requests_total",
            "Total number of HTTP requests",
            ["method", "endpoint", "status"],
            registry=registry,
        )
        self.request_duration = Histogram(
            "http_request_duration_seconds",
            "Duration of HTTP requests",
            ["method", "endpoint"],
            registry=registry,
        )

    def observe(self, method, endpoint, status, duration):
        self.request_duration.labels(method=method, endpoint=endpoint).observe(duration)
        self.requests_total.labels(
            method=method, endpoint=endpoint, status=str(status)
        ).inc()


class StatusRecorder:
    """Wraps start_response and remembers the last status code written."""

    def __init__(self, start_response, default=200):
        self._start_response = start_response
        self.status_code = default

    def __call__(self, status, headers, exc_info=None):
        self.status_code = int(status.split(" ", 1)[0])
        if exc_info is None:
            return self._start_response(status, headers)
        return self._start_response(status, headers, exc_info)


class InstrumentationMiddleware:
    def __init__(self, app, metrics):
        self.app = app
        self.metrics = metrics

    def __call__(self, environ, start_response):
        method = environ.get("REQUEST_METHOD", "GET")
        path = environ.get("PATH_INFO", "") or "/"
        recorder = StatusRecorder(start_response)
        start = time.perf_counter()
        try:
            return self.app(environ, recorder)
        except Exception:
            recorder.status_code = 500
            raise
        finally:
            self._record(method, path, recorder.status_code, time.perf_counter() - start)

    def _record(self, method, path, status, duration):
        try:
            self.metrics.observe(method, path, status, duration)
        except Exception:
            logger.warning(
                "failed to record request metrics",
                exc_info=True,
                extra={"method": method, "endpoint": path, "status": status},
            )


def instrument(app, metrics):
    """Install the middleware on a Flask app and return it."""
    app.wsgi_app = InstrumentationMiddleware(app.wsgi_app, metrics)
    return app
