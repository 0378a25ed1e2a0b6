"""Prometheus request metrics and their exposition endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

router = APIRouter(tags=["Metrics"])

REQUEST_COUNT = Counter(
    "reelsmith_http_requests_total", "Total HTTP requests", ["method", "path", "status"]
)
REQUEST_LATENCY = Histogram(
    "reelsmith_http_request_duration_seconds",
    "HTTP request duration in seconds",
    # Generation calls routinely take minutes.
    buckets=(0.05, 0.25, 1, 5, 15, 30, 60, 120, 300),
    labelnames=["path"],
)


def route_label(request: Request) -> str:
    """Return a low-cardinality path label for metrics."""
    route = request.scope.get("route")
    if route is not None:
        path = getattr(route, "path", None)
        if path:
            return str(path)
    return "unmatched"


def observe_request(request: Request, status_code: int, duration_s: float) -> None:
    path = route_label(request)
    REQUEST_COUNT.labels(method=request.method, path=path, status=status_code).inc()
    REQUEST_LATENCY.labels(path=path).observe(duration_s)


@router.get("/metrics")
def metrics() -> Response:
    """Expose Prometheus metrics."""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


__all__ = ["router", "observe_request", "route_label"]
