"""Prometheus metrics for the statistics service.

Two families: HTTP traffic (recorded by ``MetricsMiddleware`` for every
request) and statistic failures (recorded by the API layer through
``record_stats_error``). Both are scraped from ``GET /metrics``.
"""
from __future__ import annotations

import time

from fastapi import APIRouter, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Histogram,
    generate_latest,
)

REQUESTS = Counter(
    name="numstats_request_total",
    documentation="Total HTTP requests",
    labelnames=["path", "method", "status"],
)
REQUEST_ERRORS = Counter(
    name="numstats_request_errors_total",
    documentation="HTTP responses with status >= 400",
    labelnames=["path", "method", "status"],
)
REQUEST_LATENCY = Histogram(
    name="numstats_request_duration_seconds",
    documentation="Request latency in seconds",
    labelnames=["path", "method"],
)
STATS_ERRORS = Counter(
    name="numstats_stats_errors_total",
    documentation="Statistic computations rejected by the core",
    labelnames=["error", "type"],
)


def route_path(scope) -> str:
    """Route template ("/stats") when the router matched one, else the raw path."""
    route = scope.get("route")
    return getattr(route, "path", None) or scope.get("path", "")


def observe_request(path: str, method: str, status: int, elapsed: float) -> None:
    REQUESTS.labels(path, method, status).inc()
    if status >= 400:
        REQUEST_ERRORS.labels(path, method, status).inc()
    REQUEST_LATENCY.labels(path, method).observe(elapsed)


def record_stats_error(error: str, type_name: str) -> None:
    STATS_ERRORS.labels(error, type_name).inc()


class MetricsMiddleware:
    """ASGI middleware timing each HTTP request up to its response start."""

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        started_at = time.perf_counter()

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                observe_request(
                    route_path(scope),
                    scope["method"],
                    int(message["status"]),
                    time.perf_counter() - started_at,
                )
            await send(message)

        await self.app(scope, receive, send_wrapper)


metrics_router = APIRouter()


@metrics_router.get("/metrics")
async def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
