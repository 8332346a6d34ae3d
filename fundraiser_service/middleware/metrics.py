"""
Prometheus metrics middleware for Fundraiser Service
"""
import time
from typing import Optional
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
import structlog

logger = structlog.get_logger(__name__)

http_requests_total = Counter(
    'http_requests_total',
    'Total number of HTTP requests',
    ['method', 'endpoint', 'status']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint']
)

# Donation workflow metrics
donations_total = Counter(
    'donations_total',
    'Total number of donation submissions by outcome',
    ['outcome']
)

donation_amount_total = Counter(
    'donation_amount_total',
    'Sum of accepted donation amounts'
)


def record_donation(outcome: str, amount: Optional[float] = None):
    """Count a donation submission; amount is only added for accepted ones"""
    donations_total.labels(outcome=outcome).inc()
    if outcome == "accepted" and amount is not None:
        donation_amount_total.inc(amount)


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware to collect Prometheus metrics for HTTP requests"""

    async def dispatch(self, request: Request, call_next):
        # Skip metrics endpoint itself
        if request.url.path == "/metrics":
            return await call_next(request)

        start_time = time.time()

        response = await call_next(request)

        duration = time.time() - start_time

        # Route template is only known after routing ran
        endpoint = "unmatched"
        route = request.scope.get('route')
        if route is not None and hasattr(route, 'path'):
            endpoint = route.path

        status = str(response.status_code)
        method = request.method

        http_requests_total.labels(
            method=method,
            endpoint=endpoint,
            status=status
        ).inc()

        http_request_duration_seconds.labels(
            method=method,
            endpoint=endpoint
        ).observe(duration)

        return response


async def metrics_endpoint(request: Request):
    """Endpoint to expose Prometheus metrics"""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )
