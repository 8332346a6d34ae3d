"""
Structured request logging with trace correlation for Fundraiser Service
"""
import time
from fastapi import Request
from opentelemetry import trace
import structlog

logger = structlog.get_logger(__name__)


def current_trace_id() -> str:
    """Hex trace id of the active span, or empty string"""
    span = trace.get_current_span()
    if span and span.get_span_context().is_valid:
        return format(span.get_span_context().trace_id, '032x')
    return ""


async def logging_middleware(request: Request, call_next):
    """Log all HTTP requests with trace correlation"""
    start_time = time.time()
    trace_id = current_trace_id()

    logger.info(
        "Request started",
        trace_id=trace_id,
        method=request.method,
        path=request.url.path,
        query=str(request.query_params) if request.query_params else "",
        client_ip=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent", "")
    )

    response = await call_next(request)

    latency = time.time() - start_time
    logger.info(
        "Request completed",
        trace_id=trace_id,
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        latency_seconds=round(latency, 3)
    )

    if trace_id:
        response.headers["X-Trace-Id"] = trace_id

    return response
