from contextlib import asynccontextmanager
from datetime import datetime, timezone
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog
import time
import uvicorn

from fundraiser_service.core.config import get_settings
from fundraiser_service.core.exceptions import StoreError, ValidationError, InternalError
from fundraiser_service.core.logging import configure_logging
from fundraiser_service.api.fundraisers import router as fundraisers_router
from fundraiser_service.schemas.fundraiser import ErrorResponse
from fundraiser_service.services.store import CampaignStore
from fundraiser_service.middleware.tracing import init_tracing
from fundraiser_service.middleware.metrics import MetricsMiddleware, metrics_endpoint
from fundraiser_service.middleware.logging import logging_middleware

settings = get_settings()
configure_logging(settings)

logger = structlog.get_logger(__name__)

PROCESS_STARTED_AT = time.monotonic()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the store on startup; its data lives until shutdown"""
    logger.info("Starting Fundraiser Service",
                service_name=settings.service_name,
                environment=settings.environment)
    app.state.store = CampaignStore.seeded(max_donation_amount=settings.max_donation_amount)
    logger.info("Application startup completed successfully")

    yield

    logger.info("Shutting down Fundraiser Service")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Fundraiser Service API for donation crowdfunding campaigns",
    version="1.0.0",
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize tracing before the app starts serving
init_tracing(app)

app.add_middleware(MetricsMiddleware)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Logging middleware with trace correlation"""
    return await logging_middleware(request, call_next)


def _error_response(status_code: int, message: str, **extra) -> JSONResponse:
    body = ErrorResponse(message=message, **extra)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True)
    )


def _error_detail(exc: BaseException) -> str:
    """Exception text is only exposed in development"""
    return str(exc) if settings.is_development else "Something went wrong"


@app.exception_handler(StoreError)
async def store_exception_handler(request: Request, exc: StoreError):
    """Expected outcomes: not found, invalid state, validation"""
    if isinstance(exc, ValidationError):
        return _error_response(exc.status_code, exc.message, errors=exc.errors)
    return _error_response(exc.status_code, exc.message)


@app.exception_handler(InternalError)
async def internal_exception_handler(request: Request, exc: InternalError):
    logger.error(
        exc.message,
        error=str(exc.cause),
        method=request.method,
        url=str(request.url)
    )
    return _error_response(500, exc.message, error=_error_detail(exc.cause or exc))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies get the same envelope as rejected donations"""
    errors = [error.get("msg", "Invalid request") for error in exc.errors()]
    return _error_response(400, "Validation failed", errors=errors)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code in (404, 405):
        return _error_response(404, "Route not found")
    return _error_response(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(
        "Unhandled exception",
        error=str(exc),
        method=request.method,
        url=str(request.url)
    )
    return _error_response(500, "Internal server error", error=_error_detail(exc))


# Health check endpoints
@app.get("/health")
async def health_check():
    """Basic health check"""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "uptime": round(time.monotonic() - PROCESS_STARTED_AT, 3)
    }


@app.get("/metrics")
async def metrics(request: Request):
    """Prometheus metrics endpoint"""
    return await metrics_endpoint(request)


# Include routers
app.include_router(fundraisers_router)


def run():
    uvicorn.run(
        "fundraiser_service.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="info" if not settings.debug else "debug"
    )


if __name__ == "__main__":
    run()
