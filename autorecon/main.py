"""AutoRecon API application."""

import time
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from autorecon import __version__
from autorecon.config import settings
from autorecon.logger import configure_logging, get_logger, log_exception
from autorecon.routers import reconciliation

configure_logging()
logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
INTERNAL_ERROR_DETAIL = "Reconciliation failed unexpectedly. Check the service logs for this request_id."


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info(
        "AutoRecon started",
        version=__version__,
        environment=settings.environment,
        amount_tolerance=str(settings.reconciliation_amount_tolerance),
    )
    yield
    logger.info("AutoRecon stopped")


app = FastAPI(
    title="AutoRecon API",
    description="Reconcile a bank statement against the general ledger by invoice number",
    version=__version__,
    lifespan=lifespan,
)


@app.middleware("http")
async def request_context(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """Tag every log line of a request with its id and log how the request ended."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, method=request.method, path=request.url.path)

    started = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "Request handled",
        status_code=response.status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 2),
    )
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    log_exception(logger, exc, "Unhandled error while serving request")
    request_id = structlog.contextvars.get_contextvars().get("request_id")
    return JSONResponse(
        status_code=500,
        content={
            "detail": str(exc) if settings.debug else INTERNAL_ERROR_DETAIL,
            "request_id": request_id,
        },
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", REQUEST_ID_HEADER],
)

app.include_router(reconciliation.router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Liveness check. The service keeps no external connections."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "version": __version__,
    }
