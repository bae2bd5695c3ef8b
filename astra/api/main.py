"""
FastAPI application with assembled routers.

Initializes FastAPI app with API routers, middleware and exception
handlers, and configures uvicorn server.

Dependencies: fastapi, astra.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from astra.api.deps.dependencies import get_service_cache
from astra.configs import get_settings
from astra.core.exceptions import AstraException
from astra.observability import configure_logging
from astra.observability.log_utils import log_exception_with_context
from astra.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import documents_router, health_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    configure_logging(get_settings().log_level)
    logger.info("Astra ingestion API starting")

    yield

    get_service_cache().clear()
    logger.info("Service cache cleared")


async def astra_exception_handler(request: Request, exc: AstraException) -> JSONResponse:
    """Render taxonomy errors as `{error, details}` with their status."""
    if exc.status_code >= 500:
        log_exception_with_context(
            logger,
            f"{type(exc).__name__} on {request.url.path}",
            exc,
            details=exc.details,
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render body validation failures as 400 bad requests."""
    errors = [
        {"field": ".".join(str(part) for part in err["loc"][1:]), "message": err["msg"]}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"error": "Missing or invalid request fields", "details": {"errors": errors}},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort 500 for anything outside the taxonomy."""
    log_exception_with_context(logger, f"Unhandled error on {request.url.path}", exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Processing failed", "details": {"reason": str(exc)}},
    )


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Astra Ingestion API",
        description="Document ingestion for Astra Intelligence: extract, chunk, embed and store",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.add_exception_handler(AstraException, astra_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Register routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(documents_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "astra.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
