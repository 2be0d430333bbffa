"""FastAPI application entry point."""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from payment_optout_api.config import get_settings
from payment_optout_api.database import dispose_engine
from payment_optout_api.exceptions import InvalidArgumentError, StorageFailureError
from payment_optout_api.middleware.error_handler import (
    generic_exception_handler,
    http_exception_handler,
    invalid_argument_handler,
    sqlalchemy_exception_handler,
    storage_failure_handler,
    validation_exception_handler,
)
from payment_optout_api.middleware.request_id_middleware import RequestIDMiddleware
from payment_optout_api.routers import notification_preferences
from payment_optout_api.security.rate_limit import limiter

logger = logging.getLogger(__name__)

_started_at = time.monotonic()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if "Cache-Control" not in response.headers:
            response.headers["Cache-Control"] = "no-store, max-age=0"
        response.headers.setdefault("Vary", "Accept, Authorization, Origin")
        return response


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    logger.info("Starting %s", app.title)
    yield
    await dispose_engine()
    logger.info("Database connections closed")


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Rate limit handler returning RFC 7807 Problem Details."""
    return JSONResponse(
        status_code=429,
        content={
            "type": "https://datatracker.ietf.org/doc/html/rfc6585#section-4",
            "title": "Too many requests",
            "status": 429,
            "detail": "Rate limit exceeded",
            "instance": request.url.path,
        },
        headers={
            "Content-Type": "application/problem+json",
            "Retry-After": "60",
        },
    )


def _allowed_origins() -> list[str]:
    """Validate configured CORS origins.

    Raises:
        ValueError: If a wildcard origin is configured
    """
    allowed_origins = []
    for origin in get_settings().cors_origins_list:
        # Credentials are allowed, so wildcards are not
        if origin == "*":
            raise ValueError(
                "CORS_ORIGINS cannot contain '*' wildcard when allow_credentials=True. "
                "Specify explicit origins."
            )
        if origin.startswith(("http://", "https://")):
            allowed_origins.append(origin)
    return allowed_origins


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    config = get_settings()

    app = FastAPI(
        title=config.app_name,
        version="1.0.0",
        description="API for managing payment notification opt-out preferences.",
        lifespan=lifespan,
        docs_url="/docs" if config.debug else None,
        redoc_url="/redoc" if config.debug else None,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.add_exception_handler(InvalidArgumentError, invalid_argument_handler)
    app.add_exception_handler(StorageFailureError, storage_failure_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # Middleware runs in reverse order of addition; CORS must see requests first
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_allowed_origins(),
        allow_credentials=True,
        allow_methods=["GET", "PUT", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )

    app.include_router(
        notification_preferences.router,
        prefix="/api",
        tags=["Notification Preferences"],
    )

    @app.get("/health")
    async def health_check() -> dict[str, str | float]:
        """Health check endpoint."""
        return {"status": "healthy", "uptime": round(time.monotonic() - _started_at, 3)}

    return app


app = create_app()
