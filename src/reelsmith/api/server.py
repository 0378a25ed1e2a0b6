"""FastAPI application for the Reelsmith generation gateway."""

from __future__ import annotations

import os
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Awaitable, Callable
from uuid import uuid4

import sentry_sdk
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.requests import Request
from fastapi.responses import JSONResponse, Response
from slowapi.errors import RateLimitExceeded

from reelsmith.api.errors import DomainError, ValidationError, to_json_response
from reelsmith.api.rate_limit import limiter
from reelsmith.api.routes import generate, health, metrics, styles
from reelsmith.app_version import get_app_version
from reelsmith.config import settings
from reelsmith.observability.logging import logger, request_id_var


def _should_init_sentry() -> bool:
    """Guard Sentry initialization in tests/dev to avoid noisy pending-event logs."""
    if not settings.sentry_dsn:
        return False
    if os.getenv("PYTEST_CURRENT_TEST"):
        return False
    if os.getenv("DISABLE_SENTRY", "").lower() in ("1", "true", "yes"):
        return False
    return True


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    from reelsmith.observability import init_observability

    init_observability()
    logger.info("api_starting", generation_provider=settings.generation_provider)
    if settings.generation_provider == "real" and settings.generation_timeout_s is None:
        logger.warning("generation_timeout_unset", detail="a hung generation service blocks requests")

    if _should_init_sentry():
        try:
            sentry_sdk.init(dsn=settings.sentry_dsn, traces_sample_rate=0.1, shutdown_timeout=0)
        except Exception as exc:  # tolerates invalid DSN in dev
            logger.warning("sentry_init_skipped", error=str(exc))

    yield

    logger.info("api_stopping")


app = FastAPI(
    title="Reelsmith API",
    description="Text to vertical (9:16) short-form video generation gateway",
    version=get_app_version(),
    lifespan=lifespan,
)

if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition", "X-Request-ID"],
    )


@app.middleware("http")
async def request_id_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Middleware to manage X-Request-ID header and contextvar propagation."""

    request_id = request.headers.get("X-Request-ID") or str(uuid4())

    token = request_id_var.set(request_id)
    try:
        response = await call_next(request)
    finally:
        request_id_var.reset(token)

    response.headers["X-Request-ID"] = request_id
    return response


@app.middleware("http")
async def timing_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    start = time.perf_counter()
    response = await call_next(request)
    duration_s = time.perf_counter() - start
    try:
        metrics.observe_request(request, response.status_code, duration_s)
    except Exception as metrics_exc:  # pragma: no cover - metrics should not break requests
        logger.debug("metrics_observe_failed", exc=str(metrics_exc))
    logger.info(
        "request_complete",
        path=str(request.url.path),
        method=request.method,
        status=response.status_code,
        duration_ms=round(duration_s * 1000, 2),
    )
    response.headers["X-Response-Time-ms"] = f"{duration_s * 1000:.2f}"
    return response


async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    retry_after = (exc.headers or {}).get("Retry-After") or "60"
    logger.warning(
        "rate_limit_exceeded",
        path=str(request.url.path),
        method=request.method,
        limit=exc.detail,
    )
    return JSONResponse(
        status_code=429,
        content={
            "error": f"Too many requests. Retry after {retry_after} seconds.",
            "code": "rate_limited",
            "retry_after_seconds": int(retry_after) if str(retry_after).isdigit() else retry_after,
        },
        headers=exc.headers or {"Retry-After": str(retry_after)},
    )


app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_handler)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request_failed", code=exc.code, path=str(request.url.path))
    return to_json_response(exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies get the same 400 `{error}` envelope as rule violations."""
    logger.info("request_body_invalid", path=str(request.url.path), errors=exc.errors())
    return to_json_response(ValidationError("Invalid request body"))


app.include_router(generate.router)
app.include_router(styles.router)
app.include_router(health.router)
app.include_router(metrics.router)


__all__ = ["app", "limiter"]
