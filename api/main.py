from __future__ import annotations

import logging
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError

from api.observability import (
    configure_logging,
    monotonic_ms,
    request_log_fields,
    reset_request_id,
    resolve_request_id,
    set_request_id,
)
from api.chat import router as chat_router
from api.ratelimit import limiter, limiter_enabled, rate_limit_exceeded_handler
from api.routes import router
from core.config import get_settings
from core.services.intake import IntakeError
from core.services.profile_store import ProfileNotFoundError, ProfileStoreError

logger = logging.getLogger(__name__)


def _profile_not_found_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": {"code": "PROFILE_NOT_FOUND"}})


def _invalid_intake_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": {"code": "INVALID_INTAKE", "message": str(exc)}})


def _store_unavailable_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "store_unavailable",
        exc_info=exc,
        extra={"path": request.url.path, "error": type(exc).__name__},
    )
    return JSONResponse(
        status_code=503,
        content={
            "detail": {
                "code": "STORE_UNAVAILABLE",
                "message": "Could not reach your data right now. Please try again.",
                "retryable": True,
            }
        },
    )


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level, app_env=settings.app_env)

    app = FastAPI(title="Pathfinder API", version="1.0.0")
    limiter.enabled = limiter_enabled()
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(ProfileNotFoundError, _profile_not_found_handler)
    app.add_exception_handler(IntakeError, _invalid_intake_handler)
    app.add_exception_handler(ProfileStoreError, _store_unavailable_handler)
    app.add_exception_handler(SQLAlchemyError, _store_unavailable_handler)
    app.include_router(router)
    app.include_router(chat_router)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context_and_logging(request: Request, call_next: Callable) -> Response:
        header_name = settings.request_id_header_name or "X-Request-ID"
        request_id = resolve_request_id(request.headers.get(header_name))
        token = set_request_id(request_id)
        started_ms = monotonic_ms()
        client_ip = getattr(request.client, "host", None)
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "http_request_error",
                extra=request_log_fields(
                    method=request.method,
                    path=request.url.path,
                    status_code=500,
                    duration_ms=monotonic_ms() - started_ms,
                    client_ip=client_ip,
                ),
            )
            raise
        else:
            response.headers[header_name] = request_id
            logger.info(
                "http_request",
                extra=request_log_fields(
                    method=request.method,
                    path=request.url.path,
                    status_code=response.status_code,
                    duration_ms=monotonic_ms() - started_ms,
                    client_ip=client_ip,
                ),
            )
            return response
        finally:
            reset_request_id(token)

    logger.info("app_started", extra={"app_env": settings.app_env, "rate_limit_enabled": limiter.enabled})
    return app


app = create_app()
