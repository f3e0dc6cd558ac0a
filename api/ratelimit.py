"""Chat rate limiting.

Only the chat passthrough is limited. Requests are bucketed per profile once
the bearer token has been verified, and per client address otherwise.
"""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from core.config import get_settings


def limiter_enabled() -> bool:
    settings = get_settings()
    if str(settings.app_env).lower() == "test":
        return False
    return bool(settings.rate_limit_enabled)


def chat_rate_limit() -> str:
    return get_settings().chat_rate_limit


def profile_or_address_key(request: Request) -> str:
    principal = getattr(request.state, "principal", None)
    if principal is not None:
        return f"profile:{principal.user_id}"
    return f"addr:{get_remote_address(request)}"


limiter = Limiter(
    key_func=profile_or_address_key,
    storage_uri=get_settings().rate_limit_storage_uri,
    enabled=limiter_enabled(),
    headers_enabled=True,
)


def rate_limit_exceeded_handler(request: Request, exc: Exception) -> JSONResponse:
    headers = {}
    retry_after = getattr(exc, "retry_after", None) if isinstance(exc, RateLimitExceeded) else None
    if retry_after is not None:
        headers["Retry-After"] = str(retry_after)
    limit = getattr(exc, "detail", None) or chat_rate_limit()
    return JSONResponse(
        status_code=429,
        content={"detail": {"code": "RATE_LIMITED", "message": f"Too many chat messages ({limit}). Try again shortly."}},
        headers=headers,
    )
