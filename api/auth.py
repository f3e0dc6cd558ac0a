"""Bearer-token verification for tokens minted by the hosted auth provider.

The API never issues tokens. It checks the HS256 signature, expiry and
audience, and takes the profile id from ``sub``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt

from core.config import get_settings


bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthPrincipal:
    user_id: str
    email: Optional[str]
    exp: int


def decode_access_token(token: str) -> AuthPrincipal:
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.auth_jwt_secret,
            algorithms=[settings.auth_jwt_algorithm],
            audience=settings.auth_jwt_audience,
        )
    except ExpiredSignatureError as exc:
        raise HTTPException(status_code=401, detail={"code": "TOKEN_EXPIRED"}) from exc
    except JWTError as exc:
        raise HTTPException(status_code=401, detail={"code": "INVALID_TOKEN"}) from exc

    sub = payload.get("sub")
    if not sub:
        raise HTTPException(status_code=401, detail={"code": "INVALID_TOKEN"})
    return AuthPrincipal(
        user_id=str(sub),
        email=payload.get("email"),
        exp=int(payload.get("exp") or 0),
    )


def get_current_principal(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> AuthPrincipal:
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=401, detail={"code": "AUTH_REQUIRED"})
    principal = decode_access_token(credentials.credentials)
    # read back by the chat rate-limit key
    request.state.principal = principal
    return principal
