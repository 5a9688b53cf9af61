"""
Access-token helpers.

Tokens are JWTs; the `sub` claim carries the numeric user id that every
lists query is scoped to.
"""

from __future__ import annotations

import os
import time
from typing import Any

import jwt

from core.settings import env_int


class AuthSecurityError(RuntimeError):
    pass


def jwt_secret() -> str:
    # Local default keeps development simple.
    # In production, set JWT_SECRET in environment.
    return os.environ.get("JWT_SECRET", "dev-change-this-secret").strip() or "dev-change-this-secret"


def jwt_algorithm() -> str:
    return os.environ.get("JWT_ALG", "HS256").strip() or "HS256"


def jwt_audience() -> str | None:
    return os.environ.get("JWT_AUDIENCE", "").strip() or None


def jwt_issuer() -> str | None:
    return os.environ.get("JWT_ISSUER", "").strip() or None


def access_token_expire_minutes() -> int:
    return env_int("ACCESS_TOKEN_EXPIRE_MIN", 15)


def now_epoch_s() -> int:
    return int(time.time())


def build_access_token(*, user_id: int, expires_in_s: int | None = None) -> str:
    issued_at = now_epoch_s()
    if expires_in_s is None:
        expires_in_s = access_token_expire_minutes() * 60

    payload: dict[str, Any] = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + expires_in_s,
    }
    if jwt_audience():
        payload["aud"] = jwt_audience()
    if jwt_issuer():
        payload["iss"] = jwt_issuer()
    return jwt.encode(payload, jwt_secret(), algorithm=jwt_algorithm())


def decode_access_token(token: str) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    try:
        payload = jwt.decode(
            raw,
            jwt_secret(),
            algorithms=[jwt_algorithm()],
            audience=jwt_audience(),
            issuer=jwt_issuer(),
            options={"require": ["sub", "exp"]},
        )
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    return payload
