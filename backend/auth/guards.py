"""Request guards: bearer token, refresh token and API key.

The check_* functions are pure: they take header values, the token cache and the
configured secret or key, and return a GuardResult. The require_* functions are
the FastAPI dependencies that turn a failed result into a 401 or 403 response.
"""
import hmac
import logging
from dataclasses import dataclass

from fastapi import Depends, Header, Request, status

from auth.token_cache import TokenCache
from auth.tokens import TokenExpiredError, TokenSignatureError, verify_token
from utils.config import API_KEY_HEADER, get_api_key, get_jwt_secret
from utils.errors import ForbiddenError, UnauthorizedError

LOG = logging.getLogger(__name__)

MISSING_HEADER = "Missing header"
TOKEN_NOT_ISSUED = "Token is invalid"
SECRET_MISSING = "JWT Secret is missing"
NO_API_KEY_CONFIGURED = "No valid API key is set in the environment"
INVALID_API_KEY = "Invalid API Key"


@dataclass(frozen=True)
class GuardResult:
    """Outcome of a guard check: ok with the raw token, or a status code and message."""

    ok: bool
    token: str | None = None
    status_code: int | None = None
    error: str | None = None

    @classmethod
    def allow(cls, token: str | None = None) -> "GuardResult":
        return cls(ok=True, token=token)

    @classmethod
    def deny(cls, status_code: int, error: str) -> "GuardResult":
        return cls(ok=False, status_code=status_code, error=error)


def _extract_bearer(authorization: str | None) -> str | None:
    if not authorization:
        return None
    token = authorization.removeprefix("Bearer ").strip()
    return token or None


def _check_token(
    authorization: str | None,
    cache: TokenCache,
    secret: str | None,
    *,
    ignore_expiration: bool,
) -> GuardResult:
    token = _extract_bearer(authorization)
    if token is None:
        return GuardResult.deny(status.HTTP_401_UNAUTHORIZED, MISSING_HEADER)
    # Cache first: a correctly signed token that was never issued here, or was revoked, is rejected.
    if not cache.exists(token):
        return GuardResult.deny(status.HTTP_401_UNAUTHORIZED, TOKEN_NOT_ISSUED)
    if not secret:
        return GuardResult.deny(status.HTTP_401_UNAUTHORIZED, SECRET_MISSING)
    try:
        verify_token(token, secret, ignore_expiration=ignore_expiration)
    except (TokenExpiredError, TokenSignatureError) as e:
        return GuardResult.deny(status.HTTP_401_UNAUTHORIZED, str(e))
    return GuardResult.allow(token)


def check_bearer(authorization: str | None, cache: TokenCache, secret: str | None) -> GuardResult:
    """Token must be in the cache, correctly signed and unexpired."""
    return _check_token(authorization, cache, secret, ignore_expiration=False)


def check_refresh(authorization: str | None, cache: TokenCache, secret: str | None) -> GuardResult:
    """Like check_bearer, but an expired token may still be refreshed while it is cached."""
    return _check_token(authorization, cache, secret, ignore_expiration=True)


def check_api_key(provided: str | None, configured: str | None) -> GuardResult:
    """The request header must match the configured static key."""
    if not configured:
        return GuardResult.deny(status.HTTP_403_FORBIDDEN, NO_API_KEY_CONFIGURED)
    if not provided or not hmac.compare_digest(provided.encode(), configured.encode()):
        return GuardResult.deny(status.HTTP_403_FORBIDDEN, INVALID_API_KEY)
    return GuardResult.allow()


def get_token_cache(request: Request) -> TokenCache:
    """FastAPI dependency: the process-wide token cache built in main.py."""
    return request.app.state.token_cache


def _raise_on_failure(result: GuardResult, request: Request) -> None:
    if result.ok:
        return
    LOG.warning("Authentication failure on %s %s: %s", request.method, request.url.path, result.error)
    if result.status_code == status.HTTP_403_FORBIDDEN:
        raise ForbiddenError(result.error)
    raise UnauthorizedError(result.error)


def require_bearer(
    request: Request,
    authorization: str | None = Header(default=None),
    cache: TokenCache = Depends(get_token_cache),
) -> str:
    """Dependency for resource routes. Returns the validated token."""
    result = check_bearer(authorization, cache, get_jwt_secret())
    _raise_on_failure(result, request)
    return result.token


def require_refresh(
    request: Request,
    authorization: str | None = Header(default=None),
    cache: TokenCache = Depends(get_token_cache),
) -> str:
    """Dependency for /refreshtoken. Returns the token so the handler can revoke it."""
    result = check_refresh(authorization, cache, get_jwt_secret())
    _raise_on_failure(result, request)
    return result.token


def require_api_key(request: Request) -> None:
    """Dependency for /generatetoken."""
    result = check_api_key(request.headers.get(API_KEY_HEADER), get_api_key())
    _raise_on_failure(result, request)
