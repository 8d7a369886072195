"""Token API routes: issue and refresh bearer tokens."""
import logging

from fastapi import APIRouter, Depends

from auth.guards import SECRET_MISSING, get_token_cache, require_api_key, require_refresh
from auth.token_cache import TokenCache
from auth.tokens import mint_token
from schemas.tokens import TokenResponse
from utils.config import get_jwt_secret
from utils.errors import ApiError

LOG = logging.getLogger(__name__)

router = APIRouter(tags=["authentication"])


def _issue(cache: TokenCache) -> str:
    secret = get_jwt_secret()
    if not secret:
        LOG.error("Cannot issue token: JWT_SECRET is not set")
        raise ApiError(SECRET_MISSING)
    token = mint_token(secret)
    cache.insert(token, True)
    return token


@router.post("/generatetoken", response_model=TokenResponse, dependencies=[Depends(require_api_key)])
def generate_token(cache: TokenCache = Depends(get_token_cache)) -> TokenResponse:
    """Issue a new bearer token. Requires the x-api-key header."""
    token = _issue(cache)
    LOG.info("Issued new token (%d active)", len(cache))
    return TokenResponse(token=token)


@router.post("/refreshtoken", response_model=TokenResponse)
def refresh_token(
    old_token: str = Depends(require_refresh),
    cache: TokenCache = Depends(get_token_cache),
) -> TokenResponse:
    """Revoke the presented token and issue a new one. The old token may be past its expiry."""
    cache.delete(old_token)
    token = _issue(cache)
    LOG.info("Refreshed token (%d active)", len(cache))
    return TokenResponse(token=token)
