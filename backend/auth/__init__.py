# Auth: token cache, token minting, request guards
from auth.guards import GuardResult, check_api_key, check_bearer, check_refresh
from auth.token_cache import TokenCache
from auth.tokens import mint_token, verify_token

__all__ = [
    "GuardResult",
    "TokenCache",
    "check_api_key",
    "check_bearer",
    "check_refresh",
    "mint_token",
    "verify_token",
]
