"""Configuration from environment."""
import os

PORT = int(os.environ.get("PORT", "8001"))

# When TESTING=true, use test DB URL so tests never touch production.
if os.environ.get("TESTING") == "true":
    DATABASE_URL = os.environ.get("TESTING_DATABASE_URL", "sqlite:///:memory:")
else:
    DATABASE_URL = os.environ.get(
        "DATABASE_URL",
        "sqlite:///./evcharging.db",
    )

API_PREFIX = os.environ.get("API_PREFIX", "/api/v1")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ORIGINS", "http://localhost:8080,http://127.0.0.1:8080").split(",")
    if origin.strip()
]
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

JWT_ALGORITHM = os.environ.get("JWT_ALGORITHM", "HS256")
# Lifetime of the signed token (exp claim).
TOKEN_LIFETIME_S = int(os.environ.get("TOKEN_LIFETIME_S", "120"))
# How long an issued token stays in the server-side cache; independent of exp.
TOKEN_CACHE_TTL_S = int(os.environ.get("TOKEN_CACHE_TTL_S", "600"))
TOKEN_CACHE_MAXSIZE = int(os.environ.get("TOKEN_CACHE_MAXSIZE", "10000"))

API_KEY_HEADER = "x-api-key"


def get_jwt_secret() -> str | None:
    """Signing secret for bearer tokens, read on each call. None when unset or empty."""
    return os.environ.get("JWT_SECRET") or None


def get_api_key() -> str | None:
    """Static key required by /generatetoken, read on each call. None when unset or empty."""
    return os.environ.get("API_KEY") or None
