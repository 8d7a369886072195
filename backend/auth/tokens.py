"""Mint and verify signed bearer tokens (JWT, HMAC)."""
import uuid
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

from utils.config import JWT_ALGORITHM, TOKEN_LIFETIME_S


class TokenExpiredError(Exception):
    """Signature is valid but the exp claim has passed."""


class TokenSignatureError(Exception):
    """Token is malformed or was not signed with the server secret."""


def mint_token(secret: str, lifetime_s: int = TOKEN_LIFETIME_S) -> str:
    """Return a new signed token that expires lifetime_s seconds from now."""
    now = datetime.now(timezone.utc)
    claims = {
        "jti": uuid.uuid4().hex,
        "iat": now,
        "exp": now + timedelta(seconds=lifetime_s),
    }
    return jwt.encode(claims, secret, algorithm=JWT_ALGORITHM)


def verify_token(token: str, secret: str, *, ignore_expiration: bool = False) -> dict:
    """Return the token's claims. Raises TokenExpiredError or TokenSignatureError."""
    try:
        return jwt.decode(
            token,
            secret,
            algorithms=[JWT_ALGORITHM],
            options={"verify_exp": not ignore_expiration},
        )
    except ExpiredSignatureError as e:
        raise TokenExpiredError("Token has expired") from e
    except JWTError as e:
        raise TokenSignatureError("Invalid signature") from e
