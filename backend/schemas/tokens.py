"""Pydantic schemas for token API."""
from pydantic import BaseModel


class TokenResponse(BaseModel):
    """Newly issued bearer token."""

    token: str
