"""
Shared FastAPI dependencies.

The bearer token is taken from the incoming request and forwarded to the
inventory service; it is never read from server-side storage.
"""

from typing import Optional

import httpx
from fastapi import Header, HTTPException

from domain.errors import DEFAULT_MESSAGES, ErrorKind


def get_bearer_token(authorization: Optional[str] = Header(None)) -> Optional[str]:
    """Extract the token from an `Authorization: Bearer <token>` header, if any."""

    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def require_token(token: Optional[str]) -> str:
    if not token:
        raise HTTPException(
            status_code=401,
            detail={"error": DEFAULT_MESSAGES[ErrorKind.NO_TOKEN], "kind": ErrorKind.NO_TOKEN.value},
        )
    return token


def get_api_transport() -> Optional[httpx.BaseTransport]:
    """Transport for outbound calls; None means real network. Tests override this."""

    return None
