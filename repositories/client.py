"""
Inventory API client initialization.

This module contains *only* the HTTP connection setup for the external
inventory service. Repository modules receive an `httpx.Client` built here, so
the store and auth token are always passed in explicitly.

Environment variables:
- INVENTORY_API_BASE_URL: Base URL of the inventory service (required)
- INVENTORY_API_TIMEOUT: Request timeout in seconds (default: 10)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Optional

import httpx
from dotenv import load_dotenv

from domain.errors import ErrorKind, SaleValidationError

# Load environment variables from the project's .env file, if present.
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DEFAULT_TIMEOUT_SECONDS = 10.0


class ApiRequestError(Exception):
    """Raised when the inventory service rejects a request or cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def get_api_base_url() -> str:
    base_url = os.getenv("INVENTORY_API_BASE_URL")
    if not base_url:
        raise RuntimeError(
            "Missing environment variable: INVENTORY_API_BASE_URL. "
            "Set INVENTORY_API_BASE_URL to the inventory service URL."
        )
    return base_url.rstrip("/")


def get_api_timeout() -> float:
    raw = os.getenv("INVENTORY_API_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"INVENTORY_API_TIMEOUT must be a number of seconds, got {raw!r}") from None


def create_api_client(
    token: Optional[str],
    base_url: Optional[str] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """
    Build an authenticated client for the inventory service.

    Args:
        token: Bearer token for the current user session
        base_url: Override for INVENTORY_API_BASE_URL
        transport: Optional transport (tests pass an httpx.MockTransport)

    Raises:
        SaleValidationError: NoToken, before any request is made
        RuntimeError: If no base URL is configured
    """

    if not token:
        raise SaleValidationError(ErrorKind.NO_TOKEN)

    return httpx.Client(
        base_url=base_url or get_api_base_url(),
        headers={
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        },
        timeout=get_api_timeout(),
        transport=transport,
    )


def error_message(response: httpx.Response, default: str) -> str:
    """Return the `error` text from a JSON error body, else `default`."""

    try:
        body = response.json()
    except ValueError:
        return default
    if isinstance(body, Mapping):
        error = body.get("error")
        if isinstance(error, str) and error:
            return error
    return default


def unwrap_list(body: Any) -> list:
    """
    Extract a list from the service's response envelopes.

    Handles `{"success": true, "data": [...]}`, `{"data": [...]}` and bare lists.
    Anything else yields an empty list.
    """

    if isinstance(body, list):
        return body
    if isinstance(body, Mapping) and isinstance(body.get("data"), list):
        return body["data"]
    return []


def nullable_str(value: Any) -> Optional[str]:
    """
    Read a nullable string from the service.

    The service encodes optional text as `{"String": "...", "Valid": bool}`;
    plain strings are accepted too.
    """

    if value is None:
        return None
    if isinstance(value, Mapping):
        if not value.get("Valid"):
            return None
        value = value.get("String")
    text = str(value).strip() if value is not None else ""
    return text or None


__all__ = [
    "ApiRequestError",
    "get_api_base_url",
    "get_api_timeout",
    "create_api_client",
    "error_message",
    "unwrap_list",
    "nullable_str",
]
