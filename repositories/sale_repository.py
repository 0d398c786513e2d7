"""
Sale repository (remote persistence).

Sends a fully assembled sale to the inventory service. It does not enforce
business rules; the service either creates the whole sale or rejects it.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from repositories.client import ApiRequestError, error_message

logger = logging.getLogger(__name__)

GENERIC_SALE_ERROR = "Failed to create sale"


def create_sale(http: httpx.Client, payload: Mapping[str, Any]) -> dict[str, Any]:
    """
    POST a sale to the inventory service.

    Args:
        http: Authenticated client
        payload: `{"sale": {...}, "items": [...], "payment_term_days"?: int}`

    Returns:
        The `data` object of the response, which always carries `invoice_number`

    Raises:
        ApiRequestError: With the server's `error` text, or a generic message
    """

    try:
        response = http.post("/sales", json=dict(payload))
    except httpx.HTTPError as e:
        logger.warning("Sale request failed", extra={"error": str(e)})
        raise ApiRequestError(GENERIC_SALE_ERROR) from e

    if response.is_error:
        raise ApiRequestError(
            error_message(response, GENERIC_SALE_ERROR),
            status_code=response.status_code,
        )

    try:
        body = response.json()
    except ValueError:
        raise ApiRequestError(GENERIC_SALE_ERROR, status_code=response.status_code) from None

    data = body.get("data") if isinstance(body, Mapping) else None
    if not isinstance(data, Mapping) or not data.get("invoice_number"):
        raise ApiRequestError(GENERIC_SALE_ERROR, status_code=response.status_code)
    return dict(data)


__all__ = ["GENERIC_SALE_ERROR", "create_sale"]
