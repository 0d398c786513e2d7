"""
Client repository for the store's customer directory.

Provides the list of clients a sale can be attributed to.
"""

from __future__ import annotations

from typing import Any, List, Mapping

import httpx

from domain.catalog import StoreClient
from repositories.client import ApiRequestError, error_message, nullable_str, unwrap_list


def _row_to_client(row: Mapping[str, Any]) -> StoreClient:
    """Convert an API row into a StoreClient."""

    return StoreClient(
        client_id=str(row["id"]),
        client_name=nullable_str(row.get("client_name")),
        first_name=nullable_str(row.get("first_name")),
        last_name=nullable_str(row.get("last_name")),
        business_name=nullable_str(row.get("business_name")),
    )


def list_clients(http: httpx.Client) -> List[StoreClient]:
    """
    Fetch all clients visible to the current user.

    Returns:
        List[StoreClient] (possibly empty)

    Raises:
        ApiRequestError: If the service responds with an error status
    """

    response = http.get("/clients")
    if response.is_error:
        raise ApiRequestError(
            error_message(response, "Failed to fetch clients"),
            status_code=response.status_code,
        )

    rows = unwrap_list(response.json())
    return [_row_to_client(row) for row in rows if isinstance(row, Mapping) and row.get("id")]


__all__ = ["list_clients"]
