"""
Product repository for the store catalog.

Reads the products a store sells from the inventory service.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, List, Mapping

import httpx

from domain.catalog import Product
from repositories.client import ApiRequestError, error_message, unwrap_list


def _to_decimal(value: Any) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    return Decimal(str(value))


def _row_to_product(row: Mapping[str, Any]) -> Product:
    """Convert an API row into a Product."""

    return Product(
        product_id=str(row["id"]),
        sku=str(row.get("sku") or ""),
        product_name=str(row.get("product_name") or ""),
        selling_price=_to_decimal(row.get("selling_price")),
        buying_price=_to_decimal(row.get("buying_price")),
    )


def list_store_products(http: httpx.Client, store_id: str) -> List[Product]:
    """
    Fetch the product catalog for a store.

    Args:
        http: Authenticated client from `repositories.client.create_api_client`
        store_id: Store whose catalog to load

    Returns:
        List[Product] (possibly empty)

    Raises:
        ApiRequestError: If the service responds with an error status
    """

    response = http.get(f"/stores/{store_id}/products")
    if response.is_error:
        raise ApiRequestError(
            error_message(response, "Failed to fetch products"),
            status_code=response.status_code,
        )

    rows = unwrap_list(response.json())
    return [_row_to_product(row) for row in rows if isinstance(row, Mapping) and row.get("id")]


__all__ = ["list_store_products"]
