"""
Catalog lookup service.

Loads the product and client pick-lists for a sale. These are background
lookups: a failure is logged and degrades to an empty list so that the rest
of the sale workflow stays usable. The caller can retry by reloading.
"""

from __future__ import annotations

import logging
from decimal import InvalidOperation
from typing import List, Optional

import httpx

from domain.catalog import Product, StoreClient
from repositories.client import ApiRequestError
from repositories.client_repository import list_clients
from repositories.product_repository import list_store_products

logger = logging.getLogger(__name__)

_LOOKUP_ERRORS = (ApiRequestError, httpx.HTTPError, ValueError, InvalidOperation)


def load_products(http: httpx.Client, store_id: Optional[str]) -> List[Product]:
    """
    Load a store's products, or an empty list if no store is selected or the
    lookup fails.
    """

    if not store_id:
        return []

    try:
        products = list_store_products(http, store_id)
    except _LOOKUP_ERRORS as e:
        logger.warning(
            f"Product lookup failed for store {store_id}",
            extra={"store_id": store_id, "error": str(e)},
        )
        return []

    logger.debug(f"Loaded {len(products)} products for store {store_id}")
    return products


def load_clients(http: httpx.Client) -> List[StoreClient]:
    """Load the client directory, or an empty list if the lookup fails."""

    try:
        clients = list_clients(http)
    except _LOOKUP_ERRORS as e:
        logger.warning("Client lookup failed", extra={"error": str(e)})
        return []

    logger.debug(f"Loaded {len(clients)} clients")
    return clients


__all__ = ["load_products", "load_clients"]
