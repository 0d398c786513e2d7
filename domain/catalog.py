"""
Domain: Catalog read models.

Products and clients are owned by the external inventory service. This module
holds the read-only snapshots the sale workflow selects from.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .money import MAX_AMOUNT

UNKNOWN_CLIENT = "Unknown Client"


@dataclass(frozen=True, slots=True)
class Product:
    """
    Product snapshot from the store catalog.

    Prices are non-negative amounts in the store's single currency.
    """

    product_id: str
    sku: str
    product_name: str
    selling_price: Decimal
    buying_price: Decimal

    def __post_init__(self) -> None:
        if not 0 <= self.selling_price <= MAX_AMOUNT:
            raise ValueError("selling_price must be between 0 and MAX_AMOUNT")
        if not 0 <= self.buying_price <= MAX_AMOUNT:
            raise ValueError("buying_price must be between 0 and MAX_AMOUNT")


@dataclass(frozen=True, slots=True)
class StoreClient:
    """A customer of the store (the buyer on credit and partial sales)."""

    client_id: str
    client_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    business_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        """
        Resolve a label for pickers and receipts.

        Order: explicit client_name, then business_name, then the composed
        first/last name. Falls back to "Unknown Client".
        """

        if self.client_name:
            return self.client_name
        if self.business_name:
            return self.business_name
        name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return name or UNKNOWN_CLIENT


def find_by_id(items, item_id: Optional[str], attr: str):
    """Return the first item whose `attr` equals item_id, or None."""

    if not item_id:
        return None
    for item in items:
        if getattr(item, attr) == item_id:
            return item
    return None


__all__ = ["UNKNOWN_CLIENT", "Product", "StoreClient", "find_by_id"]
