"""
Domain: Sale line items.

A line item is one product-quantity-price-discount row on an invoice. The
product fields are copied when the item is added, so later catalog changes do
not alter an invoice that is being built.

Rules implemented here:
- quantity must be a positive integer
- unit_price defaults to the product's selling price and must be > 0
  and no more than MAX_AMOUNT, as must unit_price * quantity
- discount_percentage must lie in [0, 100]; out-of-range values are rejected,
  never clamped
- subtotal = unit_price * quantity
- discount_amount = subtotal * discount_percentage / 100
- total = subtotal - discount_amount

Each money figure is rounded to cents, so invoice sums are exact.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, List, Optional, Sequence

from .catalog import Product
from .errors import ErrorKind, SaleValidationError
from .money import MAX_AMOUNT, ZERO, money_to_json, parse_decimal, parse_int, to_money

HUNDRED = Decimal("100")


@dataclass(frozen=True, slots=True)
class LineItem:
    product_id: str
    product_name: str
    sku: str
    buying_price: Decimal
    selling_price: Decimal
    unit_price: Decimal
    quantity: int
    discount_percentage: Decimal = ZERO

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise SaleValidationError(ErrorKind.INVALID_QUANTITY)
        if not 0 < self.unit_price <= MAX_AMOUNT:
            raise SaleValidationError(ErrorKind.INVALID_PRICE)
        if self.unit_price * self.quantity > MAX_AMOUNT:
            raise SaleValidationError(ErrorKind.INVALID_QUANTITY, "Line total is too large")
        if not ZERO <= self.discount_percentage <= HUNDRED:
            raise SaleValidationError(ErrorKind.INVALID_DISCOUNT)

    @property
    def subtotal(self) -> Decimal:
        return to_money(self.unit_price * self.quantity)

    @property
    def discount_amount(self) -> Decimal:
        return to_money(self.subtotal * self.discount_percentage / HUNDRED)

    @property
    def total(self) -> Decimal:
        return self.subtotal - self.discount_amount

    def to_payload(self) -> dict[str, Any]:
        """Serialize for the `items` array of a sale-creation request."""

        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "sku": self.sku,
            "buying_price": money_to_json(self.buying_price),
            "selling_price": money_to_json(self.selling_price),
            "unit_price": money_to_json(self.unit_price),
            "quantity": self.quantity,
            "discount_percentage": float(self.discount_percentage),
            "discount_amount": money_to_json(self.discount_amount),
            "subtotal": money_to_json(self.subtotal),
            "total": money_to_json(self.total),
        }


def build_line_item(
    product: Optional[Product],
    quantity_input: Any,
    unit_price_input: Any = None,
    discount_percent_input: Any = None,
) -> LineItem:
    """
    Build a LineItem from raw form inputs.

    Args:
        product: The selected product, or None if nothing was chosen
        quantity_input: Quantity as typed (parsed as an integer)
        unit_price_input: Price override; blank means the product's selling price
        discount_percent_input: Discount percentage; blank means 0

    Returns:
        A validated LineItem

    Raises:
        SaleValidationError: With the first failing ErrorKind, checked in the
            order product, quantity, price, discount.
    """

    if product is None:
        raise SaleValidationError(ErrorKind.MISSING_PRODUCT)

    try:
        quantity = parse_int(quantity_input)
    except ValueError:
        quantity = None
    if quantity is None or quantity <= 0:
        raise SaleValidationError(ErrorKind.INVALID_QUANTITY)

    try:
        unit_price = parse_decimal(unit_price_input)
    except ValueError:
        raise SaleValidationError(ErrorKind.INVALID_PRICE) from None
    if unit_price is None:
        unit_price = product.selling_price
    if unit_price <= 0:
        raise SaleValidationError(ErrorKind.INVALID_PRICE)

    try:
        discount = parse_decimal(discount_percent_input)
    except ValueError:
        raise SaleValidationError(ErrorKind.INVALID_DISCOUNT) from None
    if discount is None:
        discount = ZERO

    return LineItem(
        product_id=product.product_id,
        product_name=product.product_name,
        sku=product.sku,
        buying_price=product.buying_price,
        selling_price=product.selling_price,
        unit_price=unit_price,
        quantity=quantity,
        discount_percentage=discount,
    )


def add_line_item(
    product: Optional[Product],
    quantity_input: Any,
    unit_price_input: Any,
    discount_percent_input: Any,
    existing_items: Sequence[LineItem],
) -> List[LineItem]:
    """
    Return a new list with one more line item appended.

    Items for the same product are never merged. The input sequence is not
    modified, so a validation failure leaves the caller's list as it was.
    """

    item = build_line_item(product, quantity_input, unit_price_input, discount_percent_input)
    return [*existing_items, item]


def remove_line_item(index: int, items: Sequence[LineItem]) -> List[LineItem]:
    """
    Return a new list without the item at `index`.

    Raises:
        IndexError: If index is out of range.
    """

    if index < 0 or index >= len(items):
        raise IndexError(f"No line item at index {index}")
    return [item for i, item in enumerate(items) if i != index]


__all__ = ["LineItem", "build_line_item", "add_line_item", "remove_line_item"]
