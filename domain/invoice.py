"""
Domain: Invoice totals.

Totals are derived from the current line items every time they are needed;
nothing is cached between changes.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from .line_item import LineItem
from .money import ZERO


@dataclass(frozen=True, slots=True)
class InvoiceTotals:
    subtotal_amount: Decimal
    total_discount: Decimal
    total_amount: Decimal
    item_count: int

    @property
    def is_empty(self) -> bool:
        return self.item_count == 0


def summarize_invoice(items: Sequence[LineItem]) -> InvoiceTotals:
    """Sum subtotal, discount and total across line items."""

    return InvoiceTotals(
        subtotal_amount=sum((item.subtotal for item in items), ZERO),
        total_discount=sum((item.discount_amount for item in items), ZERO),
        total_amount=sum((item.total for item in items), ZERO),
        item_count=len(items),
    )


__all__ = ["InvoiceTotals", "summarize_invoice"]
