"""
Domain: Created sales.

A sale is created atomically by the inventory service. This module captures
what the service reports back, together with the plan that was submitted, so
callers can show the invoice number and balance owed.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from .payment_plan import SaleType
from .time import require_utc_timestamp


@dataclass(frozen=True, slots=True)
class SaleReceipt:
    """
    Immutable confirmation of a sale accepted by the inventory service.

    created_at must be UTC; due_date is only set for credit and partial sales.
    """

    invoice_number: str
    store_id: str
    sale_type: SaleType
    total_amount: Decimal
    amount_paid: Decimal
    created_at: datetime
    client_id: Optional[str] = None
    payment_term_days: Optional[int] = None
    due_date: Optional[date] = None
    sale_id: Optional[str] = None

    def __post_init__(self) -> None:
        require_utc_timestamp("created_at", self.created_at)

    @property
    def balance_due(self) -> Decimal:
        return self.total_amount - self.amount_paid

    @property
    def is_settled(self) -> bool:
        return self.balance_due <= 0
