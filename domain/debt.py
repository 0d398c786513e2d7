"""
Domain: Client debts.

Credit and partial sales leave a balance that the inventory service tracks as
a debt. Payments against a debt must be positive and may not exceed the
remaining balance.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from .errors import ErrorKind, SaleValidationError
from .money import parse_money

OVERDUE_STATUS = "overdue"


@dataclass(frozen=True, slots=True)
class Debt:
    debt_id: str
    total_amount: Decimal
    amount_paid: Decimal
    balance_due: Decimal
    debt_number: Optional[str] = None
    invoice_number: Optional[str] = None
    client_name: Optional[str] = None
    due_date: Optional[date] = None
    debt_status: Optional[str] = None  # pending, partial, paid, overdue

    def is_overdue(self, as_of: date) -> bool:
        if self.debt_status == OVERDUE_STATUS:
            return True
        if self.due_date is None or self.balance_due <= 0:
            return False
        return as_of > self.due_date


def validate_debt_payment(amount_input: Any, balance_due: Decimal) -> Decimal:
    """
    Validate a payment amount against the outstanding balance.

    Returns:
        The amount, rounded to cents

    Raises:
        SaleValidationError: InvalidPaymentAmount or PaymentExceedsBalance
    """

    try:
        amount = parse_money(amount_input)
    except ValueError:
        amount = None
    if amount is None or amount <= 0:
        raise SaleValidationError(ErrorKind.INVALID_PAYMENT_AMOUNT)

    if amount > balance_due:
        raise SaleValidationError(
            ErrorKind.PAYMENT_EXCEEDS_BALANCE,
            f"Payment amount cannot exceed balance due ({balance_due:,})",
        )
    return amount


def generate_transaction_id(now_ms: Optional[int] = None, rng: Optional[random.Random] = None) -> str:
    """Build a payment reference of the form TXN-<epoch millis>-<4 digits>."""

    if now_ms is None:
        now_ms = int(time.time() * 1000)
    suffix = (rng or random).randint(0, 9999)
    return f"TXN-{now_ms}-{suffix:04d}"


__all__ = ["OVERDUE_STATUS", "Debt", "validate_debt_payment", "generate_transaction_id"]
