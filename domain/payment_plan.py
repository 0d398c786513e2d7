"""
Domain: Payment plans for a sale.

A sale is financed one of three ways:

| sale_type | amount_paid   | balance_due          | client | payment term |
|-----------|---------------|----------------------|--------|--------------|
| cash      | total_amount  | 0                    | no     | no           |
| credit    | 0             | total_amount         | yes    | yes          |
| partial   | user input    | total - amount_paid  | yes    | yes          |

Credit and partial sales carry a payment term of 1-365 days; the due date is
the sale date (UTC) plus that many calendar days.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from .errors import ErrorKind, SaleValidationError
from .invoice import InvoiceTotals
from .money import ZERO, parse_int, parse_money
from .time import add_calendar_days

MIN_PAYMENT_TERM_DAYS = 1
MAX_PAYMENT_TERM_DAYS = 365
DEFAULT_PAYMENT_TERM_DAYS = 21

# Display labels only; any other term renders as "{n} days".
PAYMENT_TERM_PRESETS: dict[int, str] = {
    7: "Net 7",
    14: "Net 14",
    21: "Net 21",
    30: "Net 30",
    60: "Net 60",
    90: "Net 90",
}


class SaleType(str, Enum):
    CASH = "cash"
    CREDIT = "credit"
    PARTIAL = "partial"

    @property
    def requires_client(self) -> bool:
        return self is not SaleType.CASH

    @property
    def requires_payment_term(self) -> bool:
        return self is not SaleType.CASH


class PaymentMethod(str, Enum):
    CASH = "cash"
    MOBILE_MONEY = "mobile_money"
    BANK_TRANSFER = "bank_transfer"
    CARD = "card"
    CREDIT = "credit"


@dataclass(frozen=True, slots=True)
class PaymentPlan:
    sale_type: SaleType
    total_amount: Decimal
    amount_paid: Decimal
    payment_term_days: Optional[int] = None

    @property
    def balance_due(self) -> Decimal:
        return self.total_amount - self.amount_paid

    def due_date(self, as_of: datetime) -> Optional[date]:
        """Due date for credit/partial sales; None for cash sales."""

        if not self.sale_type.requires_payment_term:
            return None
        return calculate_due_date(as_of, self.payment_term_days or DEFAULT_PAYMENT_TERM_DAYS)


def parse_payment_term(value: Any) -> Optional[int]:
    """Parse a payment-term input, returning None when it is blank or not an integer."""

    try:
        return parse_int(value)
    except ValueError:
        return None


def resolve_payment_plan(
    sale_type: SaleType,
    totals: InvoiceTotals,
    amount_paid_input: Any = None,
    payment_term_input: Any = None,
) -> PaymentPlan:
    """
    Derive the payment plan from the sale type and current form inputs.

    This is a preview computation: unparsable inputs fall back to 0 paid and
    no term. `validate_sale` is what rejects them at submission.
    """

    total = totals.total_amount
    if sale_type is SaleType.CASH:
        return PaymentPlan(sale_type=sale_type, total_amount=total, amount_paid=total)

    if sale_type is SaleType.CREDIT:
        amount_paid = ZERO
    else:
        try:
            amount_paid = parse_money(amount_paid_input)
        except ValueError:
            amount_paid = None
        if amount_paid is None:
            amount_paid = ZERO

    return PaymentPlan(
        sale_type=sale_type,
        total_amount=total,
        amount_paid=amount_paid,
        payment_term_days=parse_payment_term(payment_term_input),
    )


def calculate_due_date(created_at: datetime, payment_term_days: int) -> date:
    """Due date = created_at (UTC calendar date) + payment_term_days."""

    return add_calendar_days(created_at, payment_term_days)


def describe_payment_term(days: Optional[int]) -> str:
    """Human label for a payment term, e.g. 30 -> "Net 30", 45 -> "45 days"."""

    if days is None:
        days = DEFAULT_PAYMENT_TERM_DAYS
    return PAYMENT_TERM_PRESETS.get(days, f"{days} days")


def validate_sale(
    totals: InvoiceTotals,
    sale_type: SaleType,
    client_id: Optional[str],
    amount_paid_input: Any,
    payment_term_input: Any,
    store_id: Optional[str],
) -> None:
    """
    Run the pre-submission checks in order and raise on the first failure.

    Order:
    1. at least one line item
    2. client selected (credit/partial)
    3. partial amount present and, once rounded to cents, > 0 and < total (partial)
    4. payment term an integer in [1, 365] (credit/partial)
    5. store selected

    Raises:
        SaleValidationError: Carrying only the first failing ErrorKind.
    """

    if totals.is_empty:
        raise SaleValidationError(ErrorKind.EMPTY_INVOICE)

    if sale_type.requires_client and not client_id:
        raise SaleValidationError(ErrorKind.CLIENT_REQUIRED)

    if sale_type is SaleType.PARTIAL:
        try:
            partial = parse_money(amount_paid_input)
        except ValueError:
            partial = None
        if partial is None or partial <= 0:
            raise SaleValidationError(ErrorKind.INVALID_PARTIAL_AMOUNT)
        if partial >= totals.total_amount:
            raise SaleValidationError(
                ErrorKind.INVALID_PARTIAL_AMOUNT,
                "Partial payment must be less than total amount. Use 'Cash' for full payment.",
            )

    if sale_type.requires_payment_term:
        days = parse_payment_term(payment_term_input)
        if days is None or not MIN_PAYMENT_TERM_DAYS <= days <= MAX_PAYMENT_TERM_DAYS:
            raise SaleValidationError(ErrorKind.INVALID_PAYMENT_TERM)

    if not store_id:
        raise SaleValidationError(ErrorKind.NO_STORE_SELECTED)


__all__ = [
    "MIN_PAYMENT_TERM_DAYS",
    "MAX_PAYMENT_TERM_DAYS",
    "DEFAULT_PAYMENT_TERM_DAYS",
    "PAYMENT_TERM_PRESETS",
    "SaleType",
    "PaymentMethod",
    "PaymentPlan",
    "parse_payment_term",
    "resolve_payment_plan",
    "calculate_due_date",
    "describe_payment_term",
    "validate_sale",
]
