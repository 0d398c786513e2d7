"""
Debt payment service.

Records payments against the debts left by credit and partial sales.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional

import httpx

from domain.debt import Debt, generate_transaction_id, validate_debt_payment
from domain.errors import ErrorKind, SaleValidationError
from domain.money import money_to_json
from domain.payment_plan import PaymentMethod
from repositories.client import ApiRequestError, create_api_client
from repositories.debt_repository import list_debts, pay_debt

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DebtPaymentRequest:
    debt_id: str
    balance_due: Decimal
    amount_paid_input: Any
    payment_method: PaymentMethod = PaymentMethod.CASH
    reference: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True, slots=True)
class DebtPaymentResult:
    success: bool
    transaction_id: Optional[str] = None
    amount_paid: Optional[Decimal] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    status_code: Optional[int] = None
    response_data: dict = field(default_factory=dict)


def record_debt_payment(
    request: DebtPaymentRequest,
    token: Optional[str],
    *,
    base_url: Optional[str] = None,
    transport: Optional[httpx.BaseTransport] = None,
    transaction_id: Optional[str] = None,
) -> DebtPaymentResult:
    """
    Validate and record one payment against a debt.

    A transaction id is generated unless one is supplied. Optional reference
    and notes are only sent when non-empty.

    Returns:
        DebtPaymentResult; never raises for validation or server errors
    """

    try:
        amount = validate_debt_payment(request.amount_paid_input, request.balance_due)
        if not token:
            raise SaleValidationError(ErrorKind.NO_TOKEN)
    except SaleValidationError as e:
        logger.warning(
            f"Debt payment rejected: {e.message}",
            extra={"debt_id": request.debt_id, "error_kind": e.kind.value},
        )
        return DebtPaymentResult(success=False, error=e.message, error_kind=e.kind)

    txn_id = transaction_id or generate_transaction_id()
    payload: dict[str, Any] = {
        "amount_paid": money_to_json(amount),
        "payment_method": request.payment_method.value,
        "transaction_id": txn_id,
    }
    if request.reference:
        payload["reference"] = request.reference
    if request.notes:
        payload["notes"] = request.notes

    try:
        with create_api_client(token, base_url=base_url, transport=transport) as http:
            data = pay_debt(http, request.debt_id, payload)
    except ApiRequestError as e:
        logger.warning(
            f"Debt payment failed: {e.message}",
            extra={"debt_id": request.debt_id, "status_code": e.status_code},
        )
        return DebtPaymentResult(
            success=False,
            transaction_id=txn_id,
            error=e.message,
            status_code=e.status_code,
        )

    logger.info(
        f"Recorded payment {txn_id} on debt {request.debt_id}",
        extra={"debt_id": request.debt_id, "amount_paid": str(amount)},
    )
    return DebtPaymentResult(
        success=True,
        transaction_id=txn_id,
        amount_paid=amount,
        response_data=data,
    )


def list_overdue_debts(
    token: Optional[str],
    as_of: date,
    *,
    base_url: Optional[str] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> List[Debt]:
    """
    Fetch debts and keep those overdue as of `as_of`.

    Lookup failures are logged and yield an empty list.
    """

    try:
        with create_api_client(token, base_url=base_url, transport=transport) as http:
            debts = list_debts(http)
    except (SaleValidationError, ApiRequestError, httpx.HTTPError, ValueError, InvalidOperation) as e:
        logger.warning("Debt lookup failed", extra={"error": str(e)})
        return []

    return [debt for debt in debts if debt.is_overdue(as_of)]


__all__ = [
    "DebtPaymentRequest",
    "DebtPaymentResult",
    "record_debt_payment",
    "list_overdue_debts",
]
