"""
Debts API Endpoints.

Endpoints for reviewing overdue debts and recording payments against them.
"""

from datetime import date
from typing import List, Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_api_transport, get_bearer_token, require_token
from api.models import DebtPaymentRequestModel, DebtPaymentResponse, DebtResponse
from domain.errors import ErrorKind
from domain.time import utc_now
from services.debt_payment_service import (
    DebtPaymentRequest,
    list_overdue_debts,
    record_debt_payment,
)

router = APIRouter()


@router.get(
    "/debts/overdue",
    response_model=List[DebtResponse],
    summary="List Overdue Debts",
)
def get_overdue_debts(
    as_of: Optional[date] = Query(None, description="Evaluate overdue status on this date (default: today, UTC)"),
    token: Optional[str] = Depends(get_bearer_token),
    transport: Optional[httpx.BaseTransport] = Depends(get_api_transport),
):
    """Debts marked overdue, or past their due date with a balance remaining."""
    debts = list_overdue_debts(
        require_token(token),
        as_of or utc_now().date(),
        transport=transport,
    )
    return [
        DebtResponse(
            debt_id=d.debt_id,
            debt_number=d.debt_number,
            invoice_number=d.invoice_number,
            client_name=d.client_name,
            total_amount=d.total_amount,
            amount_paid=d.amount_paid,
            balance_due=d.balance_due,
            due_date=d.due_date,
            debt_status=d.debt_status,
        )
        for d in debts
    ]


@router.post(
    "/debts/{debt_id}/payments",
    response_model=DebtPaymentResponse,
    status_code=201,
    summary="Record Debt Payment",
)
def create_debt_payment(
    debt_id: str,
    request: DebtPaymentRequestModel,
    token: Optional[str] = Depends(get_bearer_token),
    transport: Optional[httpx.BaseTransport] = Depends(get_api_transport),
):
    """
    Record a payment against a debt.

    The amount must be positive and may not exceed the balance due. A
    transaction id of the form `TXN-<millis>-<4 digits>` is generated.
    """
    result = record_debt_payment(
        DebtPaymentRequest(
            debt_id=debt_id,
            balance_due=request.balance_due,
            amount_paid_input=request.amount_paid,
            payment_method=request.payment_method,
            reference=request.reference,
            notes=request.notes,
        ),
        token,
        transport=transport,
    )

    if not result.success:
        if result.error_kind is ErrorKind.NO_TOKEN:
            status_code = 401
        elif result.error_kind is not None:
            status_code = 422
        else:
            status_code = 502
        raise HTTPException(
            status_code=status_code,
            detail={
                "error": result.error,
                "kind": result.error_kind.value if result.error_kind else None,
            },
        )

    return DebtPaymentResponse(
        success=True,
        transaction_id=result.transaction_id,
        amount_paid=result.amount_paid,
        message="Payment recorded successfully",
    )
