"""
Sale submission service.

Validates a drafted sale, assembles the request payload and sends it to the
inventory service exactly once.

Handles:
- Ordered precondition checks (first failure wins, nothing is sent)
- Payload assembly (sale header, line items, payment term)
- Single-shot submission with no automatic retry; the service creates the
  whole sale or nothing
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Tuple

import httpx

from domain.errors import ErrorKind, SaleValidationError
from domain.invoice import InvoiceTotals, summarize_invoice
from domain.line_item import LineItem
from domain.money import money_to_json
from domain.payment_plan import (
    DEFAULT_PAYMENT_TERM_DAYS,
    PaymentMethod,
    PaymentPlan,
    SaleType,
    resolve_payment_plan,
    validate_sale,
)
from domain.sale import SaleReceipt
from domain.time import require_utc_timestamp, utc_now
from repositories.client import ApiRequestError, create_api_client
from repositories.sale_repository import create_sale

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SaleDraft:
    """
    Everything the user has entered for one sale.

    Form inputs are kept raw (as typed); they are parsed during validation.
    """

    store_id: Optional[str]
    items: Tuple[LineItem, ...]
    sale_type: SaleType = SaleType.CASH
    payment_method: PaymentMethod = PaymentMethod.CASH
    client_id: Optional[str] = None
    amount_paid_input: Any = None
    payment_term_input: Any = DEFAULT_PAYMENT_TERM_DAYS

    @property
    def totals(self) -> InvoiceTotals:
        return summarize_invoice(self.items)

    @property
    def payment_plan(self) -> PaymentPlan:
        return resolve_payment_plan(
            self.sale_type,
            self.totals,
            self.amount_paid_input,
            self.payment_term_input,
        )


@dataclass(frozen=True, slots=True)
class SubmissionResult:
    """
    Result of a submission attempt.

    success: True if the inventory service created the sale
    invoice_number: Server-assigned invoice number (success only)
    error: User-facing reason (failure only)
    error_kind: Set for precondition failures; None for server/network errors
    receipt: Confirmation details (success only)
    """

    success: bool
    invoice_number: Optional[str] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    receipt: Optional[SaleReceipt] = None
    status_code: Optional[int] = None
    response_data: dict = field(default_factory=dict)


def check_preconditions(draft: SaleDraft, token: Optional[str]) -> None:
    """
    Run every local check, in order, before any network call.

    Raises:
        SaleValidationError: For the first failing check
    """

    validate_sale(
        draft.totals,
        draft.sale_type,
        draft.client_id,
        draft.amount_paid_input,
        draft.payment_term_input,
        draft.store_id,
    )
    if not token:
        raise SaleValidationError(ErrorKind.NO_TOKEN)


def build_sale_payload(draft: SaleDraft) -> dict[str, Any]:
    """
    Assemble the body for `POST /sales`.

    client_id is omitted when no client is selected; payment_term_days is only
    included for credit and partial sales. Assumes the draft has already passed
    `check_preconditions`.
    """

    totals = draft.totals
    plan = draft.payment_plan

    sale: dict[str, Any] = {
        "store_id": draft.store_id,
        "sale_type": draft.sale_type.value,
        "subtotal": money_to_json(totals.subtotal_amount),
        "tax_amount": 0,
        "discount_amount": money_to_json(totals.total_discount),
        "total_amount": money_to_json(totals.total_amount),
        "amount_paid": money_to_json(plan.amount_paid),
        "payment_method": {"String": draft.payment_method.value, "Valid": True},
    }
    if draft.client_id:
        sale["client_id"] = draft.client_id

    payload: dict[str, Any] = {
        "sale": sale,
        "items": [item.to_payload() for item in draft.items],
    }
    if draft.sale_type.requires_payment_term:
        payload["payment_term_days"] = plan.payment_term_days

    return payload


def submit_sale(
    draft: SaleDraft,
    token: Optional[str],
    *,
    base_url: Optional[str] = None,
    transport: Optional[httpx.BaseTransport] = None,
    now: Optional[datetime] = None,
) -> SubmissionResult:
    """
    Validate and submit a sale.

    Args:
        draft: The sale as entered
        token: Bearer token of the current session
        base_url: Override for INVENTORY_API_BASE_URL
        transport: Optional httpx transport (used by tests)
        now: Submission time (UTC); defaults to the current time

    Returns:
        SubmissionResult; never raises for validation or server errors

    Example:
        draft = SaleDraft(store_id="store-1", items=tuple(items))
        result = submit_sale(draft, token)
        if result.success:
            print(f"Created invoice {result.invoice_number}")
        else:
            print(f"Sale rejected: {result.error}")
    """

    try:
        check_preconditions(draft, token)
    except SaleValidationError as e:
        logger.warning(
            f"Sale rejected before submission: {e.message}",
            extra={"store_id": draft.store_id, "error_kind": e.kind.value},
        )
        return SubmissionResult(success=False, error=e.message, error_kind=e.kind)

    submitted_at = now or utc_now()
    require_utc_timestamp("now", submitted_at)
    payload = build_sale_payload(draft)

    try:
        with create_api_client(token, base_url=base_url, transport=transport) as http:
            data = create_sale(http, payload)
    except ApiRequestError as e:
        logger.warning(
            f"Sale submission failed: {e.message}",
            extra={"store_id": draft.store_id, "status_code": e.status_code},
        )
        return SubmissionResult(success=False, error=e.message, status_code=e.status_code)

    plan = draft.payment_plan
    invoice_number = str(data["invoice_number"])
    receipt = SaleReceipt(
        invoice_number=invoice_number,
        store_id=str(draft.store_id),
        sale_type=draft.sale_type,
        total_amount=plan.total_amount,
        amount_paid=plan.amount_paid,
        created_at=submitted_at,
        client_id=draft.client_id,
        payment_term_days=plan.payment_term_days if draft.sale_type.requires_payment_term else None,
        due_date=plan.due_date(submitted_at),
        sale_id=str(data["id"]) if data.get("id") else None,
    )

    logger.info(
        f"Sale {invoice_number} created",
        extra={
            "store_id": draft.store_id,
            "invoice_number": invoice_number,
            "sale_type": draft.sale_type.value,
            "total_amount": str(plan.total_amount),
        },
    )
    return SubmissionResult(
        success=True,
        invoice_number=invoice_number,
        receipt=receipt,
        response_data=data,
    )


__all__ = [
    "SaleDraft",
    "SubmissionResult",
    "check_preconditions",
    "build_sale_payload",
    "submit_sale",
]
