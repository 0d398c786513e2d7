"""
Sales API Endpoints.

Endpoints for previewing and creating sales.
"""

from typing import List, Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_api_transport, get_bearer_token
from api.models import LineItemResponse, SaleCreatedResponse, SalePreviewResponse, SaleRequest
from domain.catalog import Product
from domain.errors import ErrorKind, SaleValidationError
from domain.line_item import LineItem, add_line_item
from domain.payment_plan import describe_payment_term, validate_sale
from domain.time import utc_now
from services.sale_submission_service import SaleDraft, submit_sale

router = APIRouter()


def _build_items(request: SaleRequest) -> List[LineItem]:
    """Turn request rows into validated line items, failing on the first bad row."""

    items: List[LineItem] = []
    for index, entry in enumerate(request.items):
        product = None
        if entry.product_id:
            product = Product(
                product_id=entry.product_id,
                sku=entry.sku,
                product_name=entry.product_name,
                selling_price=entry.selling_price,
                buying_price=entry.buying_price,
            )
        try:
            items = add_line_item(
                product,
                entry.quantity,
                entry.unit_price,
                entry.discount_percentage,
                items,
            )
        except SaleValidationError as e:
            raise HTTPException(
                status_code=422,
                detail={
                    "error": f"Item {index + 1}: {e.message}",
                    "kind": e.kind.value,
                    "item_index": index,
                },
            )
    return items


def _to_draft(request: SaleRequest, items: List[LineItem]) -> SaleDraft:
    return SaleDraft(
        store_id=request.store_id,
        items=tuple(items),
        sale_type=request.sale_type,
        payment_method=request.payment_method,
        client_id=request.client_id,
        amount_paid_input=request.amount_paid,
        payment_term_input=request.payment_term_days,
    )


@router.post(
    "/sales/preview",
    response_model=SalePreviewResponse,
    summary="Preview Sale",
    description="Compute line totals, invoice totals and the payment plan without submitting anything."
)
def preview_sale(request: SaleRequest):
    """
    Preview a sale.

    Returns the computed line items, invoice totals, payment plan and due
    date. `ready_to_submit` is false when submission would be rejected, with
    the first blocking reason in `blocking_error`.
    """
    items = _build_items(request)
    draft = _to_draft(request, items)
    totals = draft.totals
    plan = draft.payment_plan

    blocking_error: Optional[SaleValidationError] = None
    try:
        validate_sale(
            totals,
            draft.sale_type,
            draft.client_id,
            draft.amount_paid_input,
            draft.payment_term_input,
            draft.store_id,
        )
    except SaleValidationError as e:
        blocking_error = e

    requires_term = draft.sale_type.requires_payment_term
    return SalePreviewResponse(
        items=[
            LineItemResponse(
                product_id=item.product_id,
                product_name=item.product_name,
                sku=item.sku,
                unit_price=item.unit_price,
                quantity=item.quantity,
                discount_percentage=item.discount_percentage,
                subtotal=item.subtotal,
                discount_amount=item.discount_amount,
                total=item.total,
            )
            for item in items
        ],
        subtotal=totals.subtotal_amount,
        total_discount=totals.total_discount,
        total_amount=totals.total_amount,
        sale_type=draft.sale_type,
        amount_paid=plan.amount_paid,
        balance_due=plan.balance_due,
        payment_term_days=plan.payment_term_days if requires_term else None,
        payment_term_description=describe_payment_term(plan.payment_term_days) if requires_term else None,
        due_date=plan.due_date(utc_now()),
        ready_to_submit=blocking_error is None,
        blocking_error=blocking_error.message if blocking_error else None,
        blocking_error_kind=blocking_error.kind.value if blocking_error else None,
    )


@router.post(
    "/sales",
    response_model=SaleCreatedResponse,
    status_code=201,
    summary="Create Sale",
    description="Validate a sale and submit it once to the inventory service."
)
def create_sale(
    request: SaleRequest,
    token: Optional[str] = Depends(get_bearer_token),
    transport: Optional[httpx.BaseTransport] = Depends(get_api_transport),
):
    """
    Create a sale.

    **Process:**
    1. Builds and validates each line item
    2. Runs the pre-submission checks (items, client, partial amount, payment term, store)
    3. Requires a bearer token
    4. Sends a single `POST /sales` to the inventory service

    Nothing is retried. If the inventory service rejects the sale, its error
    text is returned with status 502.
    """
    items = _build_items(request)
    draft = _to_draft(request, items)

    result = submit_sale(draft, token, transport=transport)

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

    receipt = result.receipt
    message = f"Sale {receipt.invoice_number} created successfully."
    if receipt.payment_term_days:
        message += f" Payment due in {receipt.payment_term_days} days."

    return SaleCreatedResponse(
        invoice_number=receipt.invoice_number,
        sale_type=receipt.sale_type,
        total_amount=receipt.total_amount,
        amount_paid=receipt.amount_paid,
        balance_due=receipt.balance_due,
        due_date=receipt.due_date,
        message=message,
    )
