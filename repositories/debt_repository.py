"""
Debt repository.

Lists outstanding client debts and records payments against them.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, List, Mapping, Optional

import httpx

from domain.debt import Debt
from repositories.client import ApiRequestError, error_message, unwrap_list

logger = logging.getLogger(__name__)

GENERIC_PAYMENT_ERROR = "Failed to record payment"


def _parse_date(value: Any) -> Optional[date]:
    """Parse an ISO date or timestamp (with optional trailing 'Z')."""

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).replace("Z", "+00:00")
    if "T" in text:
        return datetime.fromisoformat(text).date()
    return date.fromisoformat(text)


def _row_to_debt(row: Mapping[str, Any]) -> Debt:
    """Convert an API row into a Debt."""

    return Debt(
        debt_id=str(row["id"]),
        total_amount=Decimal(str(row.get("total_amount", 0))),
        amount_paid=Decimal(str(row.get("amount_paid", 0))),
        balance_due=Decimal(str(row.get("balance_due", 0))),
        debt_number=row.get("debt_number"),
        invoice_number=row.get("invoice_number"),
        client_name=row.get("client_name"),
        due_date=_parse_date(row.get("due_date")),
        debt_status=row.get("debt_status"),
    )


def list_debts(http: httpx.Client) -> List[Debt]:
    """
    Fetch all debts visible to the current user.

    Raises:
        ApiRequestError: If the service responds with an error status
    """

    response = http.get("/debts")
    if response.is_error:
        raise ApiRequestError(
            error_message(response, "Failed to fetch debts"),
            status_code=response.status_code,
        )

    rows = unwrap_list(response.json())
    return [_row_to_debt(row) for row in rows if isinstance(row, Mapping) and row.get("id")]


def pay_debt(http: httpx.Client, debt_id: str, payload: Mapping[str, Any]) -> dict[str, Any]:
    """
    Record a payment against a debt.

    Args:
        http: Authenticated client
        debt_id: Debt to pay down
        payload: `{amount_paid, payment_method, transaction_id, reference?, notes?}`

    Returns:
        The response body's `data` object (empty dict if absent)

    Raises:
        ApiRequestError: With the server's `error` text, or a generic message
    """

    try:
        response = http.post(f"/debts/{debt_id}/pay", json=dict(payload))
    except httpx.HTTPError as e:
        logger.warning("Debt payment request failed", extra={"debt_id": debt_id, "error": str(e)})
        raise ApiRequestError(GENERIC_PAYMENT_ERROR) from e

    if response.is_error:
        raise ApiRequestError(
            error_message(response, GENERIC_PAYMENT_ERROR),
            status_code=response.status_code,
        )

    try:
        body = response.json()
    except ValueError:
        body = {}

    if isinstance(body, Mapping) and body.get("success") is False:
        raise ApiRequestError(
            str(body.get("error") or GENERIC_PAYMENT_ERROR),
            status_code=response.status_code,
        )

    data = body.get("data") if isinstance(body, Mapping) else None
    return dict(data) if isinstance(data, Mapping) else {}


__all__ = ["GENERIC_PAYMENT_ERROR", "list_debts", "pay_debt"]
