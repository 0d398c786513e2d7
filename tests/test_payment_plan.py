"""
Tests for `domain/payment_plan.py`.

Covers:
- amount paid and balance per sale type
- due date arithmetic (UTC calendar days, time-of-day independent)
- payment term labels
- ordered pre-submission validation
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from domain.errors import ErrorKind, SaleValidationError
from domain.invoice import summarize_invoice
from domain.line_item import add_line_item
from domain.payment_plan import (
    SaleType,
    calculate_due_date,
    describe_payment_term,
    resolve_payment_plan,
    validate_sale,
)


@pytest.fixture
def totals(rice, oil):
    items = add_line_item(rice, "3", None, "10", [])
    items = add_line_item(oil, "2", None, "0", items)
    return summarize_invoice(items)


def test_cash_plan_pays_in_full(totals) -> None:
    plan = resolve_payment_plan(SaleType.CASH, totals, "123", "30")

    assert plan.amount_paid == Decimal("37000.00")
    assert plan.balance_due == Decimal("0")
    assert plan.payment_term_days is None


def test_credit_plan_pays_nothing(totals) -> None:
    plan = resolve_payment_plan(SaleType.CREDIT, totals, "5000", "30")

    assert plan.amount_paid == Decimal("0")
    assert plan.balance_due == Decimal("37000.00")
    assert plan.payment_term_days == 30


def test_partial_plan_uses_entered_amount(totals) -> None:
    plan = resolve_payment_plan(SaleType.PARTIAL, totals, "20000", "30")

    assert plan.amount_paid == Decimal("20000.00")
    assert plan.balance_due == Decimal("17000.00")


def test_partial_plan_with_unparsable_amount_previews_as_zero(totals) -> None:
    plan = resolve_payment_plan(SaleType.PARTIAL, totals, "lots", "30")

    assert plan.amount_paid == Decimal("0")
    assert plan.balance_due == Decimal("37000.00")


def test_due_date_ignores_time_of_day() -> None:
    early = datetime(2025, 3, 1, 0, 0, 1, tzinfo=timezone.utc)
    late = datetime(2025, 3, 1, 23, 59, 59, tzinfo=timezone.utc)

    assert calculate_due_date(early, 30) == date(2025, 3, 31)
    assert calculate_due_date(late, 30) == date(2025, 3, 31)


def test_due_date_requires_utc() -> None:
    with pytest.raises(ValueError):
        calculate_due_date(datetime(2025, 3, 1), 30)
    with pytest.raises(ValueError):
        calculate_due_date(datetime(2025, 3, 1, tzinfo=timezone(timedelta(hours=3))), 30)


def test_plan_due_date_only_for_credit_and_partial(totals) -> None:
    as_of = datetime(2025, 1, 2, 12, 0, tzinfo=timezone.utc)

    assert resolve_payment_plan(SaleType.CASH, totals).due_date(as_of) is None
    assert resolve_payment_plan(SaleType.PARTIAL, totals, "1", "30").due_date(as_of) == date(2025, 2, 1)
    # Blank term previews with the 21-day default
    assert resolve_payment_plan(SaleType.CREDIT, totals, None, "").due_date(as_of) == date(2025, 1, 23)


@pytest.mark.parametrize(
    "days, label",
    [(7, "Net 7"), (14, "Net 14"), (21, "Net 21"), (30, "Net 30"), (60, "Net 60"), (90, "Net 90"), (45, "45 days"), (1, "1 days")],
)
def test_describe_payment_term(days, label) -> None:
    assert describe_payment_term(days) == label


def _kind(exc_info) -> ErrorKind:
    return exc_info.value.kind


def test_validate_empty_invoice_first() -> None:
    with pytest.raises(SaleValidationError) as exc_info:
        validate_sale(summarize_invoice([]), SaleType.CREDIT, None, None, "0", None)

    assert _kind(exc_info) is ErrorKind.EMPTY_INVOICE


def test_validate_cash_sale_needs_no_client(totals) -> None:
    validate_sale(totals, SaleType.CASH, None, None, "", "store-1")


@pytest.mark.parametrize("sale_type", [SaleType.CREDIT, SaleType.PARTIAL])
def test_validate_credit_and_partial_require_client(totals, sale_type) -> None:
    with pytest.raises(SaleValidationError) as exc_info:
        validate_sale(totals, sale_type, None, "100", "30", "store-1")

    assert _kind(exc_info) is ErrorKind.CLIENT_REQUIRED


@pytest.mark.parametrize("amount", [None, "", "0", "-5", "abc", "37000", "37000.01", "50000", "0.004", "36999.995", "1e30"])
def test_validate_partial_amount_bounds(totals, amount) -> None:
    with pytest.raises(SaleValidationError) as exc_info:
        validate_sale(totals, SaleType.PARTIAL, "client-1", amount, "30", "store-1")

    assert _kind(exc_info) is ErrorKind.INVALID_PARTIAL_AMOUNT


def test_validate_partial_checks_the_amount_that_is_sent(totals) -> None:
    """Sub-cent input is judged after rounding, the same value the payload carries."""

    validate_sale(totals, SaleType.PARTIAL, "client-1", "36999.994", "30", "store-1")
    plan = resolve_payment_plan(SaleType.PARTIAL, totals, "36999.994", "30")

    assert plan.amount_paid == Decimal("36999.99")
    assert plan.balance_due == Decimal("0.01")


def test_partial_plan_with_oversized_amount_previews_as_zero(totals) -> None:
    plan = resolve_payment_plan(SaleType.PARTIAL, totals, "1e30", "30")

    assert plan.amount_paid == Decimal("0")


def test_validate_partial_equal_to_total_suggests_cash(totals) -> None:
    with pytest.raises(SaleValidationError) as exc_info:
        validate_sale(totals, SaleType.PARTIAL, "client-1", "37000", "30", "store-1")

    assert "Cash" in exc_info.value.message


@pytest.mark.parametrize("term", ["0", "366", "-1", "", "abc", "2.5", None])
def test_validate_payment_term_range(totals, term) -> None:
    with pytest.raises(SaleValidationError) as exc_info:
        validate_sale(totals, SaleType.CREDIT, "client-1", None, term, "store-1")

    assert _kind(exc_info) is ErrorKind.INVALID_PAYMENT_TERM


@pytest.mark.parametrize("term", ["1", "365", 30])
def test_validate_payment_term_boundaries_accepted(totals, term) -> None:
    validate_sale(totals, SaleType.CREDIT, "client-1", None, term, "store-1")


def test_validate_cash_sale_ignores_bad_term(totals) -> None:
    validate_sale(totals, SaleType.CASH, None, None, "999", "store-1")


def test_validate_store_checked_last(totals) -> None:
    with pytest.raises(SaleValidationError) as exc_info:
        validate_sale(totals, SaleType.PARTIAL, "client-1", "20000", "30", None)

    assert _kind(exc_info) is ErrorKind.NO_STORE_SELECTED


def test_validate_reports_only_first_failure(totals) -> None:
    """Missing client and a bad term and no store: only ClientRequired is reported."""

    with pytest.raises(SaleValidationError) as exc_info:
        validate_sale(totals, SaleType.PARTIAL, None, "99999", "0", None)

    assert _kind(exc_info) is ErrorKind.CLIENT_REQUIRED
