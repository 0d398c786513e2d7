"""
Create-sale session.

Holds the in-memory state of one "create sale" interaction: the loaded pick
lists, the item being entered, the growing list of line items and the payment
form. Nothing is persisted locally. A successful submission resets the
session; cancelling discards it without touching the server.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Callable, List, Optional

import httpx

from domain.catalog import Product, StoreClient, find_by_id
from domain.errors import SaleValidationError
from domain.invoice import InvoiceTotals, summarize_invoice
from domain.line_item import LineItem, add_line_item, remove_line_item
from domain.payment_plan import (
    DEFAULT_PAYMENT_TERM_DAYS,
    PaymentMethod,
    PaymentPlan,
    SaleType,
    describe_payment_term,
    resolve_payment_plan,
)
from domain.sale import SaleReceipt
from domain.time import utc_now
from repositories.client import create_api_client
from services.catalog_service import load_clients, load_products
from services.sale_submission_service import SaleDraft, SubmissionResult, submit_sale

logger = logging.getLogger(__name__)

SaleCreatedListener = Callable[[SaleReceipt], None]


class SubmissionInProgressError(Exception):
    """Raised when submit() is called while a submission is already running."""


@dataclass(frozen=True, slots=True)
class ItemInput:
    """The line item currently being entered (raw form values)."""
    product_id: Optional[str] = None
    quantity: str = "1"
    discount_percentage: str = "0"
    unit_price: str = ""


@dataclass(frozen=True, slots=True)
class SaleForm:
    """Payment fields of the sale (raw form values)."""
    client_id: Optional[str] = None
    sale_type: SaleType = SaleType.CASH
    payment_method: PaymentMethod = PaymentMethod.CASH
    amount_paid: str = ""
    payment_term_days: str = str(DEFAULT_PAYMENT_TERM_DAYS)


class SaleSession:
    """
    One "create sale" session for a store.

    The store and token are passed in explicitly rather than read from
    ambient storage.
    """

    def __init__(
        self,
        store_id: Optional[str],
        token: Optional[str],
        *,
        base_url: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store_id = store_id
        self.token = token
        self._base_url = base_url
        self._transport = transport
        self._clock = clock
        self._listeners: List[SaleCreatedListener] = []
        self._submitting = False

        self.products: List[Product] = []
        self.clients: List[StoreClient] = []
        self.items: List[LineItem] = []
        self.current_item = ItemInput()
        self.form = SaleForm()

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def load_catalog(self) -> None:
        """
        Populate products and clients.

        Failures, including a missing token, leave the lists empty.
        """

        try:
            http = create_api_client(self.token, base_url=self._base_url, transport=self._transport)
        except SaleValidationError as e:
            logger.warning(f"Catalog not loaded: {e.message}", extra={"store_id": self.store_id})
            self.products = []
            self.clients = []
            return

        with http:
            self.products = load_products(http, self.store_id)
            self.clients = load_clients(http)

    def on_sale_created(self, listener: SaleCreatedListener) -> None:
        """Register a callback invoked once per successfully created sale."""

        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Line items
    # ------------------------------------------------------------------

    @property
    def selected_product(self) -> Optional[Product]:
        return find_by_id(self.products, self.current_item.product_id, "product_id")

    @property
    def selected_client(self) -> Optional[StoreClient]:
        return find_by_id(self.clients, self.form.client_id, "client_id")

    def select_product(self, product_id: str) -> Optional[Product]:
        """Select a product; its selling price becomes the unit-price input."""

        product = find_by_id(self.products, product_id, "product_id")
        if product is not None:
            self.current_item = replace(
                self.current_item,
                product_id=product.product_id,
                unit_price=str(product.selling_price),
            )
        return product

    def update_item_input(
        self,
        *,
        quantity: Optional[str] = None,
        discount_percentage: Optional[str] = None,
        unit_price: Optional[str] = None,
    ) -> None:
        changes = {
            key: value
            for key, value in (
                ("quantity", quantity),
                ("discount_percentage", discount_percentage),
                ("unit_price", unit_price),
            )
            if value is not None
        }
        self.current_item = replace(self.current_item, **changes)

    def add_item(self) -> LineItem:
        """
        Add the current item input as a new line item.

        Raises:
            SaleValidationError: The list and the item input are left unchanged
        """

        self.items = add_line_item(
            self.selected_product,
            self.current_item.quantity,
            self.current_item.unit_price,
            self.current_item.discount_percentage,
            self.items,
        )
        self.current_item = ItemInput()
        return self.items[-1]

    def remove_item(self, index: int) -> None:
        self.items = remove_line_item(index, self.items)

    # ------------------------------------------------------------------
    # Payment form
    # ------------------------------------------------------------------

    def set_sale_type(self, sale_type: SaleType) -> None:
        """Switch sale type; the amount-paid input is cleared."""

        self.form = replace(self.form, sale_type=SaleType(sale_type), amount_paid="")

    def set_client(self, client_id: Optional[str]) -> None:
        self.form = replace(self.form, client_id=client_id or None)

    def set_payment_method(self, payment_method: PaymentMethod) -> None:
        self.form = replace(self.form, payment_method=PaymentMethod(payment_method))

    def set_amount_paid(self, amount_paid: str) -> None:
        self.form = replace(self.form, amount_paid=amount_paid)

    def set_payment_term(self, days: str) -> None:
        self.form = replace(self.form, payment_term_days=str(days))

    # ------------------------------------------------------------------
    # Derived values (recomputed on every access)
    # ------------------------------------------------------------------

    @property
    def invoice(self) -> InvoiceTotals:
        return summarize_invoice(self.items)

    @property
    def payment_plan(self) -> PaymentPlan:
        return resolve_payment_plan(
            self.form.sale_type,
            self.invoice,
            self.form.amount_paid,
            self.form.payment_term_days,
        )

    @property
    def due_date(self) -> Optional[date]:
        return self.payment_plan.due_date(self._clock())

    @property
    def payment_term_description(self) -> str:
        return describe_payment_term(self.payment_plan.payment_term_days)

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    def to_draft(self) -> SaleDraft:
        return SaleDraft(
            store_id=self.store_id,
            items=tuple(self.items),
            sale_type=self.form.sale_type,
            payment_method=self.form.payment_method,
            client_id=self.form.client_id,
            amount_paid_input=self.form.amount_paid,
            payment_term_input=self.form.payment_term_days,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def submit(self) -> SubmissionResult:
        """
        Submit the sale once.

        On success the session is reset and listeners are notified. On
        failure all items and inputs are kept so the user can retry.

        Raises:
            SubmissionInProgressError: If a submission is already running
        """

        if self._submitting:
            raise SubmissionInProgressError("A submission is already in progress")

        self._submitting = True
        try:
            result = submit_sale(
                self.to_draft(),
                self.token,
                base_url=self._base_url,
                transport=self._transport,
                now=self._clock(),
            )
        finally:
            self._submitting = False

        if result.success:
            self.reset()
            for listener in list(self._listeners):
                listener(result.receipt)

        return result

    def reset(self) -> None:
        """Clear line items and all form inputs back to their defaults."""

        self.items = []
        self.current_item = ItemInput()
        self.form = SaleForm()

    def cancel(self) -> None:
        """Discard the session. Nothing was persisted, so nothing is sent."""

        logger.debug(f"Sale session cancelled with {len(self.items)} items", extra={"store_id": self.store_id})
        self.reset()


__all__ = [
    "SaleCreatedListener",
    "SubmissionInProgressError",
    "ItemInput",
    "SaleForm",
    "SaleSession",
]
