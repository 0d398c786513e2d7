"""
Domain: Validation error taxonomy for the sale workflow.

Every precondition failure has a distinct ErrorKind and a user-facing message.
These are detected before any network call is attempted.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    MISSING_PRODUCT = "MissingProduct"
    INVALID_QUANTITY = "InvalidQuantity"
    INVALID_PRICE = "InvalidPrice"
    INVALID_DISCOUNT = "InvalidDiscount"
    EMPTY_INVOICE = "EmptyInvoice"
    CLIENT_REQUIRED = "ClientRequired"
    INVALID_PARTIAL_AMOUNT = "InvalidPartialAmount"
    INVALID_PAYMENT_TERM = "InvalidPaymentTerm"
    NO_STORE_SELECTED = "NoStoreSelected"
    NO_TOKEN = "NoToken"
    INVALID_PAYMENT_AMOUNT = "InvalidPaymentAmount"
    PAYMENT_EXCEEDS_BALANCE = "PaymentExceedsBalance"


DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.MISSING_PRODUCT: "Please select a product",
    ErrorKind.INVALID_QUANTITY: "Quantity must be greater than 0",
    ErrorKind.INVALID_PRICE: "Unit price must be greater than 0",
    ErrorKind.INVALID_DISCOUNT: "Discount must be between 0 and 100 percent",
    ErrorKind.EMPTY_INVOICE: "Please add at least one item",
    ErrorKind.CLIENT_REQUIRED: "Credit and partial sales require a client to be selected",
    ErrorKind.INVALID_PARTIAL_AMOUNT: "Please enter the amount paid for partial payment",
    ErrorKind.INVALID_PAYMENT_TERM: "Payment term must be between 1 and 365 days",
    ErrorKind.NO_STORE_SELECTED: "Please select a store from the dashboard first",
    ErrorKind.NO_TOKEN: "No authentication token found",
    ErrorKind.INVALID_PAYMENT_AMOUNT: "Please enter a valid payment amount",
    ErrorKind.PAYMENT_EXCEEDS_BALANCE: "Payment amount cannot exceed balance due",
}


class SaleValidationError(Exception):
    """Raised when user input fails a precondition of the sale workflow."""

    def __init__(self, kind: ErrorKind, message: Optional[str] = None):
        self.kind = kind
        self.message = message or DEFAULT_MESSAGES[kind]
        super().__init__(self.message)


__all__ = ["ErrorKind", "DEFAULT_MESSAGES", "SaleValidationError"]
