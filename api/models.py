"""
API Request and Response Models.

Pydantic models for validating API requests and serializing responses.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from domain.money import MAX_AMOUNT
from domain.payment_plan import DEFAULT_PAYMENT_TERM_DAYS, PaymentMethod, SaleType


# ============================================================================
# Catalog Models
# ============================================================================

class ProductResponse(BaseModel):
    """Single product in a store catalog."""
    product_id: str
    sku: str
    product_name: str
    selling_price: Decimal
    buying_price: Decimal


class ClientResponse(BaseModel):
    """Single client with a resolved display name."""
    client_id: str
    display_name: str


# ============================================================================
# Sale Models
# ============================================================================

class LineItemInput(BaseModel):
    """
    One line item as entered.

    Product fields are the snapshot taken from the catalog when the item was
    picked. Leave unit_price empty to use the selling price.
    """
    product_id: Optional[str] = Field(None, description="Selected product; required")
    sku: str = ""
    product_name: str = ""
    selling_price: Decimal = Field(Decimal("0"), ge=0, le=MAX_AMOUNT)
    buying_price: Decimal = Field(Decimal("0"), ge=0, le=MAX_AMOUNT)
    quantity: int = 1
    unit_price: Optional[Decimal] = Field(None, le=MAX_AMOUNT)
    discount_percentage: Decimal = Decimal("0")


class SaleRequest(BaseModel):
    """A sale to preview or submit."""
    store_id: Optional[str] = None
    client_id: Optional[str] = None
    sale_type: SaleType = SaleType.CASH
    payment_method: PaymentMethod = PaymentMethod.CASH
    amount_paid: Optional[Decimal] = Field(None, le=MAX_AMOUNT, description="Amount paid now (partial sales only)")
    payment_term_days: Optional[int] = Field(
        DEFAULT_PAYMENT_TERM_DAYS,
        description="Days until the balance is due (credit and partial sales)",
    )
    items: List[LineItemInput] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "store_id": "store-1",
                "client_id": "client-9",
                "sale_type": "partial",
                "payment_method": "mobile_money",
                "amount_paid": "20000",
                "payment_term_days": 30,
                "items": [
                    {
                        "product_id": "prod-1",
                        "sku": "RICE-25",
                        "product_name": "Rice 25kg",
                        "selling_price": "10000",
                        "buying_price": "8000",
                        "quantity": 3,
                        "discount_percentage": "10"
                    }
                ]
            }
        }


class LineItemResponse(BaseModel):
    """Computed line item."""
    product_id: str
    product_name: str
    sku: str
    unit_price: Decimal
    quantity: int
    discount_percentage: Decimal
    subtotal: Decimal
    discount_amount: Decimal
    total: Decimal


class SalePreviewResponse(BaseModel):
    """Invoice totals and payment plan for a sale that has not been submitted."""
    items: List[LineItemResponse]
    subtotal: Decimal
    total_discount: Decimal
    total_amount: Decimal
    sale_type: SaleType
    amount_paid: Decimal
    balance_due: Decimal
    payment_term_days: Optional[int] = None
    payment_term_description: Optional[str] = None
    due_date: Optional[date] = None
    ready_to_submit: bool
    blocking_error: Optional[str] = None
    blocking_error_kind: Optional[str] = None


class SaleCreatedResponse(BaseModel):
    """Response after the inventory service accepted a sale."""
    invoice_number: str
    sale_type: SaleType
    total_amount: Decimal
    amount_paid: Decimal
    balance_due: Decimal
    due_date: Optional[date] = None
    message: str

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_number": "INV-2025-000123",
                "sale_type": "partial",
                "total_amount": "37000.00",
                "amount_paid": "20000.00",
                "balance_due": "17000.00",
                "due_date": "2025-02-01",
                "message": "Sale INV-2025-000123 created successfully. Payment due in 30 days."
            }
        }


# ============================================================================
# Debt Models
# ============================================================================

class DebtPaymentRequestModel(BaseModel):
    """Payment against an outstanding debt."""
    balance_due: Decimal = Field(..., ge=0, le=MAX_AMOUNT, description="Balance currently shown for the debt")
    amount_paid: Optional[Decimal] = Field(None, le=MAX_AMOUNT)
    payment_method: PaymentMethod = PaymentMethod.CASH
    reference: Optional[str] = None
    notes: Optional[str] = None


class DebtPaymentResponse(BaseModel):
    success: bool
    transaction_id: str
    amount_paid: Decimal
    message: str


class DebtResponse(BaseModel):
    debt_id: str
    debt_number: Optional[str] = None
    invoice_number: Optional[str] = None
    client_name: Optional[str] = None
    total_amount: Decimal
    amount_paid: Decimal
    balance_due: Decimal
    due_date: Optional[date] = None
    debt_status: Optional[str] = None


# ============================================================================
# Error Models
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error body (returned under `detail`)."""
    error: str
    kind: Optional[str] = None
