#!/usr/bin/env python3
"""
Sale Builder Script

Builds a sale from a JSON order file against a store's live catalog, prints
the invoice and payment plan, and optionally submits it.

Order file format:
    {
      "client_id": "client-9",
      "sale_type": "partial",
      "payment_method": "cash",
      "amount_paid": "20000",
      "payment_term_days": "30",
      "items": [
        {"product_id": "prod-1", "quantity": 3, "discount_percentage": "10"}
      ]
    }

Usage:
    python create_sale.py --store store-1 --order order.json
    python create_sale.py --store store-1 --order order.json --submit
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from domain.errors import SaleValidationError
from domain.payment_plan import PaymentMethod, SaleType
from services.sale_session import SaleSession


def apply_order(session: SaleSession, order: dict) -> None:
    """Fill a loaded session from an order dict. Raises SaleValidationError on a bad item."""

    for entry in order.get("items", []):
        session.select_product(str(entry.get("product_id", "")))
        session.update_item_input(
            quantity=str(entry.get("quantity", "1")),
            discount_percentage=str(entry.get("discount_percentage", "0")),
            unit_price=str(entry["unit_price"]) if entry.get("unit_price") is not None else None,
        )
        session.add_item()

    session.set_sale_type(SaleType(order.get("sale_type", "cash")))
    session.set_payment_method(PaymentMethod(order.get("payment_method", "cash")))
    session.set_client(order.get("client_id"))
    if order.get("amount_paid") is not None:
        session.set_amount_paid(str(order["amount_paid"]))
    if order.get("payment_term_days") is not None:
        session.set_payment_term(str(order["payment_term_days"]))


def print_summary(session: SaleSession) -> None:
    print("\nLine items:")
    for index, item in enumerate(session.items, start=1):
        print(
            f"  {index}. {item.product_name} ({item.sku}) "
            f"{item.quantity} x {item.unit_price} "
            f"- {item.discount_percentage}% = {item.total}"
        )

    invoice = session.invoice
    plan = session.payment_plan
    print(f"\nSubtotal:      {invoice.subtotal_amount}")
    print(f"Discount:      {invoice.total_discount}")
    print(f"Total:         {invoice.total_amount}")
    print(f"Sale type:     {plan.sale_type.value}")
    print(f"Amount paid:   {plan.amount_paid}")
    print(f"Balance due:   {plan.balance_due}")
    if plan.sale_type.requires_payment_term:
        print(f"Payment term:  {session.payment_term_description}")
        print(f"Due date:      {session.due_date}")


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Build (and optionally submit) a sale from a JSON order file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--store", required=True, help="Store ID the sale belongs to")
    parser.add_argument("--order", required=True, type=Path, help="Path to the JSON order file")
    parser.add_argument(
        "--token",
        default=os.getenv("INVENTORY_API_TOKEN"),
        help="Bearer token (default: INVENTORY_API_TOKEN)",
    )
    parser.add_argument("--submit", action="store_true", help="Submit the sale after previewing")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    order = json.loads(args.order.read_text(encoding="utf-8"))

    session = SaleSession(args.store, args.token)
    session.on_sale_created(lambda receipt: print(f"\n[OK] Invoice {receipt.invoice_number} created"))
    session.load_catalog()
    print(f"Loaded {len(session.products)} products and {len(session.clients)} clients")

    try:
        apply_order(session, order)
    except (SaleValidationError, ValueError) as e:
        print(f"\n[ERROR] {e}")
        return 1

    print_summary(session)

    if not args.submit:
        return 0

    result = session.submit()
    if not result.success:
        print(f"\n[ERROR] {result.error}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
