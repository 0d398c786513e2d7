"""
Tests for the FastAPI application.

Outbound calls go to the FakeInventoryApi through a dependency override.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_api_transport
from api.main import app

AUTH = {"Authorization": "Bearer tok-123"}

ITEMS = [
    {
        "product_id": "prod-rice",
        "sku": "RICE-25",
        "product_name": "Rice 25kg",
        "selling_price": "10000",
        "buying_price": "8000",
        "quantity": 3,
        "discount_percentage": "10",
    },
    {
        "product_id": "prod-oil",
        "sku": "OIL-5",
        "product_name": "Cooking Oil 5L",
        "selling_price": "5000",
        "buying_price": "4200",
        "quantity": 2,
    },
]


@pytest.fixture
def client(fake_api, api_env):
    app.dependency_overrides[get_api_transport] = lambda: fake_api.transport
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_health(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_preview_partial_sale(client, fake_api) -> None:
    response = client.post(
        "/api/v1/sales/preview",
        json={
            "store_id": "store-1",
            "client_id": "client-9",
            "sale_type": "partial",
            "amount_paid": "20000",
            "payment_term_days": 30,
            "items": ITEMS,
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert float(body["total_amount"]) == 37000
    assert float(body["total_discount"]) == 3000
    assert float(body["balance_due"]) == 17000
    assert body["payment_term_description"] == "Net 30"
    assert body["due_date"] is not None
    assert body["ready_to_submit"] is True
    assert fake_api.requests == []


def test_preview_reports_blocking_error(client) -> None:
    response = client.post(
        "/api/v1/sales/preview",
        json={"store_id": "store-1", "sale_type": "partial", "amount_paid": "37000", "client_id": "c", "items": ITEMS},
    )

    body = response.json()
    assert body["ready_to_submit"] is False
    assert body["blocking_error_kind"] == "InvalidPartialAmount"


def test_preview_rejects_bad_item(client) -> None:
    bad = [dict(ITEMS[0], quantity=0)]

    response = client.post("/api/v1/sales/preview", json={"items": bad})

    assert response.status_code == 422
    assert response.json()["detail"]["kind"] == "InvalidQuantity"


@pytest.mark.parametrize("field", ["selling_price", "unit_price"])
def test_preview_rejects_oversized_price(client, field) -> None:
    oversized = [dict(ITEMS[0], **{field: "1e30"})]

    response = client.post("/api/v1/sales/preview", json={"items": oversized})

    assert response.status_code == 422


def test_preview_oversized_quantity_is_a_validation_error(client) -> None:
    response = client.post("/api/v1/sales/preview", json={"items": [dict(ITEMS[0], quantity=10**20)]})

    assert response.status_code == 422
    assert response.json()["detail"]["kind"] == "InvalidQuantity"


def test_preview_item_without_product(client) -> None:
    response = client.post("/api/v1/sales/preview", json={"items": [{"quantity": 1}]})

    assert response.status_code == 422
    assert response.json()["detail"]["kind"] == "MissingProduct"


def test_create_cash_sale(client, fake_api) -> None:
    fake_api.add("POST", "/sales", status=201, json_body={"success": True, "data": {"invoice_number": "INV-9"}})

    response = client.post("/api/v1/sales", json={"store_id": "store-1", "items": ITEMS}, headers=AUTH)

    assert response.status_code == 201
    body = response.json()
    assert body["invoice_number"] == "INV-9"
    assert float(body["balance_due"]) == 0
    assert body["due_date"] is None
    sent = fake_api.last_json("POST", "/sales")
    assert sent["sale"]["total_amount"] == 37000.0
    assert fake_api.calls("POST", "/sales")[0].headers["Authorization"] == "Bearer tok-123"


def test_create_credit_sale_message_mentions_term(client, fake_api) -> None:
    fake_api.add("POST", "/sales", json_body={"data": {"invoice_number": "INV-10"}})

    response = client.post(
        "/api/v1/sales",
        json={"store_id": "store-1", "client_id": "client-9", "sale_type": "credit", "payment_term_days": 14, "items": ITEMS},
        headers=AUTH,
    )

    assert response.status_code == 201
    assert "Payment due in 14 days" in response.json()["message"]


def test_create_sale_without_token(client, fake_api) -> None:
    response = client.post("/api/v1/sales", json={"store_id": "store-1", "items": ITEMS})

    assert response.status_code == 401
    assert response.json()["detail"]["kind"] == "NoToken"
    assert fake_api.requests == []


def test_create_sale_validation_error(client, fake_api) -> None:
    response = client.post("/api/v1/sales", json={"store_id": "store-1", "items": []}, headers=AUTH)

    assert response.status_code == 422
    assert response.json()["detail"]["kind"] == "EmptyInvoice"
    assert fake_api.requests == []


def test_create_sale_upstream_error(client, fake_api) -> None:
    fake_api.add("POST", "/sales", status=400, json_body={"error": "Insufficient stock"})

    response = client.post("/api/v1/sales", json={"store_id": "store-1", "items": ITEMS}, headers=AUTH)

    assert response.status_code == 502
    assert response.json()["detail"]["error"] == "Insufficient stock"


def test_products_lookup(client, fake_api) -> None:
    fake_api.add(
        "GET",
        "/stores/store-1/products",
        json_body={"success": True, "data": [{"id": "p1", "sku": "S", "product_name": "Soap", "selling_price": 1500, "buying_price": 1000}]},
    )

    response = client.get("/api/v1/stores/store-1/products", headers=AUTH)

    assert response.status_code == 200
    assert response.json()[0]["product_id"] == "p1"


def test_products_lookup_degrades_to_empty(client, fake_api) -> None:
    fake_api.add("GET", "/stores/store-1/products", status=500, json_body={"error": "down"})

    response = client.get("/api/v1/stores/store-1/products", headers=AUTH)

    assert response.status_code == 200
    assert response.json() == []


def test_clients_lookup_requires_token(client) -> None:
    response = client.get("/api/v1/clients")

    assert response.status_code == 401


def test_clients_lookup(client, fake_api) -> None:
    fake_api.add("GET", "/clients", json_body={"success": True, "data": [{"id": "c1"}]})

    response = client.get("/api/v1/clients", headers=AUTH)

    assert response.json() == [{"client_id": "c1", "display_name": "Unknown Client"}]


def test_record_debt_payment(client, fake_api) -> None:
    fake_api.add("POST", "/debts/d1/pay", json_body={"success": True, "data": {}})

    response = client.post(
        "/api/v1/debts/d1/payments",
        json={"balance_due": "17000", "amount_paid": "5000", "payment_method": "cash"},
        headers=AUTH,
    )

    assert response.status_code == 201
    assert response.json()["transaction_id"].startswith("TXN-")


def test_record_debt_overpayment(client, fake_api) -> None:
    response = client.post(
        "/api/v1/debts/d1/payments",
        json={"balance_due": "100", "amount_paid": "150"},
        headers=AUTH,
    )

    assert response.status_code == 422
    assert response.json()["detail"]["kind"] == "PaymentExceedsBalance"
    assert fake_api.requests == []


def test_overdue_debts(client, fake_api) -> None:
    fake_api.add(
        "GET",
        "/debts",
        json_body={"data": [{"id": "d1", "total_amount": 10, "amount_paid": 0, "balance_due": 10, "due_date": "2025-01-01"}]},
    )

    response = client.get("/api/v1/debts/overdue?as_of=2025-06-01", headers=AUTH)

    assert [d["debt_id"] for d in response.json()] == ["d1"]
