"""
Pytest configuration and shared fixtures.

Adds the project root to the Python path so tests can import domain,
repositories, services and api, and provides a fake inventory service built on
httpx.MockTransport so no test touches the network.
"""

import json
import sys
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

import httpx
import pytest

# Add the project root to the Python path
# so tests can import domain, repositories, etc.
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from domain.catalog import Product  # noqa: E402

BASE_URL = "https://inventory.test"


class FakeInventoryApi:
    """Minimal stand-in for the inventory service. Unrouted requests get a 404."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Any] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, status: int = 200, json_body: Any = None, exc: Optional[Exception] = None):
        self.routes[(method.upper(), path)] = (status, json_body, exc)
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": "not found"})
        status, body, exc = route
        if exc is not None:
            raise exc
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def last_json(self, method: str, path: str) -> Any:
        return json.loads(self.calls(method, path)[-1].content)


@pytest.fixture
def fake_api() -> FakeInventoryApi:
    return FakeInventoryApi()


@pytest.fixture
def api_env(monkeypatch: pytest.MonkeyPatch) -> str:
    monkeypatch.setenv("INVENTORY_API_BASE_URL", BASE_URL)
    monkeypatch.delenv("INVENTORY_API_TIMEOUT", raising=False)
    return BASE_URL


@pytest.fixture
def rice() -> Product:
    return Product(
        product_id="prod-rice",
        sku="RICE-25",
        product_name="Rice 25kg",
        selling_price=Decimal("10000"),
        buying_price=Decimal("8000"),
    )


@pytest.fixture
def oil() -> Product:
    return Product(
        product_id="prod-oil",
        sku="OIL-5",
        product_name="Cooking Oil 5L",
        selling_price=Decimal("5000"),
        buying_price=Decimal("4200"),
    )
