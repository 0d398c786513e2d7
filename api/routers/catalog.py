"""
Catalog API Endpoints.

Pick-lists for building a sale. Lookup failures return empty lists.
"""

from typing import List, Optional

import httpx
from fastapi import APIRouter, Depends

from api.dependencies import get_api_transport, get_bearer_token, require_token
from api.models import ClientResponse, ProductResponse
from repositories.client import create_api_client
from services.catalog_service import load_clients, load_products

router = APIRouter()


@router.get(
    "/stores/{store_id}/products",
    response_model=List[ProductResponse],
    summary="List Store Products",
)
def get_store_products(
    store_id: str,
    token: Optional[str] = Depends(get_bearer_token),
    transport: Optional[httpx.BaseTransport] = Depends(get_api_transport),
):
    """Products a store sells, with selling and buying prices."""
    with create_api_client(require_token(token), transport=transport) as http:
        products = load_products(http, store_id)

    return [
        ProductResponse(
            product_id=p.product_id,
            sku=p.sku,
            product_name=p.product_name,
            selling_price=p.selling_price,
            buying_price=p.buying_price,
        )
        for p in products
    ]


@router.get(
    "/clients",
    response_model=List[ClientResponse],
    summary="List Clients",
)
def get_clients(
    token: Optional[str] = Depends(get_bearer_token),
    transport: Optional[httpx.BaseTransport] = Depends(get_api_transport),
):
    """Clients with a resolved display name ("Unknown Client" when nameless)."""
    with create_api_client(require_token(token), transport=transport) as http:
        clients = load_clients(http)

    return [ClientResponse(client_id=c.client_id, display_name=c.display_name) for c in clients]
