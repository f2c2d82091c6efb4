from __future__ import annotations

import asyncio

from fastapi.testclient import TestClient

from rentdesk.main import app
from rentdesk.schemas.order import DraftOpenRequest
from rentdesk.schemas.product import ProductCreateRequest
from rentdesk.schemas.user import UserSummary
from rentdesk.services.mock_store import get_mock_store, reset_mock_store
from rentdesk.services.order_draft import RentalOrderDraft


def test_mock_data_view_renders_empty_store() -> None:
    reset_mock_store()
    client = TestClient(app)

    response = client.get("/mock-data")
    assert response.status_code == 200
    body = response.text

    assert "Mock Data Overview" in body
    assert "<h2>Products</h2>" in body
    assert "<h2>Drafts</h2>" in body
    assert "No records found." in body  # empty sections show message


def test_mock_data_view_includes_created_records() -> None:
    reset_mock_store()
    store = get_mock_store()

    product = asyncio.run(
        store.products.create(
            ProductCreateRequest(
                name="Kayak Single - Perception Touring",
                price_per_day=650.0,
                is_rentable=True,
                stock=3,
                images=["data:image/svg+xml;base64,AAAA"],
            )
        )
    )
    draft = RentalOrderDraft.for_user(UserSummary(id="u-7", name="Priya Nair"))
    draft_id = store.drafts.add(draft)

    client = TestClient(app)
    response = client.get("/mock-data")
    assert response.status_code == 200

    body = response.text
    assert product.id in body
    assert "Kayak Single - Perception Touring" in body
    assert "base64,AAAA" not in body  # images are summarised as a count
    assert draft_id in body
    assert "Priya Nair" in body


def test_mock_data_view_displays_orders() -> None:
    reset_mock_store()
    client = TestClient(app)

    draft_id = client.post(
        "/tools/drafts/open", json=DraftOpenRequest(user=UserSummary(id="u-9", name="Jane Client")).model_dump()
    ).json()["draft_id"]
    client.post(f"/tools/drafts/{draft_id}/terms", json={"accepted": True})
    order = client.post(f"/tools/drafts/{draft_id}/submit").json()

    response = client.get("/mock-data")
    assert response.status_code == 200

    body = response.text
    assert order["order_id"] in body
    assert "Jane Client" in body
    assert f"{order['total']}" in body


def test_delete_mock_data_record_removes_entry() -> None:
    reset_mock_store()
    store = get_mock_store()

    product = asyncio.run(
        store.products.create(ProductCreateRequest(name="Delete Me", price_per_day=10.0))
    )

    client = TestClient(app)
    delete_response = client.delete(f"/mock-data/products/{product.id}")

    assert delete_response.status_code == 200
    payload = delete_response.json()
    assert payload["status"] == "deleted"
    assert payload["collection"] == "products"
    assert payload["record_id"] == product.id

    remaining = asyncio.run(store.products.get(product.id))
    assert remaining is None

    missing = client.delete(f"/mock-data/product/{product.id}")
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Record not found"


def test_delete_mock_data_unknown_collection_returns_404() -> None:
    reset_mock_store()
    client = TestClient(app)

    response = client.delete("/mock-data/unknown/123")

    assert response.status_code == 404
    assert response.json()["detail"] == "Unsupported mock data collection"
