from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from rentdesk.main import app
from rentdesk.services.mock_store import reset_mock_store


USER = {"id": "u-42", "name": "Jamie Rivera", "email": "jamie@example.com"}


@pytest.fixture()
def client() -> TestClient:
    reset_mock_store()
    yield TestClient(app)
    reset_mock_store()


def _create_product(client: TestClient, **overrides) -> dict:
    payload = {
        "name": "Mountain Bike - Trek Trail",
        "price_per_day": 900.0,
        "is_rentable": True,
        "stock": 2,
        "category": "Sports Equipment",
        "brand": "Trek",
    }
    payload.update(overrides)
    response = client.post("/tools/products/create", json=payload)
    assert response.status_code == 201
    return response.json()


def test_health_and_info(client: TestClient) -> None:
    assert client.get("/health").json() == {"ok": True}
    info = client.get("/info").json()
    assert info["status"] == "ok"
    assert info["mock_data"] is True


def test_draft_flow_over_http(client: TestClient) -> None:
    opened = client.post("/tools/drafts/open", json={"user": USER})
    assert opened.status_code == 200
    draft = opened.json()
    draft_id = draft["draft_id"]
    assert draft["customer"] == "Jamie Rivera"
    assert draft["items"][0]["sub_total"] == 1000.0
    assert draft["totals"] == pytest.approx({"untaxed_total": 1000.0, "tax": 180.0, "total": 1180.0})

    updated = client.post(
        f"/tools/drafts/{draft_id}/items/0", json={"field": "quantity", "value": "2"}
    ).json()
    assert updated["items"][0]["sub_total"] == 400.0
    assert updated["totals"]["total"] == pytest.approx(472.0)

    added = client.post(f"/tools/drafts/{draft_id}/items").json()
    assert [item["product"] for item in added["items"]] == ["Product 1", "Product 2"]

    removed = client.delete(f"/tools/drafts/{draft_id}/items/1").json()
    assert len(removed["items"]) == 1

    client.post(f"/tools/drafts/{draft_id}/field", json={"field": "delivery_address", "value": "Dock 4"})
    client.post(f"/tools/drafts/{draft_id}/duration", json={"part": "hours", "value": 6})

    totals = client.get(f"/tools/drafts/{draft_id}/totals").json()
    assert totals["untaxed_total"] == 400.0

    refused = client.post(f"/tools/drafts/{draft_id}/submit")
    assert refused.status_code == 400
    assert refused.json()["detail"] == "Please accept the terms and conditions"
    assert client.get(f"/tools/drafts/{draft_id}").status_code == 200

    client.post(f"/tools/drafts/{draft_id}/terms", json={"accepted": True})
    submitted = client.post(f"/tools/drafts/{draft_id}/submit")
    assert submitted.status_code == 200
    order = submitted.json()
    assert order["delivery_address"] == "Dock 4"
    assert order["rental_duration"] == "0 months, 0 days, 6 hours"
    assert order["total"] == pytest.approx(472.0)

    assert client.get(f"/tools/drafts/{draft_id}").status_code == 404
    listed = client.post("/tools/orders/list", json={"customer": "Jamie Rivera"}).json()
    assert listed["total"] == 1
    assert client.get(f"/tools/orders/{order['order_id']}").json()["order_id"] == order["order_id"]


def test_draft_errors_map_to_http_status(client: TestClient) -> None:
    assert client.get("/tools/drafts/DRF-99999").status_code == 404

    draft_id = client.post("/tools/drafts/open", json={}).json()["draft_id"]

    out_of_range = client.post(
        f"/tools/drafts/{draft_id}/items/5", json={"field": "quantity", "value": 1}
    )
    assert out_of_range.status_code == 404

    bad_field = client.post(f"/tools/drafts/{draft_id}/field", json={"field": "items", "value": "x"})
    assert bad_field.status_code == 422

    discarded = client.delete(f"/tools/drafts/{draft_id}")
    assert discarded.json() == {"status": "discarded", "draft_id": draft_id}
    assert client.delete(f"/tools/drafts/{draft_id}").status_code == 404


def test_product_routes(client: TestClient) -> None:
    bike = _create_product(client)
    _create_product(client, name="Acoustic Guitar - Martin Concert", category="Musical Instruments", brand="Martin")

    listed = client.post("/tools/products/list", json={"search": "guitar"}).json()
    assert listed["total"] == 1
    assert listed["items"][0]["brand"] == "Martin"

    assert client.get("/tools/products/categories").json() == {
        "categories": ["Musical Instruments", "Sports Equipment"]
    }
    assert client.get("/tools/products/brands").json() == {"brands": ["Martin", "Trek"]}

    updated = client.put(f"/tools/products/{bike['id']}", json={"price_per_day": 950.0})
    assert updated.json()["price_per_day"] == 950.0

    nulled = client.put(f"/tools/products/{bike['id']}", json={"name": None})
    assert nulled.status_code == 400
    assert "name" in nulled.json()["detail"]
    assert client.post("/tools/products/list", json={}).json()["total"] == 2
    assert client.get(f"/tools/products/{bike['id']}").json()["name"] == "Mountain Bike - Trek Trail"

    assert client.delete(f"/tools/products/{bike['id']}").json() == {"success": True}
    assert client.get(f"/tools/products/{bike['id']}").status_code == 404
    assert client.post("/tools/products/create", json={"name": "", "price_per_day": 1}).status_code == 422


def test_rental_routes(client: TestClient) -> None:
    bike = _create_product(client)
    request = {
        "user": USER,
        "product_id": bike["id"],
        "start_date": "2025-09-06",
        "end_date": "2025-09-10",
    }

    created = client.post("/tools/rentals/create", json=request)
    assert created.status_code == 201
    rental = created.json()
    assert rental["total_days"] == 4
    assert rental["total_price"] == 3600.0

    duplicate = client.post("/tools/rentals/create", json=request)
    assert duplicate.status_code == 400
    assert "already have an active rental" in duplicate.json()["detail"]

    active = client.get(f"/tools/rentals/active/{USER['id']}").json()
    assert active["rental"]["id"] == rental["id"]

    bad_status = client.put(f"/tools/rentals/{rental['id']}/status", json={"status": "LOST"})
    assert bad_status.status_code == 400

    picked = client.put(f"/tools/rentals/{rental['id']}/status", json={"status": "PICKED_UP"})
    assert picked.json()["status"] == "PICKED_UP"

    overdue = client.post("/tools/rentals/check-overdue").json()
    assert overdue == {"count": 1}

    history = client.get(f"/tools/rentals/history/{USER['id']}", params={"limit": 5}).json()
    assert history["total"] == 1
    assert history["items"][0]["status"] == "OVERDUE"
    assert client.get("/tools/rentals/RNT-99999").status_code == 404


def test_report_and_payment_routes(client: TestClient) -> None:
    _create_product(client)

    stats = client.get("/tools/reports/dashboard-stats").json()
    assert stats["total_products"] == 1
    assert stats["total_revenue"] == 0

    trends = client.get("/tools/reports/revenue-trends", params={"days": 3}).json()
    assert len(trends) == 3

    analytics = client.get("/tools/reports/analytics").json()
    assert "report_generated_at" in analytics

    payment = client.post("/tools/payments/create-order", json={"amount": 472})
    assert payment.status_code == 200
    assert payment.json()["amount"] == 47200

    missing = client.post("/tools/payments/create-order", json={})
    assert missing.status_code == 400
