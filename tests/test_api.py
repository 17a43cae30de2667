"""Tests for the FastAPI service, with the remote admin API mocked."""

import httpx
import pytest
from fastapi import Depends
from fastapi.testclient import TestClient

from admin_api.api.deps import get_admin_client, get_session
from admin_api.core.session import ApiSession
from admin_api.main import app
from admin_api.services.admin_client import AdminApiClient

NOW_PARAM = {"now": "2026-10-19T12:00:00Z"}


@pytest.fixture
def remote(sample_orders, sample_products, sample_brands):
    """Routes of the fake remote admin API; tests may replace entries."""
    return {
        "/api/orders": lambda request: httpx.Response(200, json={
            "data": sample_orders, "pagination": {"page": 1, "pages": 1},
        }),
        "/api/products": lambda request: httpx.Response(200, json={
            "data": sample_products, "pagination": {"page": 1, "pages": 1},
        }),
        "/api/brands": lambda request: httpx.Response(200, json=sample_brands),
        "/api/dashboard/sales": lambda request: httpx.Response(200, json={"period": "30d"}),
    }


@pytest.fixture
def requests_seen() -> list:
    return []


@pytest.fixture
def client(remote, requests_seen):
    def handler(request: httpx.Request) -> httpx.Response:
        requests_seen.append(request)
        return remote[request.url.path](request)

    def override_client(session: ApiSession = Depends(get_session)) -> AdminApiClient:
        return AdminApiClient(session, transport=httpx.MockTransport(handler))

    app.dependency_overrides[get_admin_client] = override_client
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health_and_root(client):
    assert client.get("/health").json()["status"] == "healthy"
    assert client.get("/").json()["docs"] == "/docs"


def test_process_time_header(client):
    assert "X-Process-Time" in client.get("/health").headers


def test_earnings(client):
    response = client.get("/api/v1/earnings", params=NOW_PARAM)

    assert response.status_code == 200
    body = response.json()
    assert body["total_commissions"] == pytest.approx(35.0)
    assert [row["admin"]["name"] for row in body["top_selling_admins"]] == ["Ana", "Bruno"]
    assert body["monthly_trend"][-1]["month"] == "oct 26"


def test_earnings_filter_params(client):
    response = client.get("/api/v1/earnings", params={**NOW_PARAM, "payment_status": "PENDING"})

    assert response.json()["total_processed_orders"] == 0


def test_order_overview(client):
    body = client.get("/api/v1/orders/overview", params=NOW_PARAM).json()

    assert body["stats"]["total"] == 3
    assert body["stats"]["today_orders"] == 3
    assert body["stats"]["week_growth"] == 100.0
    assert body["top_sellers"][0]["total_earnings"] == pytest.approx(270.0)


def test_commission_orders(client):
    body = client.get("/api/v1/orders/commissions").json()

    assert body["count"] == 3
    first = body["orders"][0]
    assert first["order_total"] == 100.0
    assert first["commission"] == pytest.approx(10.0)
    assert first["seller_payment"] == pytest.approx(90.0)
    assert first["seller"]["name"] == "Ana"


def test_order_search(client):
    body = client.get("/api/v1/orders/search", params={"q": "lucia@"}).json()

    assert body["count"] == 2


def test_low_stock(client):
    body = client.get("/api/v1/inventory/low-stock").json()

    assert body["threshold"] == 10
    assert [p["urgency_level"] for p in body["products"]] == ["critical", "critical", "warning", "low"]


def test_low_stock_custom_threshold(client):
    body = client.get("/api/v1/inventory/low-stock", params={"threshold": 4}).json()

    assert body["total_low_stock"] == 2


def test_inventory_summary(client):
    body = client.get("/api/v1/inventory/summary").json()

    assert body["total_products"] == 5
    assert body["out_of_stock_count"] == 1


def test_brands_sorted_by_value(client):
    body = client.get("/api/v1/inventory/brands", params={"sort_by": "value"}).json()

    assert [b["name"] for b in body["brands"]] == ["Acme", "Logi", "Zeta"]


def test_brands_rejects_unknown_sort(client):
    assert client.get("/api/v1/inventory/brands", params={"sort_by": "rating"}).status_code == 422


def test_product_filter(client):
    body = client.get("/api/v1/inventory/products", params={"stock_filter": "outofstock"}).json()

    assert body["count"] == 1
    assert body["products"][0]["name"] == "Mouse"


def test_product_filter_category_all(client):
    body = client.get("/api/v1/inventory/products", params={"category": "all"}).json()

    assert body["count"] == 5


def test_no_shutdown_handlers():
    assert app.router.on_shutdown == []


def test_dashboard(client):
    response = client.get("/api/v1/dashboard", params=NOW_PARAM)

    assert response.status_code == 200
    body = response.json()
    assert body["meta"]["total_orders"] == 3
    assert body["meta"]["total_products"] == 5
    assert body["meta"]["generated_at"].startswith("2026-10-19T12:00:00")
    # no dailySales in the remote payload: derived from orders
    assert body["sales"]["summary"]["total_sales"] == 3


def test_dashboard_uses_remote_daily_sales(client, remote):
    remote["/api/dashboard/sales"] = lambda request: httpx.Response(200, json={
        "dailySales": [{"date": "2026-10-19", "orders_count": 8, "total_revenue": 800}],
    })
    body = client.get("/api/v1/dashboard", params=NOW_PARAM).json()

    assert body["sales"]["summary"]["total_sales"] == 8


def test_remote_401_maps_to_401(client, remote):
    remote["/api/orders"] = lambda request: httpx.Response(401, json={"message": "Sesión expirada"})
    response = client.get("/api/v1/earnings")

    assert response.status_code == 401
    assert response.json()["detail"] == "Sesión expirada"


def test_remote_failure_maps_to_502(client, remote):
    remote["/api/products"] = lambda request: httpx.Response(500, text="db down")
    response = client.get("/api/v1/inventory/summary")

    assert response.status_code == 502
    assert response.json()["detail"] == "db down"


def test_unexpected_error_returns_500_json():
    def broken_client():
        raise RuntimeError("kaboom")

    app.dependency_overrides[get_admin_client] = broken_client
    try:
        client = TestClient(app, raise_server_exceptions=False)
        response = client.get("/api/v1/earnings")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {
        "error": "Internal server error",
        "message": "An unexpected error occurred",
    }


def test_bearer_token_is_forwarded(client, requests_seen):
    client.get("/api/v1/inventory/summary", headers={"Authorization": "Bearer abc"})
    client.get("/api/v1/inventory/summary")

    assert requests_seen[0].headers["Authorization"] == "Bearer abc"
    assert "Authorization" not in requests_seen[1].headers
