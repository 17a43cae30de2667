"""
Pytest fixtures shared by the engine and API tests.

Timestamps are pinned around NOW (Monday 2026-10-19 12:00 UTC) so every
window computation is reproducible.
"""

from datetime import datetime, timedelta, timezone

import pytest

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def iso(dt: datetime) -> str:
    return dt.isoformat().replace("+00:00", "Z")


# =============================================================================
# FACTORIES
# =============================================================================

@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_order():
    """Build a raw order dict in the remote API's camelCase shape."""
    counter = {"id": 0}

    def _make(
        total=100,
        seller=None,
        customer=None,
        payment_status="PAGADO",
        payment_method="TRANSFERENCIA_INTERNA",
        status="COMPLETADO",
        created_at=None,
        updated_at=None,
        **extra,
    ) -> dict:
        counter["id"] += 1
        order = {
            "id": extra.pop("id", counter["id"]),
            "total": total,
            "status": status,
            "paymentStatus": payment_status,
            "paymentMethod": payment_method,
            "seller": seller,
            "customer": customer,
            "items": [],
            "createdAt": iso(created_at or NOW - timedelta(hours=1)),
        }
        if updated_at is not None:
            order["updatedAt"] = iso(updated_at)
        order.update(extra)
        return order

    return _make


@pytest.fixture
def admin_a() -> dict:
    return {"id": 1, "name": "Ana", "email": "ana@shop.test", "role": "admin"}


@pytest.fixture
def admin_b() -> dict:
    return {"id": 2, "name": "Bruno", "email": "bruno@shop.test", "role": "admin"}


@pytest.fixture
def seller_c() -> dict:
    return {"id": 3, "name": "Carla", "email": "carla@shop.test", "role": "seller"}


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================

@pytest.fixture
def sample_orders(make_order, admin_a, admin_b) -> list:
    """100 (A), 200 (A), 50 (B): all paid by internal transfer."""
    return [
        make_order(total=100, seller=admin_a,
                   customer={"name": "Lucía", "email": "lucia@mail.test"}),
        make_order(total=200, seller=admin_a,
                   customer={"name": "Mario", "email": "mario@mail.test"}),
        make_order(total=50, seller=admin_b,
                   customer={"name": "Lucía", "email": "lucia@mail.test"}),
    ]


@pytest.fixture
def sample_products() -> list:
    return [
        {"id": 1, "name": "Mouse", "sku": "M-1", "price": 10, "stock": 0,
         "category": {"name": "Periféricos"}, "brand": {"id": 10, "name": "Logi"}},
        {"id": 2, "name": "Teclado", "sku": "K-1", "price": "25.50", "stock": 3,
         "category": {"name": "Periféricos"}, "brand": {"id": 10, "name": "Logi"}},
        {"id": 3, "name": "Monitor", "sku": "MN-1", "price": 200, "stock": 4,
         "category": {"name": "Pantallas"}, "brand": {"id": 20, "name": "Acme"}},
        {"id": 4, "name": "Cable", "sku": "C-1", "price": 5, "stock": 8,
         "category": None, "brand": "Genérica"},
        {"id": 5, "name": "Laptop", "sku": "L-1", "price": 1000, "stock": 12,
         "category": {"name": "Computadores"}, "brand": {"id": 20, "name": "Acme"}},
    ]


@pytest.fixture
def sample_brands() -> list:
    return [
        {"id": 10, "name": "Logi", "description": "Periféricos"},
        {"id": 20, "name": "Acme"},
        {"id": 30, "name": "Zeta"},
    ]
