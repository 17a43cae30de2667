"""Tests for the MetricsEngine facade."""

import pytest

from metrics_engine import MetricsEngine


@pytest.fixture
def engine() -> MetricsEngine:
    return MetricsEngine()


def test_dashboard_snapshot(engine, sample_orders, sample_products, sample_brands, now):
    snapshot = engine.dashboard(sample_orders, sample_products, now=now, brands=sample_brands)

    assert set(snapshot) == {"meta", "earnings", "orders", "inventory", "sales"}
    assert snapshot["meta"] == {
        "generated_at": "2026-10-19T12:00:00+00:00",
        "timezone": "UTC",
        "total_orders": 3,
        "total_products": 5,
    }
    assert snapshot["earnings"]["total_commissions"] == pytest.approx(35.0)
    assert snapshot["orders"]["stats"]["total"] == 3
    assert snapshot["orders"]["top_customers"][0]["email"] == "mario@mail.test"
    assert snapshot["inventory"]["low_stock"]["total_low_stock"] == 4
    assert snapshot["inventory"]["brands"]["total_brands"] == 3
    assert snapshot["sales"]["summary"]["total_sales"] == 3


def test_dashboard_prefers_remote_daily_sales(engine, sample_orders, now):
    daily = [{"date": "2026-10-19", "orders_count": 9, "total_revenue": 900.0}]
    snapshot = engine.dashboard(sample_orders, [], now=now, daily_sales=daily)

    assert snapshot["sales"]["summary"]["total_sales"] == 9
    assert snapshot["sales"]["weekly_revenue"][-1]["revenue"] == pytest.approx(900.0)


def test_dashboard_on_empty_input(engine, now):
    snapshot = engine.dashboard(None, None, now=now)

    assert snapshot["meta"]["total_orders"] == 0
    assert snapshot["earnings"]["total_commissions"] == 0.0
    assert snapshot["orders"]["stats"]["avg_order_value"] == 0.0
    assert snapshot["inventory"]["summary"]["total_value"] == 0.0
    assert snapshot["sales"]["recent_days"] == []


def test_configured_rate_and_share(sample_orders, now):
    engine = MetricsEngine(commission_rate=0.2, seller_earnings_share=0.5, top_n=1)

    earnings = engine.earnings(sample_orders, now=now)
    overview = engine.order_overview(sample_orders, now=now)

    assert earnings["total_commissions"] == pytest.approx(70.0)
    assert len(earnings["top_selling_admins"]) == 1
    assert overview["top_sellers"] == [
        {"name": "Ana", "email": "ana@shop.test", "sales_count": 2, "total_earnings": 150.0},
    ]


def test_earnings_filters_can_be_disabled(make_order, seller_c, now):
    orders = [make_order(total=100, seller=seller_c, payment_status="PENDING")]
    engine = MetricsEngine()

    assert engine.earnings(orders, now=now)["total_processed_orders"] == 0
    relaxed = engine.earnings(orders, now=now, payment_status="all", seller_role=None)
    assert relaxed["total_processed_orders"] == 1


def test_timezone_is_applied(make_order, now):
    order = make_order(created_at=now.replace(hour=3))

    assert MetricsEngine().order_overview([order], now=now)["stats"]["today_orders"] == 1
    assert MetricsEngine(timezone="America/Bogota").order_overview([order], now=now)["stats"]["today_orders"] == 0


def test_commission_orders(engine, sample_orders):
    assert len(engine.commission_orders(sample_orders)) == 3


def test_inventory_brand_sort(engine, sample_products, sample_brands):
    inventory = engine.inventory(sample_products, brands=sample_brands, brand_sort="value")

    assert inventory["brands"]["brands"][0]["name"] == "Acme"
    assert inventory["summary"]["total_products"] == 5
