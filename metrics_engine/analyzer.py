"""
Metrics Engine — The single entry point for back-office analytics.

Orchestrates all metric modules and returns consolidated dictionaries that
any downstream consumer (API, CLI, exporter) can use directly. The engine
holds configuration only; every call works on the collections it is given.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterable

from .config import (
    COMMISSION_RATE,
    DEFAULT_TIMEZONE,
    EARNINGS_SELLER_ROLE,
    INTERNAL_TRANSFER,
    LOW_STOCK_THRESHOLD,
    PAYMENT_PAID,
    SELLER_EARNINGS_SHARE,
    TOP_N,
)
from .core.windows import resolve_now
from .metrics.brands import calculate_brand_metrics
from .metrics.commissions import calculate_commission_metrics, commission_orders
from .metrics.orders import calculate_order_stats
from .metrics.rankings import calculate_top_customers, calculate_top_sellers
from .metrics.sales import (
    daily_sales_from_orders,
    recent_daily_orders,
    summarize_daily_sales,
    weekly_revenue_trend,
)
from .metrics.stock import calculate_inventory_summary, calculate_low_stock
from .schemas import normalize_orders, normalize_products

logger = logging.getLogger(__name__)


class MetricsEngine:
    """
    Turns order / product snapshots into the dashboard's derived views.

    Usage:
        engine = MetricsEngine(timezone="America/Bogota")
        snapshot = engine.dashboard(orders, products, now=datetime.now(timezone.utc))
    """

    def __init__(
        self,
        commission_rate: float = COMMISSION_RATE,
        seller_earnings_share: float = SELLER_EARNINGS_SHARE,
        timezone: str = DEFAULT_TIMEZONE,
        top_n: int = TOP_N,
        low_stock_threshold: int = LOW_STOCK_THRESHOLD,
    ):
        self.commission_rate = commission_rate
        self.seller_earnings_share = seller_earnings_share
        self.timezone = timezone
        self.top_n = top_n
        self.low_stock_threshold = low_stock_threshold

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def earnings(
        self,
        orders: Iterable[Any] | None,
        now: datetime | None = None,
        payment_status: str | None = PAYMENT_PAID,
        payment_method: str | None = INTERNAL_TRANSFER,
        seller_role: str | Iterable[str] | None = EARNINGS_SELLER_ROLE,
    ) -> dict:
        """Earnings screen: commissions over paid internal-transfer admin sales."""
        return calculate_commission_metrics(
            orders,
            now=now,
            rate=self.commission_rate,
            payment_status=payment_status,
            payment_method=payment_method,
            seller_role=seller_role,
            tz=self.timezone,
            top_n=self.top_n,
        )

    def commission_orders(self, orders: Iterable[Any] | None) -> list:
        """Sales screen: orders that carry a platform commission."""
        return commission_orders(orders)

    def order_overview(self, orders: Iterable[Any] | None, now: datetime | None = None) -> dict:
        """
        Orders screen.

        Returns:
            {
              "stats":         { ... },   # from metrics.orders
              "top_customers": [ ... ],   # from metrics.rankings
              "top_sellers":   [ ... ],   # from metrics.rankings
            }
        """
        normalized = normalize_orders(orders)
        return {
            "stats": calculate_order_stats(normalized, now=now, tz=self.timezone),
            "top_customers": calculate_top_customers(normalized, top_n=self.top_n),
            "top_sellers": calculate_top_sellers(
                normalized,
                top_n=self.top_n,
                earnings_share=self.seller_earnings_share,
            ),
        }

    def inventory(
        self,
        products: Iterable[Any] | None,
        brands: Iterable[Any] | None = None,
        brand_sort: str = "name",
    ) -> dict:
        """
        Inventory views.

        Returns:
            {
              "summary":   { ... },   # from metrics.stock
              "low_stock": { ... },   # from metrics.stock
              "brands":    { ... },   # from metrics.brands
            }
        """
        normalized = normalize_products(products)
        return {
            "summary": calculate_inventory_summary(normalized, threshold=self.low_stock_threshold),
            "low_stock": calculate_low_stock(normalized, threshold=self.low_stock_threshold),
            "brands": calculate_brand_metrics(normalized, brands=brands, sort_by=brand_sort),
        }

    def sales_trends(
        self,
        orders: Iterable[Any] | None = None,
        now: datetime | None = None,
        daily_sales: Iterable[dict] | None = None,
    ) -> dict:
        """
        Statistics screen. Uses *daily_sales* from the dashboard endpoint when
        given, otherwise derives the daily rows from *orders*.
        """
        if daily_sales is None:
            daily_sales = daily_sales_from_orders(orders, tz=self.timezone)
        else:
            daily_sales = list(daily_sales)

        return {
            "summary": summarize_daily_sales(daily_sales),
            "recent_days": recent_daily_orders(daily_sales),
            "weekly_revenue": weekly_revenue_trend(daily_sales, now=now, tz=self.timezone),
        }

    def dashboard(
        self,
        orders: Iterable[Any] | None,
        products: Iterable[Any] | None,
        now: datetime | None = None,
        brands: Iterable[Any] | None = None,
        daily_sales: Iterable[dict] | None = None,
    ) -> dict:
        """
        Run every view and return a consolidated snapshot.

        Returns:
            {
              "meta":      {"generated_at": "...", "timezone": "UTC",
                            "total_orders": 42, "total_products": 120},
              "earnings":  { ... },
              "orders":    { ... },
              "inventory": { ... },
              "sales":     { ... },
            }
        """
        ref = resolve_now(now, self.timezone)
        order_list = normalize_orders(orders)
        product_list = normalize_products(products)

        logger.debug(
            "Building dashboard snapshot: %d orders, %d products",
            len(order_list), len(product_list),
        )

        return {
            "meta": {
                "generated_at": ref.isoformat(),
                "timezone": self.timezone,
                "total_orders": len(order_list),
                "total_products": len(product_list),
            },
            "earnings": self.earnings(order_list, now=ref),
            "orders": self.order_overview(order_list, now=ref),
            "inventory": self.inventory(product_list, brands=brands),
            "sales": self.sales_trends(order_list, now=ref, daily_sales=daily_sales),
        }
