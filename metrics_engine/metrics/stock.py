"""
Stock Metrics — Low-stock restock suggestions and inventory summary.

Backs the smart low-stock widget and the inventory summary cards.
Uses core.ranking.categorize_urgency / restock_suggestion for the tiers.
"""

from __future__ import annotations

from typing import Any, Iterable

from ..config import LOW_STOCK_THRESHOLD, UNCATEGORIZED_LABEL
from ..core.cleaning import to_records
from ..core.filters import product_filter_mask
from ..core.frames import products_frame
from ..core.ranking import URGENCY_RANK, categorize_urgency, restock_suggestion
from ..schemas import Product, normalize_products


_LOW_STOCK_COLUMNS = [
    "id", "name", "sku", "price", "stock",
    "category_name", "brand_name",
    "urgency_level", "restock_suggestion",
]


def calculate_low_stock(
    products: Iterable[Any] | None,
    threshold: int = LOW_STOCK_THRESHOLD,
) -> dict:
    """
    Products below *threshold* units with urgency tier and restock quantity.

    Sorted by urgency (critical, warning, low), then by stock ascending.

    Returns:
        {
          "threshold": 10,
          "products": [
            {"id": 7, "name": "Mouse", "sku": "M-1", "price": 12.5, "stock": 0,
             "category_name": "Periféricos", "brand_name": "Logi",
             "urgency_level": "critical", "restock_suggestion": 50},
            ...
          ],
          "total_low_stock": 4,
          "critical_count": 2,
          "warning_count": 1,
          "low_count": 1,
          "total_suggested_units": 145,
          "estimated_investment": 1830.5   # sum(restock_suggestion * price)
        }
    """
    df = products_frame(products)
    low = df[df["stock"] < threshold]

    low = low.assign(
        urgency_level=categorize_urgency(low["stock"]),
        restock_suggestion=restock_suggestion(low["stock"]),
    )
    low = low.assign(_urgency_rank=low["urgency_level"].map(URGENCY_RANK).astype("int64"))
    low = low.sort_values(["_urgency_rank", "stock"], kind="stable")

    levels = low["urgency_level"]
    return {
        "threshold": threshold,
        "products": to_records(low, _LOW_STOCK_COLUMNS),
        "total_low_stock": len(low),
        "critical_count": int((levels == "critical").sum()),
        "warning_count": int((levels == "warning").sum()),
        "low_count": int((levels == "low").sum()),
        "total_suggested_units": int(low["restock_suggestion"].sum()),
        "estimated_investment": float((low["restock_suggestion"] * low["price"]).sum()),
    }


def calculate_inventory_summary(
    products: Iterable[Any] | None,
    threshold: int = LOW_STOCK_THRESHOLD,
) -> dict:
    """
    Inventory totals and per-category breakdown.

    Returns:
        {
          "total_products": 120,
          "total_stock": 3400,
          "total_value": 58200.0,      # sum(price * stock)
          "out_of_stock_count": 3,
          "low_stock_count": 11,       # stock < threshold
          "category_stats": [
            {"category": "Audio", "total_products": 14,
             "total_stock": 380, "total_value": 9100.0},
            ...
          ]
        }
    """
    df = products_frame(products)
    df = df.assign(
        value=df["price"] * df["stock"],
        category=df["category_name"].where(df["category_name"].notna(), UNCATEGORIZED_LABEL),
    )

    category_stats: list[dict] = []
    if not df.empty:
        grouped = df.groupby("category", sort=False).agg(
            total_products=("stock", "count"),
            total_stock=("stock", "sum"),
            total_value=("value", "sum"),
        )
        category_stats = to_records(grouped.reset_index())

    return {
        "total_products": len(df),
        "total_stock": int(df["stock"].sum()),
        "total_value": float(df["value"].sum()),
        "out_of_stock_count": int((df["stock"] == 0).sum()),
        "low_stock_count": int((df["stock"] < threshold).sum()),
        "category_stats": category_stats,
    }


def filter_products(
    products: Iterable[Any] | None,
    search: str | None = None,
    category: str | None = None,
    stock_filter: str | None = None,
    threshold: int = LOW_STOCK_THRESHOLD,
) -> list[Product]:
    """Product list filter (search term, category name, lowstock / outofstock)."""
    normalized = normalize_products(products)
    df = products_frame(normalized)
    mask = product_filter_mask(df, search, category, stock_filter, threshold)
    return [normalized[i] for i in df.index[mask.to_numpy()]]
