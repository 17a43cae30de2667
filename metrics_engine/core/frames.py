"""
Frames — Flatten normalized records into typed DataFrames.

Every metrics module works on these frames. Columns are always present and
typed, even for empty input, so downstream code never special-cases dtypes:
    - identity / label columns are object dtype (None = missing)
    - money columns are float64, count columns int64
    - timestamps are datetime64[ns, UTC] (NaT = missing)
"""

from __future__ import annotations

from typing import Any, Iterable

import pandas as pd

from ..schemas import Order, Product, normalize_orders, normalize_products


ORDER_COLUMNS = [
    "id", "order_number",
    "customer_id", "customer_name", "customer_email",
    "seller_id", "seller_name", "seller_email", "seller_role",
    "total", "status", "payment_status", "payment_method",
    "item_count", "created_at", "updated_at",
]

PRODUCT_COLUMNS = [
    "id", "name", "description", "sku", "status",
    "price", "stock",
    "category_id", "category_name",
    "brand_id", "brand_name",
]

_ORDER_FLOATS = ["total"]
_ORDER_INTS = ["item_count"]
_ORDER_TIMES = ["created_at", "updated_at"]
_PRODUCT_FLOATS = ["price"]
_PRODUCT_INTS = ["stock"]


def _order_row(order: Order) -> dict:
    customer = order.customer
    seller = order.seller
    return {
        "id": order.id,
        "order_number": order.order_number,
        "customer_id": customer.id if customer else None,
        "customer_name": customer.name if customer else None,
        "customer_email": customer.email if customer else None,
        "seller_id": seller.id if seller else None,
        "seller_name": seller.name if seller else None,
        "seller_email": seller.email if seller else None,
        "seller_role": seller.role if seller else None,
        "total": order.total,
        "status": order.status,
        "payment_status": order.payment_status,
        "payment_method": order.payment_method,
        "item_count": len(order.items),
        "created_at": order.created_at,
        "updated_at": order.updated_at,
    }


def _product_row(product: Product) -> dict:
    category = product.category
    brand = product.brand
    return {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "sku": product.sku,
        "status": product.status,
        "price": product.price,
        "stock": product.stock,
        "category_id": category.id if category else None,
        "category_name": category.name if category else None,
        "brand_id": brand.id if brand else None,
        "brand_name": brand.name if brand else None,
    }


def _build(
    rows: list[dict],
    columns: list[str],
    floats: list[str],
    ints: list[str],
    times: list[str],
) -> pd.DataFrame:
    # Column-wise construction keeps ids as objects (no int -> float upcast on None)
    data = {}
    for col in columns:
        values = [row[col] for row in rows]
        if col in floats:
            data[col] = pd.Series(values, dtype="float64")
        elif col in ints:
            data[col] = pd.Series(values, dtype="int64")
        elif col in times:
            data[col] = pd.to_datetime(pd.Series(values, dtype=object), utc=True)
        else:
            data[col] = pd.Series(values, dtype=object)
    return pd.DataFrame(data, columns=columns)


def orders_frame(orders: Iterable[Any] | None) -> pd.DataFrame:
    """
    Normalize and flatten orders, one row per order in input order.

    Args:
        orders: Raw order dicts and/or schemas.Order models.

    Returns:
        DataFrame with ORDER_COLUMNS and a RangeIndex matching input position.
    """
    rows = [_order_row(o) for o in normalize_orders(orders)]
    return _build(rows, ORDER_COLUMNS, _ORDER_FLOATS, _ORDER_INTS, _ORDER_TIMES)


def products_frame(products: Iterable[Any] | None) -> pd.DataFrame:
    """Normalize and flatten products, one row per product in input order."""
    rows = [_product_row(p) for p in normalize_products(products)]
    return _build(rows, PRODUCT_COLUMNS, _PRODUCT_FLOATS, _PRODUCT_INTS, [])
