"""
Inventory endpoints: low stock, summary, brands, product filter
"""

from fastapi import APIRouter, Depends, Query
from typing import Literal, Optional
import logging

from admin_api.api.deps import get_admin_client, get_engine, upstream_error
from admin_api.services.admin_client import AdminApiClient, AdminApiError
from metrics_engine import MetricsEngine
from metrics_engine.metrics.brands import calculate_brand_metrics
from metrics_engine.metrics.stock import (
    calculate_inventory_summary,
    calculate_low_stock,
    filter_products,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/low-stock")
async def get_low_stock(
    threshold: Optional[int] = Query(None, ge=1, description="Defaults to LOW_STOCK_THRESHOLD"),
    client: AdminApiClient = Depends(get_admin_client),
    engine: MetricsEngine = Depends(get_engine),
):
    """
    Products below the threshold with urgency level and restock suggestion
    """
    try:
        products = await client.fetch_all_products()
    except AdminApiError as e:
        raise upstream_error(e)

    return calculate_low_stock(products, threshold=threshold or engine.low_stock_threshold)


@router.get("/summary")
async def get_inventory_summary(
    client: AdminApiClient = Depends(get_admin_client),
    engine: MetricsEngine = Depends(get_engine),
):
    """
    Stock totals and per-category breakdown
    """
    try:
        products = await client.fetch_all_products()
    except AdminApiError as e:
        raise upstream_error(e)

    return calculate_inventory_summary(products, threshold=engine.low_stock_threshold)


@router.get("/brands")
async def get_brand_metrics(
    sort_by: Literal["name", "products", "value"] = Query("name"),
    client: AdminApiClient = Depends(get_admin_client),
):
    """
    Product count, stock value and average price per brand
    """
    try:
        products = await client.fetch_all_products()
        brands = await client.get_brands()
    except AdminApiError as e:
        raise upstream_error(e)

    return calculate_brand_metrics(products, brands=brands, sort_by=sort_by)


@router.get("/products")
async def get_filtered_products(
    search: Optional[str] = Query(None, description="Name, brand or description"),
    category: Optional[str] = Query(None, description="Category name; 'all' disables"),
    stock_filter: Optional[Literal["all", "lowstock", "outofstock"]] = Query(None),
    client: AdminApiClient = Depends(get_admin_client),
    engine: MetricsEngine = Depends(get_engine),
):
    """
    Product list filtered by search term, category and stock level
    """
    try:
        products = await client.fetch_all_products()
    except AdminApiError as e:
        raise upstream_error(e)

    matches = filter_products(
        products,
        search=search,
        category=category,
        stock_filter=stock_filter,
        threshold=engine.low_stock_threshold,
    )
    return {"products": [p.model_dump(mode="json") for p in matches], "count": len(matches)}
