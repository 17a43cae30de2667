"""
Consolidated dashboard endpoint
"""

import asyncio
from datetime import datetime
from fastapi import APIRouter, Depends, Query
from typing import Optional
import logging

from admin_api.api.deps import get_admin_client, get_engine, upstream_error
from admin_api.services.admin_client import AdminApiClient, AdminApiError
from metrics_engine import MetricsEngine

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def get_dashboard(
    now: Optional[datetime] = Query(None, description="Reference time (ISO 8601)"),
    days: int = Query(30, ge=1, le=365, description="Days of daily sales to request"),
    client: AdminApiClient = Depends(get_admin_client),
    engine: MetricsEngine = Depends(get_engine),
):
    """
    Earnings, orders, inventory and sales views in one snapshot
    """
    try:
        orders, products, brands, sales = await asyncio.gather(
            client.fetch_all_orders(),
            client.fetch_all_products(),
            client.get_brands(),
            client.get_sales_data(days=days),
        )
    except AdminApiError as e:
        raise upstream_error(e)

    daily_sales = sales.get("dailySales")
    if not isinstance(daily_sales, list):
        daily_sales = None

    snapshot = engine.dashboard(
        orders,
        products,
        now=now,
        brands=brands,
        daily_sales=daily_sales,
    )
    logger.info(
        f"Dashboard built from {snapshot['meta']['total_orders']} orders "
        f"and {snapshot['meta']['total_products']} products"
    )
    return snapshot
