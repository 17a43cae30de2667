"""
Order overview, commission and search endpoints
"""

from datetime import datetime
from fastapi import APIRouter, Depends, Query
from typing import Optional
import logging

from admin_api.api.deps import get_admin_client, get_engine, upstream_error
from admin_api.services.admin_client import AdminApiClient, AdminApiError
from metrics_engine import MetricsEngine
from metrics_engine.metrics.commissions import payment_split
from metrics_engine.metrics.orders import search_orders

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/overview")
async def get_order_overview(
    now: Optional[datetime] = Query(None, description="Reference time (ISO 8601)"),
    client: AdminApiClient = Depends(get_admin_client),
    engine: MetricsEngine = Depends(get_engine),
):
    """
    Order counts, week growth, top customers and top sellers
    """
    try:
        orders = await client.fetch_all_orders()
    except AdminApiError as e:
        raise upstream_error(e)

    return engine.order_overview(orders, now=now)


@router.get("/commissions")
async def get_commission_orders(
    client: AdminApiClient = Depends(get_admin_client),
    engine: MetricsEngine = Depends(get_engine),
):
    """
    Orders that carry a platform commission, each with its payment split
    """
    try:
        orders = await client.fetch_all_orders()
    except AdminApiError as e:
        raise upstream_error(e)

    rows = []
    for order in engine.commission_orders(orders):
        rows.append({
            **order.model_dump(mode="json"),
            **payment_split(order, rate=engine.commission_rate),
        })

    return {"orders": rows, "count": len(rows)}


@router.get("/search")
async def search_order_list(
    q: Optional[str] = Query(None, description="Order id, customer name or email"),
    status: Optional[str] = Query(None),
    payment_status: Optional[str] = Query(None),
    client: AdminApiClient = Depends(get_admin_client),
):
    """
    Filter orders by free text, status and payment status
    """
    try:
        orders = await client.fetch_all_orders()
    except AdminApiError as e:
        raise upstream_error(e)

    matches = search_orders(orders, term=q, status=status, payment_status=payment_status)
    return {"orders": [o.model_dump(mode="json") for o in matches], "count": len(matches)}
