"""
Earnings endpoints
"""

from datetime import datetime
from fastapi import APIRouter, Depends, Query
from typing import Optional
import logging

from admin_api.api.deps import get_admin_client, get_engine, upstream_error
from admin_api.services.admin_client import AdminApiClient, AdminApiError
from metrics_engine import MetricsEngine
from metrics_engine.config import EARNINGS_SELLER_ROLE, INTERNAL_TRANSFER, PAYMENT_PAID

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def get_earnings(
    now: Optional[datetime] = Query(None, description="Reference time (ISO 8601); defaults to the current time"),
    payment_status: Optional[str] = Query(PAYMENT_PAID, description="'all' disables the filter"),
    payment_method: Optional[str] = Query(INTERNAL_TRANSFER, description="'all' disables the filter"),
    seller_role: Optional[str] = Query(EARNINGS_SELLER_ROLE, description="'all' disables the filter"),
    client: AdminApiClient = Depends(get_admin_client),
    engine: MetricsEngine = Depends(get_engine),
):
    """
    Commission totals, top-selling admins, recent commissions and monthly trend
    """
    try:
        orders = await client.fetch_all_orders()
    except AdminApiError as e:
        raise upstream_error(e)

    return engine.earnings(
        orders,
        now=now,
        payment_status=payment_status,
        payment_method=payment_method,
        seller_role=seller_role,
    )
