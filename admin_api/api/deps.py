"""
Shared FastAPI dependencies: request session, remote client, metrics engine
"""

from fastapi import Depends, Header, HTTPException, status
from typing import Optional

from admin_api.core.config import settings
from admin_api.core.session import ApiSession, parse_bearer
from admin_api.services.admin_client import AdminApiClient, AdminApiError, AdminAuthError
from metrics_engine import MetricsEngine


def get_session(authorization: Optional[str] = Header(None)) -> ApiSession:
    """Forward the caller's bearer token to the remote admin API"""
    return ApiSession(base_url=settings.admin_api_url, token=parse_bearer(authorization))


def get_admin_client(session: ApiSession = Depends(get_session)) -> AdminApiClient:
    return AdminApiClient(session)


def get_engine() -> MetricsEngine:
    return MetricsEngine(
        commission_rate=settings.COMMISSION_RATE,
        seller_earnings_share=settings.SELLER_EARNINGS_SHARE,
        timezone=settings.TIMEZONE,
        low_stock_threshold=settings.LOW_STOCK_THRESHOLD,
    )


def upstream_error(exc: AdminApiError) -> HTTPException:
    """401 for a rejected session, 502 for anything else the remote API returns"""
    if isinstance(exc, AdminAuthError):
        return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=exc.message)
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.message)
