"""
Remote admin API client for orders, products, brands and sales data
"""

import httpx
import logging
from typing import Dict, Any, Optional, List

from admin_api.core.config import settings
from admin_api.core.session import ApiSession
from metrics_engine.core.cleaning import to_int

logger = logging.getLogger(__name__)


class AdminApiError(Exception):
    """Custom exception for remote admin API errors"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AdminAuthError(AdminApiError):
    """The remote API rejected the session token (HTTP 401)"""


class AdminApiClient:
    """Client for the back-office REST endpoints"""

    def __init__(self, session: ApiSession, timeout: Optional[float] = None,
                 page_size: Optional[int] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize the admin API client

        Args:
            session: Base URL and bearer token for this request
            timeout: Request timeout in seconds (default: settings.REQUEST_TIMEOUT)
            page_size: Page size used by the fetch_all_* helpers
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.session = session
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self.page_size = page_size or settings.PAGE_SIZE
        self.transport = transport

    @property
    def base_url(self) -> str:
        """Get base URL for API calls"""
        return self.session.base_url.rstrip("/")

    @property
    def headers(self) -> Dict[str, str]:
        """Get headers for API calls"""
        return {"Accept": "application/json", **self.session.headers}

    async def get_orders(self, page: int = 1, limit: Optional[int] = None,
                         **filters: Any) -> Dict[str, Any]:
        """
        Get one page of orders

        Args:
            page: 1-based page number
            limit: Orders per page
            filters: Extra query parameters (status, paymentStatus, search, ...)

        Returns:
            {"data": [order, ...], "pagination": {"page": 1, "limit": 100, "total": 240, "pages": 3}}
        """
        params = {"page": page, "limit": limit or self.page_size, **filters}
        payload = await self._get("/api/orders", params)
        return self._as_page(payload, page)

    async def get_products(self, page: int = 1, limit: Optional[int] = None,
                           **filters: Any) -> Dict[str, Any]:
        """
        Get one page of products

        Returns:
            Same shape as get_orders
        """
        params = {"page": page, "limit": limit or self.page_size, **filters}
        payload = await self._get("/api/products", params)
        return self._as_page(payload, page)

    async def get_brands(self) -> List[Dict[str, Any]]:
        """Get all brands"""
        payload = await self._get("/api/brands")
        if isinstance(payload, dict):
            payload = payload.get("data", [])
        return payload if isinstance(payload, list) else []

    async def get_sales_data(self, days: int = 30) -> Dict[str, Any]:
        """
        Get the dashboard sales summary

        Returns:
            {"period": "30d", "totalSales": 96, "salesRevenue": 15420.0,
             "averageOrderValue": 160.6,
             "dailySales": [{"date": "2026-10-18", "orders_count": 4, "total_revenue": 512.0}, ...]}
        """
        payload = await self._get("/api/dashboard/sales", {"days": days})
        return payload if isinstance(payload, dict) else {}

    async def fetch_all_orders(self, **filters: Any) -> List[Dict[str, Any]]:
        """Walk every page of /api/orders and return the concatenated rows"""
        return await self._fetch_all(self.get_orders, **filters)

    async def fetch_all_products(self, **filters: Any) -> List[Dict[str, Any]]:
        """Walk every page of /api/products and return the concatenated rows"""
        return await self._fetch_all(self.get_products, **filters)

    async def _fetch_all(self, get_page, **filters: Any) -> List[Dict[str, Any]]:
        rows: List[Dict[str, Any]] = []
        page = 1
        while True:
            result = await get_page(page=page, **filters)
            data = result["data"]
            rows.extend(data)

            pages = to_int(result["pagination"].get("pages"), default=1)
            if page >= pages or not data:
                break
            page += 1

        logger.info(f"Fetched {len(rows)} records over {page} page(s)")
        return rows

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Perform a GET request and decode the body

        Raises:
            AdminAuthError: on HTTP 401
            AdminApiError: on any other HTTP error status, timeout or transport failure
        """
        # Remove None values
        params = {k: v for k, v in (params or {}).items() if v is not None}
        url = f"{self.base_url}{path}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(url, params=params, headers=self.headers)
        except httpx.TimeoutException as e:
            logger.error(f"Request to {path} timed out: {e}")
            raise AdminApiError("Request timeout") from e
        except httpx.HTTPError as e:
            logger.error(f"Request to {path} failed: {e}")
            raise AdminApiError(f"Request failed: {e}") from e

        if response.is_error:
            message = self._error_message(response)
            if response.status_code < 500:
                logger.warning(f"API request failed for {path}: {response.status_code} {message}")
            else:
                logger.error(f"API request failed for {path}: {response.status_code} {message}")

            if response.status_code == 401:
                raise AdminAuthError(message, status_code=401)
            raise AdminApiError(message, status_code=response.status_code)

        if "application/json" in response.headers.get("content-type", ""):
            return response.json()
        return response.text

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Error text: JSON "message", else body text, else the status code"""
        fallback = f"HTTP error! status: {response.status_code}"
        if "application/json" in response.headers.get("content-type", ""):
            try:
                body = response.json()
            except ValueError:
                return response.text or fallback
            if isinstance(body, dict) and body.get("message"):
                return str(body["message"])
            return fallback
        return response.text or fallback

    @staticmethod
    def _as_page(payload: Any, page: int) -> Dict[str, Any]:
        """Normalize a list response into the {data, pagination} envelope"""
        if isinstance(payload, list):
            return {
                "data": payload,
                "pagination": {"page": page, "limit": len(payload), "total": len(payload), "pages": 1},
            }
        if not isinstance(payload, dict):
            return {"data": [], "pagination": {"page": page, "limit": 0, "total": 0, "pages": 1}}

        data = payload.get("data")
        pagination = payload.get("pagination")
        return {
            "data": data if isinstance(data, list) else [],
            "pagination": pagination if isinstance(pagination, dict) else {"page": page, "pages": 1},
        }
