"""
Main API router that includes all endpoint routers
"""

from fastapi import APIRouter

from admin_api.api.api_v1.endpoints import earnings, orders, inventory, dashboard

# Create main API router
api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(earnings.router, prefix="/earnings", tags=["earnings"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(inventory.router, prefix="/inventory", tags=["inventory"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
