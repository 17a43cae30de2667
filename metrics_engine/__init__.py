"""
metrics_engine — Derived metrics for the e-commerce back-office.

Submodules:
    - schemas:  Pydantic models that normalize raw API records
    - core:     Cleaning, time windows, filters and ranking primitives
    - metrics:  Pure calculation modules (commissions, orders, rankings,
                stock, brands, sales)
    - analyzer: MetricsEngine, the single entry point
"""

from .analyzer import MetricsEngine

__all__ = ["MetricsEngine"]
