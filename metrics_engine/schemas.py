"""
Pydantic schemas that normalize raw admin-API records.

Records are normalized once, at the boundary, so the metrics modules can rely
on a single shape:
    - numeric fields are finite numbers (null / garbage -> 0)
    - category / brand are always a NamedRef (or None)
    - timestamps are aware UTC datetimes (or None)
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .core.cleaning import to_int, to_number, to_text, to_utc_datetime

logger = logging.getLogger(__name__)

RecordId = Union[int, str]


class _Record(BaseModel):
    """Common config: accept camelCase wire names and snake_case names, ignore extras."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class NamedRef(_Record):
    """A brand or category reference, whatever shape the API sent."""

    id: Optional[RecordId] = None
    name: Optional[str] = None
    description: Optional[str] = None

    @field_validator("name", "description", mode="before")
    @classmethod
    def _strip(cls, v):
        return to_text(v)


def _as_ref(value: Any) -> Any:
    """'Electronics' -> {'name': ...}; 7 -> {'id': 7}; objects pass through."""
    if value is None or isinstance(value, (dict, BaseModel)):
        return value
    if isinstance(value, (int, str)) and not isinstance(value, bool):
        if isinstance(value, str):
            return {"name": value} if value.strip() else None
        return {"id": value}
    return None


class Customer(_Record):
    id: Optional[RecordId] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    @field_validator("name", "email", "phone", "address", mode="before")
    @classmethod
    def _strip(cls, v):
        return to_text(v)


class OrderUser(_Record):
    """Buyer or seller account attached to an order."""

    id: Optional[RecordId] = None
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None

    @field_validator("name", "email", "role", mode="before")
    @classmethod
    def _strip(cls, v):
        return to_text(v)


class Brand(NamedRef):
    pass


class Product(_Record):
    id: Optional[RecordId] = None
    name: Optional[str] = None
    description: Optional[str] = None
    price: float = Field(0.0, description="Unit price; null or invalid -> 0")
    stock: int = Field(0, description="Units on hand; null or invalid -> 0")
    sku: Optional[str] = None
    status: Optional[str] = None
    category: Optional[NamedRef] = None
    brand: Optional[NamedRef] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    @field_validator("price", mode="before")
    @classmethod
    def _price(cls, v):
        return to_number(v)

    @field_validator("stock", mode="before")
    @classmethod
    def _stock(cls, v):
        return to_int(v)

    @field_validator("category", "brand", mode="before")
    @classmethod
    def _ref(cls, v):
        return _as_ref(v)

    @field_validator("name", "description", "sku", "status", mode="before")
    @classmethod
    def _strip(cls, v):
        return to_text(v)

    @field_validator("created_at", mode="before")
    @classmethod
    def _created(cls, v):
        return to_utc_datetime(v)


class OrderItem(_Record):
    product_id: Optional[RecordId] = Field(None, alias="productId")
    product: Optional[Product] = None
    quantity: int = 0
    price: float = 0.0

    @field_validator("quantity", mode="before")
    @classmethod
    def _quantity(cls, v):
        return to_int(v)

    @field_validator("price", mode="before")
    @classmethod
    def _price(cls, v):
        return to_number(v)

    @field_validator("product", mode="before")
    @classmethod
    def _product(cls, v):
        return v if isinstance(v, (dict, BaseModel)) else None


class Order(_Record):
    id: Optional[RecordId] = None
    order_number: Optional[str] = Field(None, alias="orderNumber")
    customer: Optional[Customer] = None
    buyer: Optional[OrderUser] = None
    seller: Optional[OrderUser] = None
    items: List[OrderItem] = Field(default_factory=list)
    total: float = Field(0.0, description="Order total; null or invalid -> 0")
    status: Optional[str] = None
    payment_status: Optional[str] = Field(None, alias="paymentStatus")
    payment_method: Optional[str] = Field(None, alias="paymentMethod")
    notes: Optional[str] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    @field_validator("total", mode="before")
    @classmethod
    def _total(cls, v):
        return to_number(v)

    @field_validator("items", mode="before")
    @classmethod
    def _items(cls, v):
        if not isinstance(v, (list, tuple)):
            return []
        return [item for item in v if isinstance(item, (dict, BaseModel))]

    @field_validator("customer", "buyer", "seller", mode="before")
    @classmethod
    def _relation(cls, v):
        return v if isinstance(v, (dict, BaseModel)) else None

    @field_validator(
        "order_number", "status", "payment_status", "payment_method", "notes",
        mode="before",
    )
    @classmethod
    def _strip(cls, v):
        return to_text(v)

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def _timestamps(cls, v):
        return to_utc_datetime(v)


# ------------------------------------------------------------------
# Boundary helpers
# ------------------------------------------------------------------

def _normalize(records: Iterable[Any] | None, model: type[BaseModel], label: str) -> list:
    normalized = []
    for raw in records or []:
        if isinstance(raw, model):
            normalized.append(raw)
        elif isinstance(raw, dict):
            try:
                normalized.append(model.model_validate(raw))
            except ValidationError as e:
                logger.warning("Skipping invalid %s record: %d error(s)", label, e.error_count())
        else:
            logger.warning("Skipping %s record of type %s", label, type(raw).__name__)
    return normalized


def normalize_orders(records: Iterable[Any] | None) -> list[Order]:
    """Validate raw order dicts (models pass through), keeping input order."""
    return _normalize(records, Order, "order")


def normalize_products(records: Iterable[Any] | None) -> list[Product]:
    """Validate raw product dicts (models pass through), keeping input order."""
    return _normalize(records, Product, "product")


def normalize_brands(records: Iterable[Any] | None) -> list[Brand]:
    return _normalize(records, Brand, "brand")


def normalize_order_items(records: Iterable[Any] | None) -> list[OrderItem]:
    return _normalize(records, OrderItem, "order item")
