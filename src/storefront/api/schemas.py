"""Pydantic response schemas for the Storefront API.

These are external contracts, kept separate from the Protean aggregates they
are built from.
"""

from datetime import datetime

from pydantic import BaseModel


class CatalogItemResponse(BaseModel):
    id: str
    name: str
    price: int
    stock: int
    description: str | None = None
    image_ref: str | None = None
    category: str | None = None
    rating: float | None = None


class LineResponse(BaseModel):
    item_id: str
    unit_price: int
    quantity: int


class CartResponse(BaseModel):
    cart_id: str
    lines: list[LineResponse]
    total: int
    pending_order_id: str | None = None


class OrderResponse(BaseModel):
    order_id: str
    status: str
    total: int
    lines: list[LineResponse]
    created_at: datetime
    expires_at: datetime
    resolved_at: datetime | None = None
    reason: str | None = None
    remaining_seconds: int | None = None


class CartChangeResponse(BaseModel):
    changed: bool
    cart: CartResponse
