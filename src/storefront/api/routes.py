"""FastAPI routes for the Storefront — catalog, cart, checkout and history.

Routes only translate HTTP into session intents. Domain errors are turned
into responses by Protean's FastAPI exception handlers.
"""

from fastapi import APIRouter, Depends, Request

from storefront.api.schemas import (
    CartChangeResponse,
    CartResponse,
    CatalogItemResponse,
    LineResponse,
    OrderResponse,
)
from storefront.session import Storefront


def get_storefront(request: Request) -> Storefront:
    """The app's session, opened on first use."""
    shop = getattr(request.app.state, "storefront", None)
    if shop is None:
        shop = Storefront()
        request.app.state.storefront = shop
    return shop


def _lines(lines):
    return [LineResponse(item_id=str(line.item_id), unit_price=line.unit_price, quantity=line.quantity) for line in lines]


def _cart_response(cart) -> CartResponse:
    return CartResponse(
        cart_id=str(cart.id),
        lines=_lines(cart.ordered_lines()),
        total=cart.total(),
        pending_order_id=str(cart.pending_order_id) if cart.pending_order_id else None,
    )


def _order_response(order, shop: Storefront) -> OrderResponse:
    return OrderResponse(
        order_id=str(order.id),
        status=order.status,
        total=order.total,
        lines=_lines(order.ordered_lines()),
        created_at=order.created_at,
        expires_at=order.expires_at,
        resolved_at=order.resolved_at,
        reason=order.reason,
        remaining_seconds=order.remaining_seconds(shop.clock.now()) if order.is_pending else None,
    )


# ---------------------------------------------------------------------------
# Catalog Router
# ---------------------------------------------------------------------------
catalog_router = APIRouter(prefix="/catalog", tags=["catalog"])


@catalog_router.get("", response_model=list[CatalogItemResponse])
async def list_catalog(shop: Storefront = Depends(get_storefront)) -> list[CatalogItemResponse]:
    return [
        CatalogItemResponse(
            id=str(item.id),
            name=item.name,
            price=item.price,
            stock=item.stock,
            description=item.description,
            image_ref=item.image_ref,
            category=item.category,
            rating=item.rating,
        )
        for item in shop.catalog()
    ]


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(shop: Storefront = Depends(get_storefront)) -> CartResponse:
    return _cart_response(shop.cart())


@cart_router.post("/items/{item_id}", response_model=CartChangeResponse)
async def add_cart_item(item_id: str, shop: Storefront = Depends(get_storefront)) -> CartChangeResponse:
    changed = shop.add_item(item_id)
    return CartChangeResponse(changed=changed, cart=_cart_response(shop.cart()))


@cart_router.delete("/items/{item_id}", response_model=CartChangeResponse)
async def remove_cart_item(item_id: str, shop: Storefront = Depends(get_storefront)) -> CartChangeResponse:
    changed = shop.remove_item(item_id)
    return CartChangeResponse(changed=changed, cart=_cart_response(shop.cart()))


# ---------------------------------------------------------------------------
# Checkout Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])


@checkout_router.post("", status_code=201, response_model=OrderResponse)
async def checkout(shop: Storefront = Depends(get_storefront)) -> OrderResponse:
    return _order_response(shop.checkout(), shop)


@checkout_router.get("", response_model=OrderResponse | None)
async def get_pending_order(shop: Storefront = Depends(get_storefront)) -> OrderResponse | None:
    order = shop.pending_order()
    return _order_response(order, shop) if order else None


@checkout_router.post("/pay", response_model=OrderResponse)
async def pay(shop: Storefront = Depends(get_storefront)) -> OrderResponse:
    return _order_response(shop.pay(), shop)


@checkout_router.post("/cancel", response_model=OrderResponse)
async def cancel(shop: Storefront = Depends(get_storefront)) -> OrderResponse:
    return _order_response(shop.cancel(), shop)


# ---------------------------------------------------------------------------
# Order History Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(shop: Storefront = Depends(get_storefront)) -> list[OrderResponse]:
    return [
        OrderResponse(
            order_id=str(entry.order_id),
            status=entry.status,
            total=entry.total,
            lines=[LineResponse(**line) for line in entry.line_items],
            created_at=entry.created_at,
            expires_at=entry.expires_at,
            resolved_at=entry.resolved_at,
            reason=entry.reason,
        )
        for entry in shop.history()
    ]
