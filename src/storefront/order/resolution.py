"""Order resolution — pay, cancel and expire a pending order.

Each handler resolves the order at most once: a non-pending order is left
alone. Whatever the outcome, the resolved order is appended to the history
and the cart is cleared in the same unit of work. Handlers return the
order's resulting status so the caller can tell an expiry or a stock
failure apart from the outcome it asked for.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.catalog.item import CatalogItem
from storefront.catalog.store import get_item
from storefront.domain import storefront
from storefront.history.history import OrderHistory
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PayOrder:
    order_id = Identifier(required=True)
    history_id = Identifier(required=True)
    as_of = DateTime(required=True)


@storefront.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    history_id = Identifier(required=True)
    as_of = DateTime(required=True)
    reason = String(max_length=500, default="Cancelled by customer")


@storefront.command(part_of="Order")
class ExpireOrder:
    order_id = Identifier(required=True)
    history_id = Identifier(required=True)
    as_of = DateTime(required=True)


def _load_pending(order_id):
    order = current_domain.repository_for(Order).get(order_id)
    if not order.is_pending:
        raise ValidationError({"status": [f"Order {order.id} is already {order.status}"]})
    return order


def _close(order, history_id):
    """Persist a resolved order, record it and release the cart."""
    history_repo = current_domain.repository_for(OrderHistory)
    history = history_repo.get(history_id)
    history.append(order)

    cart_repo = current_domain.repository_for(Cart)
    cart = cart_repo.get(order.cart_id)
    cart.clear()

    current_domain.repository_for(Order).add(order)
    history_repo.add(history)
    cart_repo.add(cart)

    logger.info(
        "Order resolved",
        order_id=str(order.id),
        status=order.status,
        reason=order.reason,
    )
    return order.status


@storefront.command_handler(part_of=Order)
class ResolveOrderHandler:
    @handle(PayOrder)
    def pay_order(self, command):
        order = _load_pending(command.order_id)

        if order.has_expired(command.as_of):
            order.expire(command.as_of)
            return _close(order, command.history_id)

        # Check every line before touching any stock
        reserved = [(line, get_item(line.item_id)) for line in order.ordered_lines()]
        short = [(line, item) for line, item in reserved if not item.can_supply(line.quantity)]
        if short:
            details = ", ".join(f"{item.id} ({item.stock} left, {line.quantity} reserved)" for line, item in short)
            order.fail(command.as_of, reason=f"Insufficient stock: {details}")
            return _close(order, command.history_id)

        catalog_repo = current_domain.repository_for(CatalogItem)
        for line, item in reserved:
            item.decrement_stock(line.quantity, order_id=order.id)
            catalog_repo.add(item)

        order.complete(command.as_of)
        return _close(order, command.history_id)

    @handle(CancelOrder)
    def cancel_order(self, command):
        order = _load_pending(command.order_id)

        if order.has_expired(command.as_of):
            order.expire(command.as_of)
        else:
            order.cancel(command.as_of, reason=command.reason)
        return _close(order, command.history_id)

    @handle(ExpireOrder)
    def expire_order(self, command):
        order = current_domain.repository_for(Order).get(command.order_id)

        # Stale or early timer: nothing to do
        if not order.is_pending or not order.has_expired(command.as_of):
            return order.status

        order.expire(command.as_of)
        return _close(order, command.history_id)
