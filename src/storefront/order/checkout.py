"""Checkout — command and handler that turn the cart into a pending order."""

import structlog
from protean import handle
from protean.fields import DateTime, Identifier
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import storefront
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    """Snapshot the cart and open a reservation window."""

    cart_id = Identifier(required=True)
    placed_at = DateTime(required=True)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.get(command.cart_id)

        order = Order.place(cart, placed_at=command.placed_at)
        # Raises EmptyCart / OrderAlreadyPending before anything is persisted
        cart.reserve_for(order.id)

        current_domain.repository_for(Order).add(order)
        cart_repo.add(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            cart_id=str(cart.id),
            total=order.total,
            expires_at=order.expires_at.isoformat(),
        )
        return str(order.id)
