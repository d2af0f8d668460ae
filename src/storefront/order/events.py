"""Domain events for the Order aggregate.

One creation event and one event per terminal status. Line snapshots are
carried as JSON so the event stays a flat, versioned record.
"""

from protean.fields import DateTime, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A cart was checked out and its reservation window opened."""

    __version__ = 1

    order_id = Identifier(required=True)
    cart_id = Identifier(required=True)
    lines = Text(required=True)  # JSON: list of {item_id, unit_price, quantity}
    total = Integer(required=True)
    created_at = DateTime(required=True)
    expires_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderCompleted:
    """Payment went through and stock was taken for every line."""

    __version__ = 1

    order_id = Identifier(required=True)
    total = Integer(required=True)
    completed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderCancelled:
    """The shopper walked away from the order before it expired."""

    __version__ = 1

    order_id = Identifier(required=True)
    reason = String(max_length=500)
    cancelled_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderReservationExpired:
    """The reservation window closed before the order was paid."""

    __version__ = 1

    order_id = Identifier(required=True)
    expires_at = DateTime(required=True)
    expired_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderFailed:
    """Payment was attempted but stock had vanished for at least one line."""

    __version__ = 1

    order_id = Identifier(required=True)
    reason = String(required=True, max_length=500)
    failed_at = DateTime(required=True)
