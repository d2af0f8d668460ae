"""Order aggregate — an immutable, time-boxed snapshot of a checked-out cart.

State Machine (one-way):
    PENDING → COMPLETED   (paid before the deadline, stock decremented)
    PENDING → CANCELLED   (shopper cancelled before the deadline)
    PENDING → EXPIRED     (deadline reached, by timer or on the next attempt)
    PENDING → FAILED      (paid, but live stock no longer covers a line)

Lines and total are frozen at checkout. Every transition first checks that
the order is still pending, so a second resolution of the same order (a
stale timer, a double click) is rejected instead of applied twice.
"""

import json
import math
from datetime import UTC, timedelta
from enum import Enum
from uuid import uuid4

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from storefront.domain import storefront
from storefront.order.events import (
    OrderCancelled,
    OrderCompleted,
    OrderReservationExpired,
    OrderFailed,
    OrderPlaced,
)

RESERVATION_WINDOW = timedelta(minutes=15)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    EXPIRED = "expired"
    FAILED = "failed"


TERMINAL_STATUSES = frozenset(
    {
        OrderStatus.COMPLETED,
        OrderStatus.CANCELLED,
        OrderStatus.EXPIRED,
        OrderStatus.FAILED,
    }
)


def as_utc(value):
    """Treat naive datetimes as UTC so deadlines compare consistently."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _new_order_id():
    return f"ORD-{uuid4().hex[:12].upper()}"


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderLine:
    """A frozen copy of one cart line at checkout time."""

    item_id = Identifier(required=True)
    unit_price = Integer(required=True, min_value=1)
    quantity = Integer(required=True, min_value=1)
    position = Integer(default=0)

    @property
    def subtotal(self):
        return self.unit_price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    cart_id = Identifier(required=True)
    lines = HasMany(OrderLine)
    total = Integer(required=True, min_value=0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    created_at = DateTime(required=True)
    expires_at = DateTime(required=True)
    resolved_at = DateTime()
    reason = String(max_length=500)

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, cart, placed_at, window=RESERVATION_WINDOW):
        """Snapshot ``cart`` into a new pending order.

        The cart is only read; callers lock it separately.
        """
        placed_at = as_utc(placed_at)
        snapshot = [
            {
                "item_id": str(line.item_id),
                "unit_price": line.unit_price,
                "quantity": line.quantity,
                "position": index,
            }
            for index, line in enumerate(cart.ordered_lines())
        ]
        total = sum(line["unit_price"] * line["quantity"] for line in snapshot)

        order = cls(
            id=_new_order_id(),
            cart_id=str(cart.id),
            total=total,
            status=OrderStatus.PENDING.value,
            created_at=placed_at,
            expires_at=placed_at + window,
        )
        for line in snapshot:
            order.add_lines(OrderLine(**line))
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                cart_id=str(cart.id),
                lines=json.dumps(snapshot),
                total=total,
                created_at=order.created_at,
                expires_at=order.expires_at,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def ordered_lines(self):
        return sorted(self.lines or [], key=lambda line: line.position)

    @property
    def is_pending(self):
        return OrderStatus(self.status) == OrderStatus.PENDING

    @property
    def is_terminal(self):
        return OrderStatus(self.status) in TERMINAL_STATUSES

    def has_expired(self, now):
        return as_utc(now) >= as_utc(self.expires_at)

    def remaining_seconds(self, now):
        """Whole seconds left in the reservation window, never negative."""
        remaining = (as_utc(self.expires_at) - as_utc(now)).total_seconds()
        return max(0, math.floor(remaining))

    # -------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------
    def _assert_pending(self, target):
        if not self.is_pending:
            raise ValidationError({"status": [f"Cannot transition from {self.status} to {target.value}"]})

    def _assert_within_window(self, target, now):
        if self.has_expired(now):
            raise ValidationError(
                {"status": [f"Cannot transition to {target.value}: order expired at {self.expires_at.isoformat()}"]}
            )

    def complete(self, now):
        """Mark the order paid. Stock is decremented by the caller."""
        self._assert_pending(OrderStatus.COMPLETED)
        self._assert_within_window(OrderStatus.COMPLETED, now)

        self.status = OrderStatus.COMPLETED.value
        self.resolved_at = as_utc(now)
        self.raise_(
            OrderCompleted(
                order_id=str(self.id),
                total=self.total,
                completed_at=self.resolved_at,
            )
        )

    def cancel(self, now, reason="Cancelled by customer"):
        self._assert_pending(OrderStatus.CANCELLED)
        self._assert_within_window(OrderStatus.CANCELLED, now)

        self.status = OrderStatus.CANCELLED.value
        self.resolved_at = as_utc(now)
        self.reason = reason
        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                reason=reason,
                cancelled_at=self.resolved_at,
            )
        )

    def expire(self, now):
        """Close the reservation window. Only valid once the deadline passed."""
        self._assert_pending(OrderStatus.EXPIRED)
        if not self.has_expired(now):
            raise ValidationError({"status": [f"Order {self.id} does not expire until {self.expires_at.isoformat()}"]})

        self.status = OrderStatus.EXPIRED.value
        self.resolved_at = as_utc(now)
        self.reason = "Reservation window elapsed"
        self.raise_(
            OrderReservationExpired(
                order_id=str(self.id),
                expires_at=self.expires_at,
                expired_at=self.resolved_at,
            )
        )

    def fail(self, now, reason):
        self._assert_pending(OrderStatus.FAILED)

        self.status = OrderStatus.FAILED.value
        self.resolved_at = as_utc(now)
        self.reason = reason
        self.raise_(
            OrderFailed(
                order_id=str(self.id),
                reason=reason,
                failed_at=self.resolved_at,
            )
        )
