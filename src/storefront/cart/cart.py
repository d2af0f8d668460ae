"""Cart aggregate — the shopper's in-progress selection.

Lines are unique per catalog item and never exceed the item's live stock.
The unit price is pinned when the item is first added. Once checked out the
cart keeps its lines for display but is locked until the pending order is
paid, cancelled or expired, at which point it is cleared in one step.
"""

from datetime import UTC, datetime

import structlog
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from storefront.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartReserved
from storefront.domain import storefront
from storefront.exceptions import EmptyCart, OrderAlreadyPending

logger = structlog.get_logger(__name__)


@storefront.entity(part_of="Cart")
class CartLine:
    item_id = Identifier(required=True)
    unit_price = Integer(required=True, min_value=1)
    quantity = Integer(required=True, min_value=1)
    position = Integer(default=0)

    @property
    def subtotal(self):
        return self.unit_price * self.quantity


@storefront.aggregate
class Cart:
    session_id = String(max_length=255)
    lines = HasMany(CartLine)
    pending_order_id = Identifier()  # Set while a checkout is pending
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, session_id=None):
        now = datetime.now(UTC)
        return cls(session_id=session_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def ordered_lines(self):
        return sorted(self.lines or [], key=lambda line: line.position)

    def line_for(self, item_id):
        return next((line for line in (self.lines or []) if str(line.item_id) == str(item_id)), None)

    def total(self):
        return sum(line.subtotal for line in (self.lines or []))

    def is_empty(self):
        return not self.lines

    @property
    def is_locked(self):
        return bool(self.pending_order_id)

    def _assert_unlocked(self):
        if self.is_locked:
            raise OrderAlreadyPending(
                {"cart": [f"Cart is locked while order {self.pending_order_id} is pending"]}
            )

    # -------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------
    def add_item(self, item):
        """Add one unit of a catalog item.

        Returns False, leaving the cart untouched, when the item is out of
        stock or the line already holds every available unit.
        """
        self._assert_unlocked()

        if item.stock == 0:
            logger.debug("Item out of stock, not added", item_id=str(item.id))
            return False

        existing = self.line_for(item.id)
        if existing:
            if existing.quantity >= item.stock:
                logger.debug("No stock left to add", item_id=str(item.id), stock=item.stock)
                return False
            existing.quantity += 1
            new_quantity = existing.quantity
            unit_price = existing.unit_price
        else:
            next_position = max((line.position for line in (self.lines or [])), default=-1) + 1
            self.add_lines(
                CartLine(
                    item_id=str(item.id),
                    unit_price=item.price,
                    quantity=1,
                    position=next_position,
                )
            )
            new_quantity = 1
            unit_price = item.price

        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                item_id=str(item.id),
                unit_price=unit_price,
                new_quantity=new_quantity,
            )
        )
        return True

    def remove_item(self, item_id):
        """Take one unit of an item out; the line goes away at zero."""
        self._assert_unlocked()

        existing = self.line_for(item_id)
        if existing is None:
            return False

        if existing.quantity > 1:
            existing.quantity -= 1
            new_quantity = existing.quantity
        else:
            self.remove_lines(existing)
            new_quantity = 0

        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                item_id=str(item_id),
                new_quantity=new_quantity,
            )
        )
        return True

    # -------------------------------------------------------------------
    # Checkout
    # -------------------------------------------------------------------
    def reserve_for(self, order_id):
        """Lock the cart for a freshly placed order."""
        if self.is_locked:
            raise OrderAlreadyPending({"order": [f"Order {self.pending_order_id} is still pending"]})
        if self.is_empty():
            raise EmptyCart({"cart": ["Cannot check out an empty cart"]})

        self.pending_order_id = str(order_id)
        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(CartReserved(cart_id=str(self.id), order_id=str(order_id), reserved_at=now))

    def clear(self):
        """Drop every line and release the pending-order slot."""
        order_id = self.pending_order_id
        for line in list(self.lines or []):
            self.remove_lines(line)
        self.pending_order_id = None

        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                order_id=str(order_id) if order_id else None,
                cleared_at=now,
            )
        )
