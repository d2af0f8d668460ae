"""OrderHistory aggregate — append-only record of resolved orders.

Entries are appended in resolution order and never edited afterwards.
Readers get frozen ``ResolvedOrder`` value objects, not the entries.
"""

import json
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.history.events import OrderRecorded


@storefront.value_object
class ResolvedOrder:
    """Read-only view of one order in the history."""

    order_id = String(required=True, max_length=50)
    status = String(required=True, max_length=20)
    total = Integer(required=True)
    lines = Text(required=True)  # JSON: list of {item_id, unit_price, quantity}
    created_at = DateTime(required=True)
    expires_at = DateTime(required=True)
    resolved_at = DateTime()
    reason = String(max_length=500)

    @property
    def line_items(self):
        return json.loads(self.lines)


@storefront.entity(part_of="OrderHistory")
class HistoryEntry:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    total = Integer(required=True)
    lines = Text(required=True)
    created_at = DateTime(required=True)
    expires_at = DateTime(required=True)
    resolved_at = DateTime()
    reason = String(max_length=500)
    position = Integer(default=0)


@storefront.aggregate
class OrderHistory:
    session_id = String(max_length=255)
    entries = HasMany(HistoryEntry)
    created_at = DateTime()

    @classmethod
    def create(cls, session_id=None):
        return cls(session_id=session_id, created_at=datetime.now(UTC))

    def append(self, order):
        """Record a resolved order at the end of the history."""
        if not order.is_terminal:
            raise ValidationError({"order": [f"Only resolved orders can be recorded, {order.id} is {order.status}"]})
        if any(str(entry.order_id) == str(order.id) for entry in (self.entries or [])):
            raise ValidationError({"order": [f"Order {order.id} is already recorded"]})

        position = len(self.entries or [])
        lines = [
            {"item_id": str(line.item_id), "unit_price": line.unit_price, "quantity": line.quantity}
            for line in order.ordered_lines()
        ]
        self.add_entries(
            HistoryEntry(
                order_id=str(order.id),
                status=order.status,
                total=order.total,
                lines=json.dumps(lines),
                created_at=order.created_at,
                expires_at=order.expires_at,
                resolved_at=order.resolved_at,
                reason=order.reason,
                position=position,
            )
        )
        self.raise_(
            OrderRecorded(
                history_id=str(self.id),
                order_id=str(order.id),
                status=order.status,
                position=position,
                recorded_at=datetime.now(UTC),
            )
        )

    def list(self):
        """Resolved orders, oldest resolution first."""
        return tuple(
            ResolvedOrder(
                order_id=entry.order_id,
                status=entry.status,
                total=entry.total,
                lines=entry.lines,
                created_at=entry.created_at,
                expires_at=entry.expires_at,
                resolved_at=entry.resolved_at,
                reason=entry.reason,
            )
            for entry in sorted(self.entries or [], key=lambda entry: entry.position)
        )
