"""Domain events for the OrderHistory aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="OrderHistory")
class OrderRecorded:
    """A resolved order was appended to the session's history."""

    __version__ = 1

    history_id = Identifier(required=True)
    order_id = Identifier(required=True)
    status = String(required=True)
    position = Integer(required=True)
    recorded_at = DateTime(required=True)
