"""Error kinds surfaced by the storefront.

All of them are recoverable. Most leave the session as it was; OrderExpired
and InsufficientStock are raised after the order has been closed as
expired or failed.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError


class ItemNotFound(ObjectNotFoundError):
    """No catalog item exists with the requested identifier."""


class InsufficientStock(ValidationError):
    """Requested quantity exceeds the live stock of an item."""


class EmptyCart(ValidationError):
    """Checkout was attempted on a cart without lines."""


class OrderAlreadyPending(ValidationError):
    """Another order is still pending in this session."""


class OrderExpired(ValidationError):
    """The reservation window of the order has already closed."""


class NoPendingOrder(ValidationError):
    """Pay or cancel was requested without a pending order."""
