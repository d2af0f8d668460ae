"""Domain events for the Cart aggregate."""

from protean.fields import DateTime, Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="Cart")
class CartItemAdded:
    """One unit of an item was added to the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    unit_price = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartItemRemoved:
    """One unit of an item was taken out of the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    new_quantity = Integer(required=True)  # 0 when the line was dropped


@storefront.event(part_of="Cart")
class CartReserved:
    """The cart was checked out and is locked until the order resolves."""

    __version__ = 1

    cart_id = Identifier(required=True)
    order_id = Identifier(required=True)
    reserved_at = DateTime(required=True)


@storefront.event(part_of="Cart")
class CartCleared:
    """All lines were removed after the pending order resolved."""

    __version__ = 1

    cart_id = Identifier(required=True)
    order_id = Identifier()
    cleared_at = DateTime(required=True)
