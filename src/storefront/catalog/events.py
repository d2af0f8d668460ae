"""Domain events for the CatalogItem aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="CatalogItem")
class CatalogItemListed:
    """An item was added to the catalog at session start."""

    __version__ = 1

    item_id = Identifier(required=True)
    name = String(required=True)
    price = Integer(required=True)
    stock = Integer(required=True)
    listed_at = DateTime(required=True)


@storefront.event(part_of="CatalogItem")
class StockDecremented:
    """Stock was permanently taken out of the catalog by a paid order."""

    __version__ = 1

    item_id = Identifier(required=True)
    order_id = Identifier()
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    decremented_at = DateTime(required=True)


@storefront.event(part_of="CatalogItem")
class ItemSoldOut:
    """Stock of an item reached zero."""

    __version__ = 1

    item_id = Identifier(required=True)
    sold_out_at = DateTime(required=True)
