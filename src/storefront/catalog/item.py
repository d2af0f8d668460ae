"""CatalogItem aggregate — one purchasable item with its live stock count.

Everything except ``stock`` is fixed once the item is listed. Stock only ever
goes down, and only through ``decrement_stock`` when an order is paid.
"""

from datetime import UTC, datetime

from protean.fields import Float, Integer, String, Text

from storefront.catalog.events import CatalogItemListed, ItemSoldOut, StockDecremented
from storefront.domain import storefront
from storefront.exceptions import InsufficientStock


@storefront.aggregate
class CatalogItem:
    name = String(required=True, max_length=255)
    price = Integer(required=True, min_value=1)
    stock = Integer(required=True, min_value=0)
    description = Text()
    image_ref = String(max_length=255)
    category = String(max_length=100)
    rating = Float()
    position = Integer(default=0)  # Display order within the catalog

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        item_id,
        name,
        price,
        stock,
        description=None,
        image_ref=None,
        category=None,
        rating=None,
        position=0,
    ):
        item = cls(
            id=str(item_id),
            name=name,
            price=price,
            stock=stock,
            description=description,
            image_ref=image_ref,
            category=category,
            rating=rating,
            position=position,
        )
        item.raise_(
            CatalogItemListed(
                item_id=str(item.id),
                name=name,
                price=price,
                stock=stock,
                listed_at=datetime.now(UTC),
            )
        )
        return item

    # -------------------------------------------------------------------
    # Stock
    # -------------------------------------------------------------------
    def can_supply(self, quantity):
        """True when ``quantity`` units can be taken from live stock."""
        return 0 <= quantity <= self.stock

    def decrement_stock(self, amount, order_id=None):
        """Permanently remove ``amount`` units from stock."""
        if not self.can_supply(amount):
            raise InsufficientStock(
                {"stock": [f"Insufficient stock for item {self.id}: {self.stock} available, {amount} requested"]}
            )

        previous = self.stock
        self.stock = previous - amount
        now = datetime.now(UTC)

        self.raise_(
            StockDecremented(
                item_id=str(self.id),
                order_id=str(order_id) if order_id else None,
                quantity=amount,
                previous_stock=previous,
                new_stock=self.stock,
                decremented_at=now,
            )
        )
        if self.stock == 0 and amount > 0:
            self.raise_(ItemSoldOut(item_id=str(self.id), sold_out_at=now))
