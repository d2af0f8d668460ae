"""Cart item management — commands and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.catalog.store import get_item
from storefront.domain import storefront


@storefront.command(part_of="Cart")
class AddItem:
    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class RemoveItem:
    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)


@storefront.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddItem)
    def add_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        item = get_item(command.item_id)
        added = cart.add_item(item)
        if added:
            repo.add(cart)
        return added

    @handle(RemoveItem)
    def remove_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        removed = cart.remove_item(command.item_id)
        if removed:
            repo.add(cart)
        return removed
