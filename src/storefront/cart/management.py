"""Cart creation — command and handler."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import storefront


@storefront.command(part_of="Cart")
class CreateCart:
    """Open an empty cart for a new session."""

    session_id = String(max_length=255)


@storefront.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(CreateCart)
    def create_cart(self, command):
        cart = Cart.create(session_id=command.session_id)
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)
