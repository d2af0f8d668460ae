"""History creation — command and handler."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.history.history import OrderHistory


@storefront.command(part_of="OrderHistory")
class CreateHistory:
    session_id = String(max_length=255)


@storefront.command_handler(part_of=OrderHistory)
class ManageHistoryHandler:
    @handle(CreateHistory)
    def create_history(self, command):
        history = OrderHistory.create(session_id=command.session_id)
        current_domain.repository_for(OrderHistory).add(history)
        return str(history.id)
