"""Back-office order commands: delivery status changes and deletion."""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import DeliveryStatus, Order


@ordering.command(part_of="Order")
class UpdateDeliveryStatus:
    order_id = Identifier(required=True)
    delivery_status = String(required=True, choices=DeliveryStatus)
    location = String(max_length=255)
    notes = Text()


@ordering.command(part_of="Order")
class RemoveOrder:
    order_id = Identifier(required=True)


@ordering.command_handler(part_of=Order)
class OrderAdministrationHandler:
    @handle(UpdateDeliveryStatus)
    def update_delivery_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.change_delivery_status(
            command.delivery_status,
            location=command.location,
            notes=command.notes,
        )
        repo.add(order)

    @handle(RemoveOrder)
    def remove_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        repo._dao.delete(order)
