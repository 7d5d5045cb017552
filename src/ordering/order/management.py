"""Order storage: commands and handler.

Places submitted drafts as orders and moves them along the fulfilment and
payment axes. Each axis has its own command so the two are updated
independently.
"""

import json

from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.checkout.shipping import ShippingInfo
from ordering.domain import ordering
from ordering.order.order import PlacedOrder


@ordering.command(part_of="PlacedOrder")
class PlaceOrder:
    user_id = Identifier(required=True)
    user_email = String(max_length=255)
    draft_id = Identifier()
    items = Text(required=True)  # JSON: list of line item dicts
    total = Integer(required=True, min_value=0)
    shipping = Text(required=True)  # JSON: shipping info dict
    payment_method = String(required=True)
    notes = Text()


@ordering.command(part_of="PlacedOrder")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True)


@ordering.command(part_of="PlacedOrder")
class UpdatePaymentStatus:
    order_id = Identifier(required=True)
    payment_status = String(required=True)


@ordering.command_handler(part_of=PlacedOrder)
class ManageOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        order = PlacedOrder.place(
            user_id=command.user_id,
            user_email=command.user_email,
            draft_id=command.draft_id,
            items=json.loads(command.items),
            total=command.total,
            shipping=ShippingInfo(**json.loads(command.shipping)),
            payment_method=command.payment_method,
            notes=command.notes,
        )
        current_domain.repository_for(PlacedOrder).add(order)
        return str(order.id)

    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(PlacedOrder)
        order = repo.get(command.order_id)
        order.transition_to(command.status)
        repo.add(order)

    @handle(UpdatePaymentStatus)
    def update_payment_status(self, command):
        repo = current_domain.repository_for(PlacedOrder)
        order = repo.get(command.order_id)
        order.record_payment_status(command.payment_status)
        repo.add(order)
