"""Domain events for the PlacedOrder aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="PlacedOrder")
class OrderPlaced:
    """A checkout draft was stored as an order."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    draft_id = Identifier()
    total = Integer(required=True)
    payment_method = String(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="PlacedOrder")
class OrderStatusChanged:
    """The order moved along the fulfilment axis."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)


@ordering.event(part_of="PlacedOrder")
class PaymentStatusChanged:
    """The order's payment status changed."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)
