"""PlacedOrder aggregate (CQRS): a submitted checkout as kept by order storage.

An order moves along two independent axes:

Fulfilment:
    PROCESSING → SHIPPED → COMPLETED
    PROCESSING / SHIPPED → CANCELLED

Payment:
    PENDING ⇄ PAID ⇄ FAILED (any value may follow any other)

Setting an axis to its current value is a no-op and raises no event.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String, Text, ValueObject

from ordering.checkout.shipping import PaymentMethod, ShippingInfo
from ordering.domain import ordering
from ordering.order.events import OrderPlaced, OrderStatusChanged, PaymentStatusChanged


class OrderStatus(Enum):
    PROCESSING = "processing"
    SHIPPED = "shipped"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


_VALID_TRANSITIONS = {
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.COMPLETED, OrderStatus.CANCELLED},
    OrderStatus.COMPLETED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


def _parse(enum_cls, value, field_name):
    try:
        return enum_cls(value.value if isinstance(value, enum_cls) else str(value).lower())
    except ValueError:
        raise ValidationError({field_name: [f"Unknown {field_name.replace('_', ' ')}: {value}"]}) from None


@ordering.aggregate
class PlacedOrder:
    user_id = Identifier(required=True)
    user_email = String(max_length=255)
    draft_id = Identifier()
    items = Text(required=True)  # JSON: list of line item dicts
    total = Integer(required=True, min_value=0)
    shipping = ValueObject(ShippingInfo)
    payment_method = String(choices=PaymentMethod, default=PaymentMethod.TRANSFER.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    status = String(choices=OrderStatus, default=OrderStatus.PROCESSING.value)
    notes = Text()
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, items, total, shipping, payment_method, notes=None, user_email=None, draft_id=None):
        if not items:
            raise ValidationError({"items": ["An order needs at least one line item"]})

        now = datetime.now(UTC)
        order = cls(
            user_id=user_id,
            user_email=user_email,
            draft_id=draft_id,
            items=json.dumps(items),
            total=total,
            shipping=shipping,
            payment_method=payment_method,
            payment_status=PaymentStatus.PENDING.value,
            status=OrderStatus.PROCESSING.value,
            notes=notes,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                draft_id=draft_id,
                total=total,
                payment_method=order.payment_method,
                placed_at=now,
            )
        )
        return order

    @property
    def line_items(self):
        return json.loads(self.items) if self.items else []

    # -------------------------------------------------------------------
    # Fulfilment axis
    # -------------------------------------------------------------------
    def transition_to(self, new_status):
        target = _parse(OrderStatus, new_status, "status")
        current = OrderStatus(self.status)
        if target == current:
            return
        if target not in _VALID_TRANSITIONS[current]:
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target.value}"]})

        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now
        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=current.value,
                new_status=target.value,
                changed_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Payment axis
    # -------------------------------------------------------------------
    def record_payment_status(self, new_status):
        target = _parse(PaymentStatus, new_status, "payment_status")
        current = PaymentStatus(self.payment_status)
        if target == current:
            return

        now = datetime.now(UTC)
        self.payment_status = target.value
        self.updated_at = now
        self.raise_(
            PaymentStatusChanged(
                order_id=str(self.id),
                previous_status=current.value,
                new_status=target.value,
                changed_at=now,
            )
        )
