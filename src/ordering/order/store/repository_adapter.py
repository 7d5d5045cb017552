"""Order store backed by the ordering domain's PlacedOrder repository.

Requires an active ordering domain context. Payloads are turned into
commands and processed synchronously.
"""

import json

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from shared.exceptions import CollaboratorError

from ordering.order.management import PlaceOrder, UpdateOrderStatus, UpdatePaymentStatus
from ordering.order.store.port import OrderStore


class RepositoryOrderStore(OrderStore):
    async def create(self, payload: dict) -> str:
        command = PlaceOrder(
            user_id=payload["user_id"],
            user_email=payload.get("user_email"),
            draft_id=payload.get("draft_id"),
            items=json.dumps(payload["items"]),
            total=payload["total"],
            shipping=json.dumps(payload["shipping"]),
            payment_method=payload["payment"]["method"],
            notes=payload.get("notes"),
        )
        return current_domain.process(command, asynchronous=False)

    async def update_status(self, order_id: str, status: str) -> None:
        try:
            current_domain.process(UpdateOrderStatus(order_id=order_id, status=status), asynchronous=False)
        except ObjectNotFoundError as exc:
            raise CollaboratorError("order-store", f"Order {order_id} not found") from exc

    async def update_payment_status(self, order_id: str, payment_status: str) -> None:
        try:
            current_domain.process(
                UpdatePaymentStatus(order_id=order_id, payment_status=payment_status),
                asynchronous=False,
            )
        except ObjectNotFoundError as exc:
            raise CollaboratorError("order-store", f"Order {order_id} not found") from exc
