"""Configurable fake order store for development and testing.

Keeps orders in memory and can be switched to fail, so checkout retry paths
can be exercised without a backing store.
"""

from uuid import uuid4

from shared.exceptions import CollaboratorError

from ordering.order.store.port import OrderStore


class FakeOrderStore(OrderStore):
    """Configurable fake order store."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Order storage unavailable"
        self.orders: dict[str, dict] = {}
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Order storage unavailable") -> None:
        """Configure store behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def _check(self) -> None:
        if not self.should_succeed:
            raise CollaboratorError("order-store", self.failure_reason)

    def _get(self, order_id: str) -> dict:
        try:
            return self.orders[order_id]
        except KeyError:
            raise CollaboratorError("order-store", f"Order {order_id} not found") from None

    async def create(self, payload: dict) -> str:
        self.calls.append({"method": "create", "payload": payload})
        self._check()

        order_id = f"fake_ord_{uuid4().hex[:12]}"
        self.orders[order_id] = {
            **payload,
            "payment": dict(payload.get("payment") or {}),
        }
        return order_id

    async def update_status(self, order_id: str, status: str) -> None:
        self.calls.append({"method": "update_status", "order_id": order_id, "status": status})
        self._check()
        self._get(order_id)["status"] = status

    async def update_payment_status(self, order_id: str, payment_status: str) -> None:
        self.calls.append(
            {"method": "update_payment_status", "order_id": order_id, "payment_status": payment_status}
        )
        self._check()
        self._get(order_id)["payment"]["status"] = payment_status
