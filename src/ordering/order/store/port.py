"""Order store port (abstract interface).

Checkout hands finished drafts to an order store and gets an order id back.
Fulfilment status and payment status are updated through separate calls.
"""

from abc import ABC, abstractmethod


class OrderStore(ABC):
    """Abstract order-storage collaborator."""

    @abstractmethod
    async def create(self, payload: dict) -> str:
        """Store a new order and return its identifier."""
        ...

    @abstractmethod
    async def update_status(self, order_id: str, status: str) -> None:
        """Move the order along the fulfilment axis."""
        ...

    @abstractmethod
    async def update_payment_status(self, order_id: str, payment_status: str) -> None:
        """Record a new payment status."""
        ...
