"""Cart store port (abstract interface).

A key-value store holding the whole serialized cart under one key. It is
read once when the cart is restored and overwritten on every mutation, with
last-writer-wins semantics across sessions.
"""

from abc import ABC, abstractmethod


class CartStore(ABC):
    """Abstract persisted cart store."""

    @abstractmethod
    def load(self, key: str) -> str | None:
        """Return the payload stored under ``key``, or None if absent."""
        ...

    @abstractmethod
    def save(self, key: str, payload: str) -> None:
        """Replace the payload stored under ``key``."""
        ...
