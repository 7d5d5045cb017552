"""In-process cart store for development and testing."""

from shared.exceptions import CollaboratorError

from ordering.cart.store.port import CartStore


class MemoryCartStore(CartStore):
    """Dict-backed cart store that can be told to fail on writes."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})
        self.writes: list[tuple[str, str]] = []
        self.should_fail: bool = False

    def configure(self, should_fail: bool) -> None:
        """Configure store behavior at runtime."""
        self.should_fail = should_fail

    def load(self, key: str) -> str | None:
        return self.data.get(key)

    def save(self, key: str, payload: str) -> None:
        if self.should_fail:
            raise CollaboratorError("cart-store", "Write rejected")
        self.writes.append((key, payload))
        self.data[key] = payload
