"""Order store adapters.

- FakeOrderStore for development and testing
- RepositoryOrderStore for the ordering domain's own repository
"""

from ordering.order.store.fake_adapter import FakeOrderStore
from ordering.order.store.port import OrderStore
from ordering.order.store.repository_adapter import RepositoryOrderStore

__all__ = ["FakeOrderStore", "OrderStore", "RepositoryOrderStore"]
