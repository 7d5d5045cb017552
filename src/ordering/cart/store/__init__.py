"""Persisted cart store adapters.

- MemoryCartStore for development and testing
- FileCartStore for a single-user installation, one file per key
"""

from ordering.cart.store.file_adapter import FileCartStore
from ordering.cart.store.memory_adapter import MemoryCartStore
from ordering.cart.store.port import CartStore

__all__ = ["CartStore", "FileCartStore", "MemoryCartStore"]
