"""Catalog source adapters.

- InMemoryCatalog for development and testing
"""

from catalogue.source.memory_adapter import InMemoryCatalog
from catalogue.source.port import CatalogPage, CatalogSource

__all__ = ["CatalogPage", "CatalogSource", "InMemoryCatalog"]
