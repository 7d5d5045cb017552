"""Catalog source port (abstract interface).

A catalog source runs one QueryDescriptor and returns a page of product
documents plus the cursor to resume after. Pagination is cursor based, never
offset based.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from catalogue.listing.query import PageCursor, QueryDescriptor


@dataclass(frozen=True)
class CatalogPage:
    """One page of catalog documents, in query order."""

    items: tuple[dict, ...]
    cursor: PageCursor | None = None

    def __len__(self) -> int:
        return len(self.items)


class CatalogSource(ABC):
    """Abstract catalog collaborator."""

    @abstractmethod
    async def fetch(self, descriptor: QueryDescriptor) -> CatalogPage:
        """Run ``descriptor`` and return the matching page.

        Raises ``CollaboratorError`` when the catalog cannot be reached.
        """
        ...
